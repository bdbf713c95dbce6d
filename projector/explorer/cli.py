"""
Projector Explorer CLI
======================

Command-line interface for point-cloud visualization.
"""

import argparse
import logging
from pathlib import Path

from projector.config import DEFAULT_STYLES, load_style_config
from .loader import DataSetLoader
from .projector import Projector
from .renderer import MatplotlibScatterPlot


def _parse_indices(value: str):
    if not value:
        return []
    return [int(x) for x in value.split(',') if x.strip()]


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Projector Explorer - Render a projected point cloud'
    )
    parser.add_argument(
        'data',
        help='Parquet or CSV file with x, y[, z] columns'
    )
    parser.add_argument(
        '-o', '--output',
        help='Output file path (png, pdf, svg)'
    )
    parser.add_argument(
        '--select',
        type=str,
        default='',
        help='Comma-separated point indices to select (e.g., "3,7,12")'
    )
    parser.add_argument(
        '--hover',
        type=int,
        default=None,
        help='Point index to treat as hovered'
    )
    parser.add_argument(
        '--label-field',
        default=DEFAULT_STYLES.label_accessor,
        help='Metadata column used for label text'
    )
    parser.add_argument(
        '--sequence-column',
        default=None,
        help='Column grouping rows into polylines'
    )
    parser.add_argument(
        '--order-column',
        default=None,
        help='Column ordering points along each polyline'
    )
    parser.add_argument(
        '--sprite-image',
        default=None,
        help='Sprite sheet path (switches to sprite-image colors)'
    )
    parser.add_argument(
        '--labels-3d',
        action='store_true',
        help='Draw every point label in 3D label mode'
    )
    parser.add_argument(
        '--styles',
        default=None,
        help='YAML file of style overrides'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List points and exit'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    styles = load_style_config(args.styles) if args.styles else DEFAULT_STYLES

    print(f"Loading from {args.data}...")
    loader = DataSetLoader(
        Path(args.data),
        sequence_column=args.sequence_column,
        order_column=args.order_column,
        sprite_image=Path(args.sprite_image) if args.sprite_image else None,
    )
    data_set = loader.load()

    if args.list:
        print(f"\nPoints ({len(data_set.points)}):")
        for p in data_set.points:
            label = p.metadata.get(args.label_field, '')
            print(f"  {p.index}: {label}")
        return

    scatter_plot = MatplotlibScatterPlot(title=Path(args.data).stem)
    projector = Projector(scatter_plot, styles=styles, render_labels_in_3d=args.labels_3d)
    projector.set_label_accessor(args.label_field)
    projector.set_data_set(data_set)
    projector.set_selection(_parse_indices(args.select))
    if args.hover is not None:
        projector.set_hover(args.hover)

    print(f"\nProjection:")
    print(f"  Points:     {len(data_set.points)}")
    print(f"  Dimensions: {data_set.dimensions}")
    print(f"  Sequences:  {len(data_set.sequences)}")
    print(f"  Mode:       {projector.display_mode}")
    print(f"  Selected:   {projector.selection}")
    print(f"  Hover:      {projector.hover}")

    labels = projector.snapshot().labels
    if len(labels):
        print(f"\nVisible labels:")
        for index, text in zip(labels.point_indices, labels.label_strings):
            print(f"  {index}: {text}")

    projector.render(output_path=args.output, show=not args.output)


if __name__ == '__main__':
    main()
