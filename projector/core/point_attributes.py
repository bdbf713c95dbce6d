"""
Point color and scale resolvers.

Both resolvers layer their rules in the same order, each layer
overwriting the one before:

    base -> selected -> neighbors -> hover

so the hover point always wins, whatever else it belongs to.
"""

from typing import Callable, Iterable, Optional, Tuple

import numpy as np

from projector.config import DEFAULT_STYLES, StyleConfig
from .colors import neighbor_color, normalize_dist, parse_color
from .models import DataSet, DisplayMode, NearestEntry
from .validation import check_hover, check_neighbors, check_selection

# index -> color, or None for "no opinion"
LegendColorer = Callable[[int], object]


def base_colors(styles: StyleConfig, display_mode: DisplayMode) -> Tuple[str, str]:
    """(unselected, no_selection) colors for a display mode."""
    if display_mode == DisplayMode.SPRITE_IMAGE:
        return styles.sprite_image_color_unselected, styles.sprite_image_color_no_selection
    if display_mode == DisplayMode.LABELS_3D:
        return styles.labels_3d_color_unselected, styles.labels_3d_color_no_selection
    return styles.point_color_unselected, styles.point_color_no_selection


def compute_colors(
    data_set: Optional[DataSet],
    legend_colorer: Optional[LegendColorer],
    selection: Optional[Iterable[int]],
    hover: Optional[int],
    display_mode: DisplayMode = DisplayMode.PLAIN,
    neighbors: Optional[Iterable[NearestEntry]] = None,
    distance_metric: str = 'euclidean',
    styles: StyleConfig = None,
) -> np.ndarray:
    """
    Flat RGB buffer [r0, g0, b0, r1, ...] with one color per point.

    Base pass: with a selection every point gets the mode's unselected
    color; without one, the legend colorer decides (None falls back to
    the mode's no-selection color), or the no-selection color when there
    is no colorer. Selected, neighbor and hover overlays follow.
    """
    styles = styles or DEFAULT_STYLES
    if data_set is None:
        return np.zeros(0, dtype=np.float32)

    selection = check_selection(data_set, selection)
    hover = check_hover(data_set, hover)
    neighbors = check_neighbors(data_set, neighbors)

    n = len(data_set.points)
    colors = np.zeros((n, 3), dtype=np.float32)

    unselected_color, no_selection_color = base_colors(styles, display_mode)

    # 1. Base colors
    if selection:
        colors[:] = parse_color(unselected_color)
    elif legend_colorer is not None:
        fallback = parse_color(no_selection_color)
        for i in range(n):
            c = legend_colorer(i)
            colors[i] = fallback if c is None else parse_color(c)
    else:
        colors[:] = parse_color(no_selection_color)

    # 2. Selected points
    if selection:
        colors[selection] = parse_color(styles.point_color_selected)

    # 3. Neighbors of the first selected point, by distance
    if neighbors:
        min_dist = neighbors[0].dist
        for entry in neighbors:
            t = normalize_dist(distance_metric, entry.dist, min_dist)
            colors[entry.index] = neighbor_color(
                t, styles.neighbor_color_domain, styles.neighbor_color_range
            )

    # 4. Hover point
    if hover is not None:
        colors[hover] = parse_color(styles.point_color_hover)

    return colors.reshape(-1)


def compute_scales(
    data_set: Optional[DataSet],
    selection: Optional[Iterable[int]],
    hover: Optional[int],
    neighbors: Optional[Iterable[NearestEntry]] = None,
    styles: StyleConfig = None,
) -> np.ndarray:
    """One size multiplier per point."""
    styles = styles or DEFAULT_STYLES
    if data_set is None:
        return np.zeros(0, dtype=np.float32)

    selection = check_selection(data_set, selection)
    hover = check_hover(data_set, hover)
    neighbors = check_neighbors(data_set, neighbors)

    scale = np.full(len(data_set.points), styles.point_scale_default, dtype=np.float32)

    if selection:
        scale[selection] = styles.point_scale_selected

    for entry in neighbors:
        scale[entry.index] = styles.point_scale_neighbor

    if hover is not None:
        scale[hover] = styles.point_scale_hover

    return scale
