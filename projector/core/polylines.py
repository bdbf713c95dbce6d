"""
Sequence (polyline) resolvers.

Colors are per segment endpoint; opacity and width are per sequence.
Only the sequence holding the first selected point is ever highlighted.
"""

from typing import Dict, Iterable, Optional

import numpy as np

from projector.config import DEFAULT_STYLES, StyleConfig
from .colors import RGB, hsl_to_rgb, parse_color
from .models import DataSet
from .point_attributes import LegendColorer
from .validation import check_selection


def polyline_hue(position: int, n_points: int, styles: StyleConfig = None) -> float:
    """Hue in degrees of point `position` of an `n_points` sequence."""
    styles = styles or DEFAULT_STYLES
    t = position / (n_points - 1) if n_points > 1 else 0.0
    return styles.polyline_start_hue + (styles.polyline_end_hue - styles.polyline_start_hue) * t


def default_polyline_color(position: int, n_points: int, styles: StyleConfig = None) -> RGB:
    """Rainbow ramp from the start hue (first point) to the end hue (last point)."""
    styles = styles or DEFAULT_STYLES
    return hsl_to_rgb(
        polyline_hue(position, n_points, styles),
        styles.polyline_saturation,
        styles.polyline_lightness,
    )


def compute_segment_colors(
    data_set: Optional[DataSet],
    legend_colorer: Optional[LegendColorer],
    styles: StyleConfig = None,
) -> Dict[int, np.ndarray]:
    """
    Map of sequence index -> flat color array, two RGB endpoints per segment.

    A sequence of n points has n - 1 segments, so 6 * (n - 1) floats.
    """
    styles = styles or DEFAULT_STYLES
    result: Dict[int, np.ndarray] = {}
    if data_set is None:
        return result

    for s, sequence in enumerate(data_set.sequences):
        indices = sequence.point_indices
        n = len(indices)

        point_colors = []
        for j, point_index in enumerate(indices):
            c = legend_colorer(point_index) if legend_colorer is not None else None
            point_colors.append(
                default_polyline_color(j, n, styles) if c is None else parse_color(c)
            )

        colors = np.zeros((sequence.n_segments, 2, 3), dtype=np.float32)
        for j in range(sequence.n_segments):
            colors[j, 0] = point_colors[j]
            colors[j, 1] = point_colors[j + 1]
        result[s] = colors.reshape(-1)

    return result


def _first_selected_sequence(data_set: DataSet, selection: Iterable[int]) -> Optional[int]:
    selection = check_selection(data_set, selection)
    if not selection:
        return None
    return data_set.points[selection[0]].sequence_index


def compute_segment_opacities(
    data_set: Optional[DataSet],
    selection: Optional[Iterable[int]],
    styles: StyleConfig = None,
) -> np.ndarray:
    styles = styles or DEFAULT_STYLES
    if data_set is None:
        return np.zeros(0, dtype=np.float32)

    selection = check_selection(data_set, selection)
    n = len(data_set.sequences)

    if not selection:
        return np.full(n, styles.polyline_default_opacity, dtype=np.float32)

    opacities = np.full(n, styles.polyline_deselected_opacity, dtype=np.float32)
    s = _first_selected_sequence(data_set, selection)
    if s is not None:
        opacities[s] = styles.polyline_selected_opacity
    return opacities


def compute_segment_widths(
    data_set: Optional[DataSet],
    selection: Optional[Iterable[int]],
    styles: StyleConfig = None,
) -> np.ndarray:
    styles = styles or DEFAULT_STYLES
    if data_set is None:
        return np.zeros(0, dtype=np.float32)

    widths = np.full(len(data_set.sequences), styles.polyline_default_linewidth, dtype=np.float32)
    s = _first_selected_sequence(data_set, selection)
    if s is not None:
        widths[s] = styles.polyline_selected_linewidth
    return widths
