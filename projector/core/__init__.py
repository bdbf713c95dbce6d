"""
Point-cloud attribute synthesis.

Pure functions from (data set, interaction state, styles) to the flat
arrays a renderer draws. Nothing here keeps state between calls.

Example:
    >>> from projector.core import DataSet, compute_positions, compute_colors
    >>> ds = DataSet.from_arrays([[0, 0], [1, 2], [2, 4]])
    >>> compute_positions(ds)  # x/y in [-1, 1], z = 0
    >>> compute_colors(ds, None, selection=[1], hover=2)
"""

from .models import (
    DataSet,
    DisplayMode,
    LabelRenderParams,
    NearestEntry,
    Point,
    SceneArrays,
    Sequence,
)
from .geometry import compute_positions, extent, scale_linear
from .point_attributes import LegendColorer, base_colors, compute_colors, compute_scales
from .labels import compute_visible_labels, generate_3d_labels, get_label_text
from .polylines import (
    compute_segment_colors,
    compute_segment_opacities,
    compute_segment_widths,
    default_polyline_color,
    polyline_hue,
)

__all__ = [
    # Models
    'DataSet',
    'DisplayMode',
    'LabelRenderParams',
    'NearestEntry',
    'Point',
    'SceneArrays',
    'Sequence',
    # Geometry
    'compute_positions',
    'extent',
    'scale_linear',
    # Points
    'LegendColorer',
    'base_colors',
    'compute_colors',
    'compute_scales',
    # Labels
    'compute_visible_labels',
    'generate_3d_labels',
    'get_label_text',
    # Polylines
    'compute_segment_colors',
    'compute_segment_opacities',
    'compute_segment_widths',
    'default_polyline_color',
    'polyline_hue',
]
