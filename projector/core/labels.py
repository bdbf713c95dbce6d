"""
Label Selector
==============

Chooses which points carry a text label and packs their styling into
flat buffers.

Slot order: the hover point first, then the selection in selection
order, then the nearest neighbors of the first selected point. Each
point is labelled at most once, in the first slot that claims it, so a
point that is both hovered and selected is a hover label only.

A lone selected point (exactly one selected, not hovered) gets its
scene-opacity flag cleared. This is long-standing display behavior and
is kept as is.
"""

from typing import Iterable, List, Optional

import numpy as np

from projector.config import DEFAULT_STYLES, StyleConfig
from .colors import rgb_bytes
from .models import DataSet, LabelRenderParams, NearestEntry
from .validation import check_hover, check_neighbors, check_selection


def get_label_text(data_set: DataSet, index: int, accessor: Optional[str]) -> str:
    """Metadata value of `accessor` for point `index` as text, '' if absent."""
    if accessor is None:
        return ''
    value = data_set.points[index].metadata.get(accessor)
    if value is None:
        return ''
    return str(value)


def generate_3d_labels(data_set: Optional[DataSet], label_accessor: Optional[str]) -> Optional[List[str]]:
    """Label text for every point, used when labels are drawn in 3D."""
    if data_set is None or label_accessor is None:
        return None
    return [get_label_text(data_set, i, label_accessor) for i in range(len(data_set.points))]


def compute_visible_labels(
    data_set: Optional[DataSet],
    selection: Optional[Iterable[int]],
    hover: Optional[int],
    styles: StyleConfig = None,
    neighbors: Optional[Iterable[NearestEntry]] = None,
    label_accessor: Optional[str] = None,
) -> LabelRenderParams:
    styles = styles or DEFAULT_STYLES
    if data_set is None:
        return LabelRenderParams.empty(styles.label_font_size)

    selection = check_selection(data_set, selection)
    hover = check_hover(data_set, hover)
    neighbors = check_neighbors(data_set, neighbors)
    accessor = label_accessor if label_accessor is not None else styles.label_accessor

    # (index, scale, opacity flag, fill, stroke)
    slots = []
    claimed = set()

    if hover is not None:
        slots.append((
            hover,
            styles.label_scale_large,
            1,
            styles.label_fill_color_hover,
            styles.label_stroke_color_hover,
        ))
        claimed.add(hover)

    lone_selection = len(selection) == 1
    for index in selection:
        if index in claimed:
            continue
        slots.append((
            index,
            styles.label_scale_large,
            0 if lone_selection else 1,
            styles.label_fill_color_selected,
            styles.label_stroke_color_selected,
        ))
        claimed.add(index)

    for entry in neighbors:
        if entry.index in claimed:
            continue
        slots.append((
            entry.index,
            styles.label_scale_default,
            1,
            styles.label_fill_color_neighbor,
            styles.label_stroke_color_neighbor,
        ))
        claimed.add(entry.index)

    n = len(slots)
    point_indices = np.zeros(n, dtype=np.uint32)
    scale_factors = np.zeros(n, dtype=np.float32)
    opacity_flags = np.ones(n, dtype=np.int8)
    fill_colors = np.zeros(n * 3, dtype=np.uint8)
    stroke_colors = np.zeros(n * 3, dtype=np.uint8)
    label_strings = []

    for dst, (index, scale, flag, fill, stroke) in enumerate(slots):
        point_indices[dst] = index
        scale_factors[dst] = scale
        opacity_flags[dst] = flag
        fill_colors[dst * 3:dst * 3 + 3] = rgb_bytes(fill)
        stroke_colors[dst * 3:dst * 3 + 3] = rgb_bytes(stroke)
        label_strings.append(get_label_text(data_set, index, accessor))

    return LabelRenderParams(
        point_indices=point_indices,
        label_strings=label_strings,
        scale_factors=scale_factors,
        use_scene_opacity_flags=opacity_flags,
        default_font_size=styles.label_font_size,
        fill_colors=fill_colors,
        stroke_colors=stroke_colors,
    )
