"""
Projector Controller
====================

Holds the current data set and interaction state and pushes freshly
computed arrays to a scatter plot whenever either changes.
"""

import logging
from typing import Callable, Iterable, List, Optional

from projector.config import DEFAULT_STYLES, StyleConfig
from projector.core import (
    DataSet,
    DisplayMode,
    LegendColorer,
    NearestEntry,
    SceneArrays,
    compute_colors,
    compute_positions,
    compute_scales,
    compute_segment_colors,
    compute_segment_opacities,
    compute_segment_widths,
    compute_visible_labels,
    generate_3d_labels,
)
from projector.core.validation import check_hover, check_neighbors, check_selection

logger = logging.getLogger(__name__)


class Projector:
    """
    Interprets projector events and assembles the arrays a scatter plot
    needs to draw the current data set.

    `scatter_plot` is any object with the set_* / render methods of
    MatplotlibScatterPlot.
    """

    def __init__(
        self,
        scatter_plot,
        styles: StyleConfig = None,
        on_hover: Optional[Callable[[Optional[int]], None]] = None,
        on_select: Optional[Callable[[List[int]], None]] = None,
        render_labels_in_3d: bool = False,
        distance_metric: str = 'euclidean',
    ):
        self.scatter_plot = scatter_plot
        self.styles = styles or DEFAULT_STYLES
        self.on_hover = on_hover
        self.on_select = on_select
        self.render_labels_in_3d = render_labels_in_3d
        self.distance_metric = distance_metric

        self.data_set: Optional[DataSet] = None
        self.selection: List[int] = []
        self.hover: Optional[int] = None
        self.neighbors: List[NearestEntry] = []
        self.legend_colorer: Optional[LegendColorer] = None
        self.label_accessor: str = self.styles.label_accessor

    # =========================================================
    # State changes
    # =========================================================

    @property
    def display_mode(self) -> DisplayMode:
        sprite_image_mode = self.data_set is not None and self.data_set.sprite_image is not None
        return DisplayMode.from_flags(self.render_labels_in_3d, sprite_image_mode)

    def set_data_set(self, data_set: Optional[DataSet]):
        """Swap the data set. Interaction state is cleared."""
        self.data_set = data_set
        self.selection = []
        self.hover = None
        self.neighbors = []

        if data_set is None:
            logger.info("Data set cleared")
        else:
            logger.info(
                f"Data set set: {len(data_set.points)} points, "
                f"{len(data_set.sequences)} sequences, {data_set.dimensions}D"
            )
            self.scatter_plot.set_dimensions(data_set.dimensions)

        self.scatter_plot.set_sequences(data_set.sequences if data_set is not None else ())
        self._update_labels_3d()
        self.update_positions()
        self.update_attributes()

    def set_selection(self, selection: Iterable[int], neighbors: Optional[Iterable[NearestEntry]] = None):
        """Replace the selection; `neighbors` are those of its first point."""
        if self.data_set is None:
            selection, neighbors = [], []
        else:
            selection = check_selection(self.data_set, selection)
            neighbors = check_neighbors(self.data_set, neighbors)

        self.selection = selection
        self.neighbors = neighbors if selection else []
        logger.debug(f"Selection: {self.selection} ({len(self.neighbors)} neighbors)")

        if self.on_select:
            self.on_select(list(self.selection))
        self.update_attributes()

    def set_hover(self, hover: Optional[int]):
        if self.data_set is None:
            hover = None
        else:
            hover = check_hover(self.data_set, hover)

        self.hover = hover
        logger.debug(f"Hover: {hover}")

        if self.on_hover:
            self.on_hover(hover)
        self.update_attributes()

    def set_legend_colorer(self, legend_colorer: Optional[LegendColorer]):
        self.legend_colorer = legend_colorer
        self.update_attributes()

    def set_label_accessor(self, label_accessor: str):
        self.label_accessor = label_accessor
        self._update_labels_3d()
        self.update_attributes()

    def set_render_labels_in_3d(self, render_labels_in_3d: bool):
        self.render_labels_in_3d = render_labels_in_3d
        self._update_labels_3d()
        self.update_attributes()

    # =========================================================
    # Array synthesis
    # =========================================================

    def snapshot(self) -> SceneArrays:
        """Every array for the current state, computed from scratch."""
        ds = self.data_set
        return SceneArrays(
            positions=compute_positions(ds, self.styles),
            colors=compute_colors(
                ds,
                self.legend_colorer,
                self.selection,
                self.hover,
                display_mode=self.display_mode,
                neighbors=self.neighbors,
                distance_metric=self.distance_metric,
                styles=self.styles,
            ),
            scales=compute_scales(ds, self.selection, self.hover, neighbors=self.neighbors, styles=self.styles),
            labels=compute_visible_labels(
                ds,
                self.selection,
                self.hover,
                styles=self.styles,
                neighbors=self.neighbors,
                label_accessor=self.label_accessor,
            ),
            polyline_colors=compute_segment_colors(ds, self.legend_colorer, self.styles),
            polyline_opacities=compute_segment_opacities(ds, self.selection, self.styles),
            polyline_widths=compute_segment_widths(ds, self.selection, self.styles),
        )

    def update_positions(self):
        self.scatter_plot.set_point_positions(compute_positions(self.data_set, self.styles))

    def update_attributes(self):
        scene = self.snapshot()
        self.scatter_plot.set_point_colors(scene.colors)
        self.scatter_plot.set_point_scale_factors(scene.scales)
        self.scatter_plot.set_labels(scene.labels)
        self.scatter_plot.set_polyline_colors(scene.polyline_colors)
        self.scatter_plot.set_polyline_opacities(scene.polyline_opacities)
        self.scatter_plot.set_polyline_widths(scene.polyline_widths)

    def render(self, **kwargs):
        return self.scatter_plot.render(**kwargs)

    def _update_labels_3d(self):
        if self.render_labels_in_3d:
            labels = generate_3d_labels(self.data_set, self.label_accessor)
        else:
            labels = None
        self.scatter_plot.set_labels_3d(labels)
