"""
Projector Scatter Plot Renderer
===============================

Draw the synthesized arrays with matplotlib.
Zero calculations: just draw what's there.
"""

from typing import Dict, List, Optional, Sequence as SequenceType

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patheffects as path_effects
from matplotlib.collections import LineCollection
from mpl_toolkits.mplot3d.art3d import Line3DCollection

from projector.core import LabelRenderParams, Sequence

POINT_SIZE = 40.0
LABEL_3D_FONT_SIZE = 6
# Labels that follow scene opacity are drawn slightly faded
SCENE_LABEL_ALPHA = 0.85


class MatplotlibScatterPlot:
    """Scatter-plot collaborator for Projector, backed by matplotlib."""

    def __init__(self, figsize=(12, 10), title: Optional[str] = None):
        self.figsize = figsize
        self.title = title

        self.dimensions = 3
        self.sequences: SequenceType[Sequence] = ()
        self.positions = np.zeros(0, dtype=np.float32)
        self.colors = np.zeros(0, dtype=np.float32)
        self.scale_factors = np.zeros(0, dtype=np.float32)
        self.labels: Optional[LabelRenderParams] = None
        self.labels_3d: Optional[List[str]] = None
        self.polyline_colors: Dict[int, np.ndarray] = {}
        self.polyline_opacities = np.zeros(0, dtype=np.float32)
        self.polyline_widths = np.zeros(0, dtype=np.float32)

    # =========================================================
    # Collaborator interface
    # =========================================================

    def set_dimensions(self, dimensions: int):
        self.dimensions = dimensions

    def set_sequences(self, sequences: SequenceType[Sequence]):
        self.sequences = tuple(sequences)

    def set_point_positions(self, positions: np.ndarray):
        self.positions = positions

    def set_point_colors(self, colors: np.ndarray):
        self.colors = colors

    def set_point_scale_factors(self, scale_factors: np.ndarray):
        self.scale_factors = scale_factors

    def set_labels(self, labels: LabelRenderParams):
        self.labels = labels

    def set_labels_3d(self, labels: Optional[List[str]]):
        self.labels_3d = labels

    def set_polyline_colors(self, colors: Dict[int, np.ndarray]):
        self.polyline_colors = colors

    def set_polyline_opacities(self, opacities: np.ndarray):
        self.polyline_opacities = opacities

    def set_polyline_widths(self, widths: np.ndarray):
        self.polyline_widths = widths

    # =========================================================
    # Drawing
    # =========================================================

    def render(self, output_path: Optional[str] = None, show: bool = True):
        """Render the current arrays to a figure."""
        is_3d = self.dimensions == 3
        fig = plt.figure(figsize=self.figsize)
        ax = fig.add_subplot(111, projection='3d') if is_3d else fig.add_subplot(111)

        xyz = self.positions.reshape(-1, 3)
        rgb = self.colors.reshape(-1, 3)

        # 1. Polylines (under the points)
        self._draw_polylines(ax, xyz, is_3d)

        # 2. Points
        if len(xyz) > 0:
            sizes = self.scale_factors * POINT_SIZE
            if is_3d:
                ax.scatter(xyz[:, 0], xyz[:, 1], xyz[:, 2], c=rgb, s=sizes, depthshade=False)
            else:
                ax.scatter(xyz[:, 0], xyz[:, 1], c=rgb, s=sizes, zorder=3)

        # 3. Per-point labels (3D label mode)
        if self.labels_3d:
            for i, text in enumerate(self.labels_3d):
                if text:
                    self._draw_text(ax, xyz[i], text, LABEL_3D_FONT_SIZE, 'black', is_3d)

        # 4. Visible labels
        if self.labels is not None:
            self._draw_labels(ax, xyz, is_3d)

        half = 1.05
        ax.set_xlim(-half, half)
        ax.set_ylim(-half, half)
        if is_3d:
            ax.set_zlim(-half, half)
        else:
            ax.set_aspect('equal')
            ax.grid(True, alpha=0.3)

        if self.title:
            ax.set_title(self.title, fontsize=14)

        plt.tight_layout()

        if output_path:
            plt.savefig(output_path, dpi=150, bbox_inches='tight')
            print(f"Saved: {output_path}")

        if show and not output_path:
            plt.show()

        return fig

    @staticmethod
    def _split_segments(pts: np.ndarray, seg_colors: Optional[np.ndarray]):
        """
        Split every segment at its midpoint so both endpoint colors show.

        Returns (2 * n_segments) half-segments and their colors: the first
        half takes the start color, the second half the end color.
        """
        mid = (pts[:-1] + pts[1:]) / 2.0
        halves = np.stack([
            np.stack([pts[:-1], mid], axis=1),
            np.stack([mid, pts[1:]], axis=1),
        ], axis=1).reshape(-1, 2, pts.shape[1])

        if seg_colors is None:
            return halves, 'gray'
        return halves, seg_colors.reshape(-1, 3)

    def _draw_polylines(self, ax, xyz: np.ndarray, is_3d: bool):
        for s, sequence in enumerate(self.sequences):
            if sequence.n_segments == 0:
                continue
            idx = np.asarray(sequence.point_indices)
            pts = xyz[idx] if is_3d else xyz[idx, :2]
            segments, colors = self._split_segments(pts, self.polyline_colors.get(s))
            alpha = float(self.polyline_opacities[s]) if s < len(self.polyline_opacities) else 1.0
            width = float(self.polyline_widths[s]) if s < len(self.polyline_widths) else 1.0

            collection_cls = Line3DCollection if is_3d else LineCollection
            ax.add_collection(collection_cls(segments, colors=colors, linewidths=width, alpha=alpha))

    def _draw_labels(self, ax, xyz: np.ndarray, is_3d: bool):
        labels = self.labels
        fill = labels.fill_colors.reshape(-1, 3) / 255.0
        stroke = labels.stroke_colors.reshape(-1, 3) / 255.0

        for i, point_index in enumerate(labels.point_indices):
            text = labels.label_strings[i]
            if not text:
                continue
            size = labels.default_font_size * float(labels.scale_factors[i])
            alpha = SCENE_LABEL_ALPHA if labels.use_scene_opacity_flags[i] else 1.0
            artist = self._draw_text(ax, xyz[point_index], text, size, tuple(fill[i]), is_3d)
            artist.set_alpha(alpha)
            artist.set_path_effects([path_effects.withStroke(linewidth=3, foreground=tuple(stroke[i]))])

    @staticmethod
    def _draw_text(ax, position: np.ndarray, text: str, size: float, color, is_3d: bool):
        if is_3d:
            return ax.text(position[0], position[1], position[2], text, fontsize=size, color=color, ha='center')
        return ax.annotate(
            text,
            (position[0], position[1]),
            textcoords="offset points",
            xytext=(5, 5),
            fontsize=size,
            color=color,
        )
