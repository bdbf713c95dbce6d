"""
Projector Models
================

Data set and render-output containers for point-cloud attribute synthesis.
Zero rendering: just structure.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence as SequenceType, Tuple

import numpy as np


class DisplayMode(Enum):
    """Which base color pair applies to unselected / no-selection points."""
    PLAIN = "PLAIN"
    LABELS_3D = "LABELS_3D"
    SPRITE_IMAGE = "SPRITE_IMAGE"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_flags(cls, label_3d_mode: bool = False, sprite_image_mode: bool = False) -> "DisplayMode":
        """Resolve the two display flags. Sprite-image wins if both are set."""
        if sprite_image_mode:
            return cls.SPRITE_IMAGE
        if label_3d_mode:
            return cls.LABELS_3D
        return cls.PLAIN


@dataclass(frozen=True)
class Point:
    """One projected point."""
    index: int
    vector: Tuple[float, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)
    sequence_index: Optional[int] = None


@dataclass(frozen=True)
class Sequence:
    """Ordered chain of point indices drawn as a polyline."""
    point_indices: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.point_indices)

    @property
    def n_segments(self) -> int:
        return max(len(self.point_indices) - 1, 0)


@dataclass(frozen=True)
class NearestEntry:
    """A nearest neighbor of the first selected point."""
    index: int
    dist: float


@dataclass(frozen=True)
class DataSet:
    """
    Projected points plus the sequences linking them.

    `dimensions` is the number of active render dimensions (2 or 3) for
    the whole data set. `sprite_image` is an opaque reference to a sprite
    sheet; its presence switches the projector into sprite-image mode.
    """
    points: Tuple[Point, ...]
    sequences: Tuple[Sequence, ...] = ()
    dimensions: int = 3
    sprite_image: Optional[Any] = None

    def __post_init__(self):
        if self.dimensions not in (2, 3):
            raise ValueError(f"dimensions must be 2 or 3, got {self.dimensions}")

        for i, p in enumerate(self.points):
            if p.index != i:
                raise ValueError(f"Point at position {i} has index {p.index}; indices must be dense")
            if len(p.vector) < self.dimensions:
                raise ValueError(
                    f"Point {i} has {len(p.vector)} coordinates, "
                    f"data set declares {self.dimensions} dimensions"
                )

        n = len(self.points)
        for s, seq in enumerate(self.sequences):
            for idx in seq.point_indices:
                if not 0 <= idx < n:
                    raise ValueError(f"Sequence {s} references point {idx}, data set has {n} points")

        # Back-references index the per-sequence buffers directly
        for p in self.points:
            s = p.sequence_index
            if s is None:
                continue
            if not 0 <= s < len(self.sequences):
                raise ValueError(
                    f"Point {p.index} has sequence_index {s}, "
                    f"data set has {len(self.sequences)} sequences"
                )
            if p.index not in self.sequences[s].point_indices:
                raise ValueError(f"Point {p.index} has sequence_index {s} but is not in that sequence")

    def __len__(self) -> int:
        return len(self.points)

    @classmethod
    def from_arrays(
        cls,
        coordinates,
        metadata: Optional[SequenceType[Mapping[str, Any]]] = None,
        sequences: Optional[SequenceType[SequenceType[int]]] = None,
        dimensions: Optional[int] = None,
        sprite_image: Optional[Any] = None,
    ) -> "DataSet":
        """
        Build a data set from an (N, D) coordinate matrix.

        Each point's `sequence_index` is filled from `sequences`; a point
        listed in more than one sequence keeps the first.
        """
        coords = np.asarray(coordinates, dtype=np.float64)
        if coords.ndim != 2:
            if coords.size == 0:
                coords = coords.reshape(0, dimensions or 2)
            else:
                raise ValueError(f"coordinates must be 2-D (N, D), got shape {coords.shape}")

        n = coords.shape[0]
        if dimensions is None:
            dimensions = 3 if coords.shape[1] >= 3 else 2

        if metadata is None:
            metadata = [{} for _ in range(n)]
        if len(metadata) != n:
            raise ValueError(f"Got {len(metadata)} metadata rows for {n} points")

        seqs = tuple(Sequence(tuple(int(i) for i in s)) for s in (sequences or []))

        membership: Dict[int, int] = {}
        for s, seq in enumerate(seqs):
            for idx in seq.point_indices:
                membership.setdefault(idx, s)

        points = tuple(
            Point(
                index=i,
                vector=tuple(float(v) for v in coords[i]),
                metadata=dict(metadata[i]),
                sequence_index=membership.get(i),
            )
            for i in range(n)
        )
        return cls(points=points, sequences=seqs, dimensions=dimensions, sprite_image=sprite_image)

    def with_sprite_image(self, sprite_image: Any) -> "DataSet":
        return replace(self, sprite_image=sprite_image)


@dataclass
class LabelRenderParams:
    """Packed styling for the labels that should be drawn."""
    point_indices: np.ndarray            # uint32 (L,)
    label_strings: List[str]
    scale_factors: np.ndarray            # float32 (L,)
    use_scene_opacity_flags: np.ndarray  # int8 (L,), 0 = suppressed
    default_font_size: float
    fill_colors: np.ndarray              # uint8 (3L,)
    stroke_colors: np.ndarray            # uint8 (3L,)

    def __len__(self) -> int:
        return len(self.point_indices)

    @classmethod
    def empty(cls, default_font_size: float) -> "LabelRenderParams":
        return cls(
            point_indices=np.zeros(0, dtype=np.uint32),
            label_strings=[],
            scale_factors=np.zeros(0, dtype=np.float32),
            use_scene_opacity_flags=np.zeros(0, dtype=np.int8),
            default_font_size=default_font_size,
            fill_colors=np.zeros(0, dtype=np.uint8),
            stroke_colors=np.zeros(0, dtype=np.uint8),
        )


@dataclass
class SceneArrays:
    """Every array the renderer needs for one frame."""
    positions: np.ndarray
    colors: np.ndarray
    scales: np.ndarray
    labels: LabelRenderParams
    polyline_colors: Dict[int, np.ndarray]
    polyline_opacities: np.ndarray
    polyline_widths: np.ndarray
