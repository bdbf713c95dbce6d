"""
Geometry Normalizer
===================

Maps raw projected coordinates into a fixed cube centered on the origin,
so the rendered cloud has the same size whatever the input scale.
"""

from typing import Optional, Tuple

import numpy as np

from projector.config import DEFAULT_STYLES, StyleConfig
from .models import DataSet


def extent(values) -> Tuple[float, float]:
    """[min, max] of `values`. (0, 0) when empty."""
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return (0.0, 0.0)
    return (float(values.min()), float(values.max()))


def scale_linear(values, domain: Tuple[float, float], range_: Tuple[float, float]) -> np.ndarray:
    """
    Linearly map `values` from `domain` onto `range_`.

    A zero-width domain maps everything to the midpoint of `range_`.
    """
    values = np.asarray(values, dtype=np.float64)
    d0, d1 = domain
    r0, r1 = range_
    width = d1 - d0
    if width == 0:
        return np.full(values.shape, (r0 + r1) / 2.0)
    return (values - d0) / width * (r1 - r0) + r0


def compute_positions(data_set: Optional[DataSet], styles: StyleConfig = None) -> np.ndarray:
    """
    Flat position buffer [x0, y0, z0, x1, ...] in the normalized cube.

    Always 3 components per point; 2D data sets get z = 0.
    """
    styles = styles or DEFAULT_STYLES
    if data_set is None or len(data_set.points) == 0:
        return np.zeros(0, dtype=np.float32)

    dims = data_set.dimensions
    coords = np.array([p.vector[:dims] for p in data_set.points], dtype=np.float64)

    half = styles.cube_length / 2.0
    range_ = (-half, half)

    positions = np.zeros((len(data_set.points), 3), dtype=np.float32)
    for axis in range(dims):
        column = coords[:, axis]
        positions[:, axis] = scale_linear(column, extent(column), range_)

    return positions.reshape(-1)
