"""
Color helpers shared by the point and polyline resolvers.

Colors arrive as anything matplotlib understands ('#fa6666', 'red',
(r, g, b) floats in [0, 1]) or as CSS-style 'hsl(h, s%, l%)' strings.
Everything is resolved to an (r, g, b) float tuple in [0, 1].
"""

import colorsys
import re
from typing import Tuple

import numpy as np
from matplotlib.colors import to_rgb

RGB = Tuple[float, float, float]

_HSL_PATTERN = re.compile(
    r'^\s*hsl\(\s*([-+]?[\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*\)\s*$',
    re.IGNORECASE,
)

DISTANCE_METRICS = ('euclidean', 'cosine')


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """HSL -> RGB. Hue in degrees (wraps at 360), saturation/lightness in [0, 1]."""
    return colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)


def parse_color(color) -> RGB:
    """
    Resolve a color value to an (r, g, b) float tuple.

    Raises:
        ValueError: If the color cannot be interpreted.
    """
    if isinstance(color, str):
        match = _HSL_PATTERN.match(color)
        if match:
            h, s, l = (float(g) for g in match.groups())
            return hsl_to_rgb(h, s / 100.0, l / 100.0)

    try:
        r, g, b = to_rgb(color)
    except (ValueError, TypeError):
        raise ValueError(f"Cannot interpret color: {color!r}")
    return (r, g, b)


def rgb_bytes(color) -> Tuple[int, int, int]:
    """Color -> (r, g, b) ints in [0, 255]."""
    return tuple(int(round(c * 255)) for c in parse_color(color))


def normalize_dist(distance_metric: str, d: float, min_dist: float) -> float:
    """
    Normalize a neighbor distance so it can be encoded with color.

    Euclidean distances are relative to the nearest neighbor (min_dist / d),
    cosine distances are turned into similarities (1 - d). Both give 1.0 for
    the closest possible neighbor.
    """
    if distance_metric == 'euclidean':
        if d == 0:
            return 1.0
        return min_dist / d
    if distance_metric == 'cosine':
        return 1.0 - d
    raise ValueError(f"Unknown distance metric {distance_metric!r}; expected one of {DISTANCE_METRICS}")


def neighbor_color(normalized: float, domain, color_range) -> RGB:
    """
    Piecewise-linear RGB interpolation across `domain` stops, clamped.

    `domain` may be in either order (the default runs 1.0 -> 0.4).
    """
    xp = np.asarray(domain, dtype=np.float64)
    fp = np.array([parse_color(c) for c in color_range], dtype=np.float64)
    order = np.argsort(xp)
    xp, fp = xp[order], fp[order]
    return tuple(float(np.interp(normalized, xp, fp[:, ch])) for ch in range(3))
