# Projector Style Configuration
# =============================
# Colors, scale factors, label styling and polyline styling used when
# synthesizing renderer arrays. Colors are any string matplotlib understands.
#
# Usage:
#   from projector.config import DEFAULT_STYLES, get_style
#   DEFAULT_STYLES.point_color_hover        # '#760b4f'
#   get_style('polyline_selected_opacity')  # 0.9

from dataclasses import dataclass, fields, replace
from numbers import Real
from pathlib import Path
from typing import List, Union

import yaml


@dataclass(frozen=True)
class StyleConfig:
    """Display constants for points, labels and polylines."""

    # =========================================================
    # Point colors
    # =========================================================
    point_color_unselected: str = '#e3e3e3'
    point_color_no_selection: str = '#7575d9'
    point_color_selected: str = '#fa6666'
    point_color_hover: str = '#760b4f'

    # 3D label mode keeps points white so the text carries the color
    labels_3d_color_unselected: str = '#ffffff'
    labels_3d_color_no_selection: str = '#ffffff'

    # Sprite mode keeps points white so the image is not tinted
    sprite_image_color_unselected: str = '#ffffff'
    sprite_image_color_no_selection: str = '#ffffff'

    # Nearest neighbors of the first selected point.
    # Normalized distance 1.0 / 0.7 / 0.4 -> color, clamped outside.
    neighbor_color_domain: tuple = (1.0, 0.7, 0.4)
    neighbor_color_range: tuple = (
        'hsl(285, 80%, 40%)',
        'hsl(0, 80%, 65%)',
        'hsl(40, 70%, 60%)',
    )

    # =========================================================
    # Point scale factors
    # =========================================================
    point_scale_default: float = 1.0
    point_scale_selected: float = 1.2
    point_scale_neighbor: float = 1.2
    point_scale_hover: float = 1.2

    # =========================================================
    # Labels
    # =========================================================
    label_accessor: str = 'label'
    label_font_size: float = 10.0
    label_scale_default: float = 1.0
    label_scale_large: float = 2.0
    label_fill_color_selected: str = '#000000'
    label_stroke_color_selected: str = '#ffffff'
    label_fill_color_hover: str = '#000000'
    label_stroke_color_hover: str = '#ffffff'
    label_fill_color_neighbor: str = '#000000'
    label_stroke_color_neighbor: str = '#ffffff'

    # =========================================================
    # Polylines
    # =========================================================
    polyline_start_hue: float = 60.0
    polyline_end_hue: float = 360.0
    polyline_saturation: float = 1.0
    polyline_lightness: float = 0.3

    polyline_default_opacity: float = 0.2
    polyline_selected_opacity: float = 0.9
    polyline_deselected_opacity: float = 0.05
    polyline_default_linewidth: float = 2.0
    polyline_selected_linewidth: float = 3.0

    # =========================================================
    # Geometry
    # =========================================================
    # Normalized positions live in [-cube_length / 2, cube_length / 2]
    cube_length: float = 2.0

    def color_fields(self) -> List[str]:
        return [f.name for f in fields(self)
                if '_color' in f.name and not f.name.startswith('neighbor_color')]

    def validate(self) -> List[str]:
        """Check styles for internal consistency. Returns a list of errors."""
        # Local import: projector.core imports this module
        from projector.core.colors import parse_color

        errors = []

        for name in self.color_fields():
            try:
                parse_color(getattr(self, name))
            except ValueError:
                errors.append(f"{name} is not a valid color: {getattr(self, name)!r}")

        for color in self.neighbor_color_range:
            try:
                parse_color(color)
            except ValueError:
                errors.append(f"neighbor_color_range has an invalid color: {color!r}")

        if len(self.neighbor_color_domain) != len(self.neighbor_color_range):
            errors.append("neighbor_color_domain and neighbor_color_range must have the same length")

        numeric = {f.name for f in fields(self) if f.type in (float, 'float')}
        not_numeric = set()
        for name in sorted(numeric):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                errors.append(f"{name} must be a number, got {value!r}")
                not_numeric.add(name)

        for name in sorted(numeric - not_numeric):
            value = getattr(self, name)
            if name.startswith(('point_scale', 'label_scale', 'polyline_')) and not name.endswith('hue'):
                if value < 0:
                    errors.append(f"{name} must be non-negative, got {value}")

        if 'label_font_size' not in not_numeric and self.label_font_size <= 0:
            errors.append("label_font_size must be positive")
        if 'cube_length' not in not_numeric and self.cube_length <= 0:
            errors.append("cube_length must be positive")

        for name in ('polyline_saturation', 'polyline_lightness'):
            if name not in not_numeric and not 0.0 <= getattr(self, name) <= 1.0:
                errors.append(f"{name} must be in [0, 1]")

        return errors


DEFAULT_STYLES = StyleConfig()


def get_style(name: str, default=None):
    """
    Get a default style constant by name.

    Example:
        get_style('point_color_selected')   # Returns '#fa6666'
        get_style('missing', 0)             # Returns 0
    """
    return getattr(DEFAULT_STYLES, name, default)


def load_style_config(path: Union[str, Path], base: StyleConfig = None) -> StyleConfig:
    """
    Load style overrides from a YAML file.

    The file is a flat mapping of StyleConfig field names to values;
    anything not listed keeps its value from `base` (defaults if omitted).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Style file not found: {path}")

    with open(path) as f:
        overrides = yaml.safe_load(f) or {}

    if not isinstance(overrides, dict):
        raise ValueError(f"{path} must contain a mapping of style names to values")

    known = {f.name for f in fields(StyleConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown style keys in {path}: {', '.join(unknown)}")

    for key in ('neighbor_color_domain', 'neighbor_color_range'):
        if key in overrides:
            overrides[key] = tuple(overrides[key])

    styles = replace(base or DEFAULT_STYLES, **overrides)
    errors = styles.validate()
    if errors:
        raise ValueError("Invalid style configuration:\n  - " + "\n  - ".join(errors))
    return styles


if __name__ == '__main__':
    from projector.core.colors import parse_color

    # Print style summary
    for f in fields(DEFAULT_STYLES):
        value = getattr(DEFAULT_STYLES, f.name)
        if f.name in DEFAULT_STYLES.color_fields():
            value = f"{value}  rgb={tuple(round(c, 3) for c in parse_color(value))}"
        print(f"{f.name:32s} {value}")

    errors = DEFAULT_STYLES.validate()
    if errors:
        print("\nValidation errors:")
        for e in errors:
            print(f"  - {e}")
    else:
        print("\nStyles valid")
