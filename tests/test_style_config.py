"""Tests for style defaults, validation and YAML overrides."""

import pytest

from projector.config import DEFAULT_STYLES, StyleConfig, get_style, load_style_config
from projector.core.colors import normalize_dist, parse_color, rgb_bytes


class TestDefaults:
    """Default styles are the long-standing projector palette."""

    def test_point_colors(self):
        assert DEFAULT_STYLES.point_color_unselected == '#e3e3e3'
        assert DEFAULT_STYLES.point_color_no_selection == '#7575d9'
        assert DEFAULT_STYLES.point_color_selected == '#fa6666'
        assert DEFAULT_STYLES.point_color_hover == '#760b4f'

    def test_polyline_constants(self):
        assert DEFAULT_STYLES.polyline_start_hue == 60
        assert DEFAULT_STYLES.polyline_end_hue == 360
        assert DEFAULT_STYLES.polyline_default_opacity == 0.2
        assert DEFAULT_STYLES.polyline_selected_opacity == 0.9
        assert DEFAULT_STYLES.polyline_deselected_opacity == 0.05
        assert DEFAULT_STYLES.polyline_default_linewidth == 2
        assert DEFAULT_STYLES.polyline_selected_linewidth == 3

    def test_defaults_are_valid(self):
        assert DEFAULT_STYLES.validate() == []

    def test_get_style(self):
        assert get_style('point_scale_hover') == 1.2
        assert get_style('no_such_style', 'fallback') == 'fallback'


class TestValidation:
    """Test StyleConfig.validate."""

    def test_bad_color(self):
        errors = StyleConfig(point_color_hover='not-a-color').validate()
        assert any('point_color_hover' in e for e in errors)

    def test_negative_scale(self):
        errors = StyleConfig(point_scale_selected=-1.0).validate()
        assert any('point_scale_selected' in e for e in errors)

    def test_negative_opacity(self):
        errors = StyleConfig(polyline_selected_opacity=-0.1).validate()
        assert any('polyline_selected_opacity' in e for e in errors)

    def test_mismatched_neighbor_scale(self):
        errors = StyleConfig(neighbor_color_domain=(1.0, 0.5)).validate()
        assert any('neighbor_color_domain' in e for e in errors)


class TestLoadStyleConfig:
    """Test YAML overrides."""

    def test_overrides_apply(self, tmp_path):
        path = tmp_path / 'styles.yaml'
        path.write_text("point_color_hover: '#00ff00'\npolyline_selected_linewidth: 5\n")
        styles = load_style_config(path)
        assert styles.point_color_hover == '#00ff00'
        assert styles.polyline_selected_linewidth == 5
        assert styles.point_color_selected == DEFAULT_STYLES.point_color_selected

    def test_empty_file_is_defaults(self, tmp_path):
        path = tmp_path / 'styles.yaml'
        path.write_text("")
        assert load_style_config(path) == DEFAULT_STYLES

    def test_unknown_key(self, tmp_path):
        path = tmp_path / 'styles.yaml'
        path.write_text("point_colour_hover: '#00ff00'\n")
        with pytest.raises(ValueError, match="point_colour_hover"):
            load_style_config(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / 'styles.yaml'
        path.write_text("point_scale_hover: -2\n")
        with pytest.raises(ValueError, match="point_scale_hover"):
            load_style_config(path)

    def test_non_numeric_value(self, tmp_path):
        """A word where a number belongs is reported, not a TypeError."""
        path = tmp_path / 'styles.yaml'
        path.write_text("point_scale_default: big\nlabel_font_size: huge\n")
        with pytest.raises(ValueError, match="point_scale_default must be a number"):
            load_style_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_style_config(tmp_path / 'nope.yaml')

    def test_neighbor_lists_become_tuples(self, tmp_path):
        path = tmp_path / 'styles.yaml'
        path.write_text("neighbor_color_domain: [1.0, 0.0]\nneighbor_color_range: ['red', 'blue']\n")
        styles = load_style_config(path)
        assert styles.neighbor_color_domain == (1.0, 0.0)
        assert styles.neighbor_color_range == ('red', 'blue')


class TestColorHelpers:
    """Test color parsing."""

    def test_hex(self):
        assert parse_color('#ff0000') == (1.0, 0.0, 0.0)

    def test_hsl(self):
        assert parse_color('hsl(120, 100%, 50%)') == pytest.approx((0.0, 1.0, 0.0))

    def test_tuple(self):
        assert parse_color((0.25, 0.5, 1.0)) == (0.25, 0.5, 1.0)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_color('definitely not a color')

    def test_bytes(self):
        assert rgb_bytes('#fa6666') == (250, 102, 102)

    def test_normalize_dist(self):
        assert normalize_dist('euclidean', 2.0, 1.0) == 0.5
        assert normalize_dist('euclidean', 0.0, 0.0) == 1.0
        assert normalize_dist('cosine', 0.25, 0.1) == 0.75
        with pytest.raises(ValueError):
            normalize_dist('manhattan', 1.0, 1.0)
