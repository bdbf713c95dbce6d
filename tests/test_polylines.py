"""Tests for polyline colors, opacities and widths."""

import colorsys

import numpy as np
import pytest

from projector.config import DEFAULT_STYLES
from projector.core import (
    DataSet,
    Point,
    Sequence,
    compute_segment_colors,
    compute_segment_opacities,
    compute_segment_widths,
    default_polyline_color,
    polyline_hue,
)
from projector.core.colors import hsl_to_rgb


@pytest.fixture
def ds() -> DataSet:
    """Ten points: sequence 0 = [0, 1, 2, 3], sequence 1 = [4, 5, 6, 7, 8], point 9 loose."""
    return DataSet.from_arrays(
        np.arange(30, dtype=float).reshape(10, 3),
        sequences=[[0, 1, 2, 3], [4, 5, 6, 7, 8]],
    )


class TestDefaultRamp:
    """Test the hue ramp along a sequence."""

    def test_hue_endpoints(self):
        assert polyline_hue(0, 5) == pytest.approx(60.0)
        assert polyline_hue(4, 5) == pytest.approx(360.0)

    def test_hue_monotonic(self):
        hues = [polyline_hue(j, 5) for j in range(5)]
        assert hues == sorted(hues)
        assert hues[2] == pytest.approx(210.0)

    def test_rgb_hue_of_first_and_last(self):
        first = default_polyline_color(0, 5)
        last = default_polyline_color(4, 5)
        h_first = colorsys.rgb_to_hls(*first)[0] * 360
        h_last = colorsys.rgb_to_hls(*last)[0] * 360
        assert h_first == pytest.approx(60.0, abs=1e-6)
        # 360 degrees wraps to 0
        assert h_last % 360 == pytest.approx(0.0, abs=1e-6)

    def test_saturation_and_lightness(self):
        _, l, s = colorsys.rgb_to_hls(*default_polyline_color(2, 5))
        assert l == pytest.approx(DEFAULT_STYLES.polyline_lightness)
        assert s == pytest.approx(DEFAULT_STYLES.polyline_saturation)


class TestSegmentColors:
    """Test compute_segment_colors."""

    def test_shape(self, ds):
        colors = compute_segment_colors(ds, None)
        assert set(colors) == {0, 1}
        assert colors[0].shape == (3 * 2 * 3,)
        assert colors[1].shape == (4 * 2 * 3,)

    def test_endpoints_match_ramp(self, ds):
        colors = compute_segment_colors(ds, None)[1].reshape(-1, 2, 3)
        for j in range(4):
            np.testing.assert_allclose(colors[j, 0], default_polyline_color(j, 5), atol=1e-6)
            np.testing.assert_allclose(colors[j, 1], default_polyline_color(j + 1, 5), atol=1e-6)

    def test_shared_endpoints_are_continuous(self, ds):
        colors = compute_segment_colors(ds, None)[0].reshape(-1, 2, 3)
        np.testing.assert_array_equal(colors[0, 1], colors[1, 0])

    def test_sequences_are_independent(self, ds):
        """Each sequence starts its own ramp."""
        colors = compute_segment_colors(ds, None)
        np.testing.assert_array_equal(colors[0][:3], colors[1][:3])

    def test_legend_colorer(self, ds):
        colors = compute_segment_colors(ds, lambda i: (i / 10.0, 0.0, 0.0))[0].reshape(-1, 2, 3)
        np.testing.assert_allclose(colors[:, 0, 0], [0.0, 0.1, 0.2], atol=1e-6)
        np.testing.assert_allclose(colors[:, 1, 0], [0.1, 0.2, 0.3], atol=1e-6)

    def test_colorer_no_opinion_uses_ramp(self, ds):
        colors = compute_segment_colors(ds, lambda i: None if i == 0 else 'blue')[0].reshape(-1, 2, 3)
        np.testing.assert_allclose(colors[0, 0], default_polyline_color(0, 4), atol=1e-6)
        np.testing.assert_allclose(colors[0, 1], (0.0, 0.0, 1.0), atol=1e-6)

    def test_short_sequences_have_no_segments(self):
        ds = DataSet.from_arrays(np.zeros((3, 2)), sequences=[[0], [], [1, 2]])
        colors = compute_segment_colors(ds, None)
        assert colors[0].shape == (0,)
        assert colors[1].shape == (0,)
        assert colors[2].shape == (6,)

    def test_none_data_set(self):
        assert compute_segment_colors(None, None) == {}


class TestOpacities:
    """Test compute_segment_opacities."""

    def test_no_selection(self, ds):
        np.testing.assert_allclose(compute_segment_opacities(ds, []), [0.2, 0.2])

    def test_selected_sequence(self, ds):
        np.testing.assert_allclose(compute_segment_opacities(ds, [2]), [0.9, 0.05])

    def test_only_first_selected_point_counts(self, ds):
        """Later selected points in other sequences stay deselected."""
        np.testing.assert_allclose(compute_segment_opacities(ds, [6, 1]), [0.05, 0.9])

    def test_first_selected_point_outside_sequences(self, ds):
        np.testing.assert_allclose(compute_segment_opacities(ds, [9, 1]), [0.05, 0.05])

    def test_none_data_set(self):
        assert compute_segment_opacities(None, [1]).shape == (0,)

    def test_bad_selection(self, ds):
        with pytest.raises(IndexError):
            compute_segment_opacities(ds, [10])


class TestWidths:
    """Test compute_segment_widths."""

    def test_no_selection(self, ds):
        np.testing.assert_array_equal(compute_segment_widths(ds, []), [2.0, 2.0])

    def test_selected_sequence(self, ds):
        """No deselected width: the other sequence keeps the default."""
        np.testing.assert_array_equal(compute_segment_widths(ds, [2]), [3.0, 2.0])

    def test_only_first_selected_point_counts(self, ds):
        np.testing.assert_array_equal(compute_segment_widths(ds, [5, 0]), [2.0, 3.0])

    def test_none_data_set(self):
        assert compute_segment_widths(None, [1]).shape == (0,)

    def test_idempotent(self, ds):
        assert compute_segment_widths(ds, [2]).tobytes() == compute_segment_widths(ds, [2]).tobytes()


def _hand_built(first_sequence_index) -> DataSet:
    """Points 0..3 on sequences (0, 1) and (2, 3); point 0's back-reference is given."""
    points = [Point(i, (float(i), 0.0, 0.0), sequence_index=1 if i >= 2 else 0) for i in range(4)]
    points[0] = Point(0, (0.0, 0.0, 0.0), sequence_index=first_sequence_index)
    return DataSet(points=tuple(points), sequences=(Sequence((0, 1)), Sequence((2, 3))))


class TestSequenceBackReferences:
    """A point's sequence_index must name the sequence that holds it."""

    def test_consistent_back_reference(self):
        ds = _hand_built(0)
        np.testing.assert_allclose(compute_segment_opacities(ds, [0]), [0.9, 0.05])
        np.testing.assert_array_equal(compute_segment_widths(ds, [0]), [3.0, 2.0])

    def test_negative_back_reference(self):
        """-1 would otherwise wrap to the last sequence."""
        with pytest.raises(ValueError, match="sequence_index -1"):
            _hand_built(-1)

    def test_out_of_range_back_reference(self):
        with pytest.raises(ValueError, match="sequence_index 2"):
            _hand_built(2)

    def test_back_reference_to_other_sequence(self):
        with pytest.raises(ValueError, match="not in that sequence"):
            _hand_built(1)

    def test_no_back_reference(self):
        ds = _hand_built(None)
        np.testing.assert_allclose(compute_segment_opacities(ds, [0]), [0.05, 0.05])
