"""
Tests for known-mask construction and damage simulation.
"""

import numpy as np
import pytest

from sorinpaint.restoration import (
    EmptyMaskError,
    PaintMask,
    PreconditionViolation,
    Tensor,
    build_known_mask_from_paint,
    build_random_known_mask,
    count_unknown,
    make_damaged_view,
)


class TestPaintMask:
    """Tests for the brush-stroke accumulator."""

    def test_starts_empty(self):
        paint = PaintMask(8, 6)
        assert paint.painted_count == 0
        assert paint.data.shape == (48,)

    def test_single_pixel_brush(self):
        paint = PaintMask(8, 6)
        assert paint.stamp(3, 2, brush_size=1) == 1
        assert paint.data[2 * 8 + 3] == 1
        assert paint.painted_count == 1

    def test_disc_shape(self):
        """Brush of size 5 has radius 2: 13 lattice points with dx^2 + dy^2 <= 4."""
        paint = PaintMask(20, 20)
        assert paint.stamp(10, 10, brush_size=5) == 13

        grid = paint.data.reshape(20, 20)
        assert grid[10, 12] == 1
        assert grid[12, 10] == 1
        assert grid[11, 12] == 0  # 1 + 4 > 4

    def test_clipped_at_border(self):
        paint = PaintMask(10, 10)
        assert paint.stamp(0, 0, brush_size=5) == 6

    def test_outside_raster_is_ignored(self):
        paint = PaintMask(10, 10)
        assert paint.stamp(50, 50, brush_size=5) == 0
        assert paint.painted_count == 0

    def test_restamp_counts_only_new_pixels(self):
        paint = PaintMask(10, 10)
        paint.stamp(5, 5, brush_size=3)
        assert paint.stamp(5, 5, brush_size=3) == 0

    def test_merge_and_clear(self):
        paint = PaintMask(4, 2)
        paint.merge(np.array([[0, 1, 0, 0], [0, 0, 0, 1]]))
        assert paint.painted_count == 2

        with pytest.raises(PreconditionViolation):
            paint.merge(np.zeros(5))

        paint.clear()
        assert paint.painted_count == 0

    def test_data_is_a_copy(self):
        paint = PaintMask(3, 3)
        data = paint.data
        data[:] = 1
        assert paint.painted_count == 0

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError, match="must be positive"):
            PaintMask(0, 5)


class TestManualKnownMask:
    """Tests for build_known_mask_from_paint."""

    def test_complement_law(self):
        rng = np.random.default_rng(5)
        paint = (rng.random(200) < 0.3).astype(np.uint8)
        paint[0] = 1
        known = build_known_mask_from_paint(paint)
        assert np.array_equal(known, 1 - paint)

    def test_from_paint_mask(self):
        paint = PaintMask(4, 4)
        paint.stamp(1, 1, brush_size=1)
        known = build_known_mask_from_paint(paint)
        assert known.tolist() == [1] * 5 + [0] + [1] * 10

    def test_empty_mask_raises(self):
        with pytest.raises(EmptyMaskError, match="No pixels are painted"):
            build_known_mask_from_paint(np.zeros(16, dtype=np.uint8))

    def test_empty_raw_mask_has_no_dimensions(self):
        """A flat array carries no raster size, so the error leaves it unset."""
        with pytest.raises(EmptyMaskError) as excinfo:
            build_known_mask_from_paint(np.zeros(6, dtype=np.uint8))
        assert excinfo.value.width is None
        assert excinfo.value.height is None
        assert "paint the damaged region" in str(excinfo.value)

    def test_empty_paint_mask_raises(self):
        paint = PaintMask(4, 3)
        with pytest.raises(EmptyMaskError) as excinfo:
            build_known_mask_from_paint(paint)
        assert excinfo.value.width == 4
        assert excinfo.value.height == 3


class TestRandomKnownMask:
    """Tests for build_random_known_mask."""

    def test_shape_and_values(self):
        known = build_random_known_mask(10, 7, 50.0, rng=np.random.default_rng(0))
        assert known.shape == (70,)
        assert known.dtype == np.uint8
        assert set(np.unique(known)).issubset({0, 1})

    @pytest.mark.parametrize("damage_percent", [10.0, 30.0, 75.0])
    def test_unknown_fraction_matches_percentage(self, damage_percent):
        known = build_random_known_mask(200, 200, damage_percent, rng=np.random.default_rng(1234))
        fraction_unknown = count_unknown(known) / known.size
        assert fraction_unknown == pytest.approx(damage_percent / 100.0, abs=0.01)

    def test_extremes(self):
        rng = np.random.default_rng(0)
        assert count_unknown(build_random_known_mask(30, 30, 0.0, rng=rng)) == 0
        assert count_unknown(build_random_known_mask(30, 30, 100.0, rng=rng)) == 900

    def test_seeded_generator_is_reproducible(self):
        a = build_random_known_mask(32, 32, 40.0, rng=np.random.default_rng(7))
        b = build_random_known_mask(32, 32, 40.0, rng=np.random.default_rng(7))
        assert np.array_equal(a, b)

    def test_default_generator(self):
        known = build_random_known_mask(16, 16, 50.0)
        assert known.size == 256

    def test_invalid_percentage(self):
        with pytest.raises(ValueError, match="damage_percent must be in"):
            build_random_known_mask(4, 4, 120.0)


class TestDamagedView:
    """Tests for make_damaged_view."""

    def test_unknown_pixels_are_zeroed(self):
        source = Tensor(np.full((2, 3, 3), 0.7))
        known = np.array([1, 0, 1, 1, 1, 0])
        damaged = make_damaged_view(source, known)

        assert np.all(damaged.data[0, 1] == 0.0)
        assert np.all(damaged.data[1, 2] == 0.0)
        assert np.all(damaged.data[0, 0] == 0.7)

    def test_source_not_mutated(self):
        source = Tensor(np.full((2, 2, 3), 0.3))
        make_damaged_view(source, [0, 0, 0, 0])
        assert np.all(source.data == 0.3)

    def test_mask_length_mismatch(self):
        source = Tensor(np.zeros((2, 2, 3)))
        with pytest.raises(PreconditionViolation):
            make_damaged_view(source, [1, 0, 1])
