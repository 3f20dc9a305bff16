"""Tests for terrain band classification and rendering."""

import math

import pytest
import numpy as np
from py_terrain.core.heightmap_generator import generate_heightmap
from py_terrain.core.terrain import (
    BAND_COLORS,
    BAND_NAMES,
    PALETTE,
    Color,
    Point,
    TerrainBand,
    TerrainClassifier,
    classify,
    color_of,
    distance,
)


class TestClassify:
    """Test single-height classification."""

    @pytest.mark.parametrize(
        "height, band",
        [
            (0, TerrainBand.OCEAN),
            (127, TerrainBand.OCEAN),
            (127.0001, TerrainBand.LOWLAND),
            (128, TerrainBand.LOWLAND),
            (147, TerrainBand.LOWLAND),
            (148, TerrainBand.HIGHLAND),
            (177, TerrainBand.HIGHLAND),
            (178, TerrainBand.PEAK),
            (255, TerrainBand.PEAK),
        ],
    )
    def test_band_boundaries(self, height, band):
        assert classify(height) is band

    def test_out_of_range_heights(self):
        """Test that heights outside [0, 255] fall into the nearest band."""
        assert classify(-50.0) is TerrainBand.OCEAN
        assert classify(float("-inf")) is TerrainBand.OCEAN
        assert classify(1000.0) is TerrainBand.PEAK
        assert classify(float("inf")) is TerrainBand.PEAK

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            classify(float("nan"))

    def test_exactly_one_band_over_range(self):
        """Test that band predicates partition [0, 255] without gaps."""
        classifier = TerrainClassifier()
        for height in np.linspace(0, 255, 2041):
            matches = [
                height <= 127,
                127 < height <= 147,
                147 < height <= 177,
                height > 177,
            ]
            assert sum(matches) == 1
            assert classifier.classify(height) == matches.index(True)

    def test_classification_is_pure(self):
        classifier = TerrainClassifier()
        for height in (12.5, 130.0, 150.0, 200.0):
            assert classifier.classify(height) is classifier.classify(height)

    def test_custom_sea_level(self):
        classifier = TerrainClassifier(sea_level=50)
        assert classifier.classify(50) is TerrainBand.OCEAN
        assert classifier.classify(70) is TerrainBand.LOWLAND
        assert classifier.classify(100) is TerrainBand.HIGHLAND
        assert classifier.classify(101) is TerrainBand.PEAK

    def test_nan_sea_level_rejected(self):
        with pytest.raises(ValueError):
            TerrainClassifier(sea_level=float("nan"))


class TestBands:
    """Test band metadata."""

    def test_every_band_has_color_and_name(self):
        for band in TerrainBand:
            assert band in BAND_COLORS
            assert band in BAND_NAMES

    def test_colors(self):
        assert color_of(TerrainBand.OCEAN) == Color(0, 0, 255)
        assert color_of(TerrainBand.LOWLAND) == Color(0, 255, 0)
        assert color_of(TerrainBand.HIGHLAND) == Color(139, 69, 19)
        assert color_of(TerrainBand.PEAK) == Color(255, 255, 255)

    def test_colors_are_distinct(self):
        assert len(set(BAND_COLORS.values())) == len(TerrainBand)

    def test_palette_matches_colors(self):
        for band in TerrainBand:
            assert tuple(PALETTE[band]) == BAND_COLORS[band]

    def test_land_split(self):
        assert not TerrainBand.OCEAN.is_land
        assert TerrainBand.LOWLAND.is_land
        assert TerrainBand.HIGHLAND.is_land
        assert TerrainBand.PEAK.is_land


class TestGridRendering:
    """Test classification of whole grids."""

    @pytest.fixture
    def classifier(self):
        return TerrainClassifier()

    def test_classify_grid_matches_scalar(self, classifier):
        heights = generate_heightmap(17, 0.7, 11)
        bands = classifier.classify_grid(heights)

        assert bands.shape == heights.shape
        for x in range(17):
            for y in range(17):
                assert bands[x, y] == classifier.classify(heights[x, y])

    def test_classify_grid_boundaries(self, classifier):
        heights = np.array([[127, 128, 147], [148, 177, 178]], dtype=float)
        bands = classifier.classify_grid(heights)
        expected = [[0, 1, 1], [2, 2, 3]]
        np.testing.assert_array_equal(bands, expected)

    def test_classify_grid_rejects_nan(self, classifier):
        with pytest.raises(ValueError):
            classifier.classify_grid(np.array([[1.0, float("nan")]]))

    def test_render_shape_and_dtype(self, classifier):
        heights = generate_heightmap(9, 0.7, 3)
        colors = classifier.render(heights)

        assert colors.shape == (9, 9, 3)
        assert colors.dtype == np.uint8

    def test_render_does_not_mutate_heights(self, classifier):
        heights = generate_heightmap(9, 0.7, 3)
        snapshot = heights.copy()
        classifier.render(heights)
        np.testing.assert_array_equal(heights, snapshot)

    def test_end_to_end_only_known_colors(self, classifier):
        """Test that a seeded 5x5 world only uses the four band colors."""
        heights = generate_heightmap(5, 0.7, 42)
        colors = classifier.render(heights)

        allowed = set(BAND_COLORS.values())
        for x in range(5):
            for y in range(5):
                assert Color(*(int(c) for c in colors[x, y])) in allowed

    def test_statistics(self, classifier):
        heights = generate_heightmap(33, 0.7, 8)
        stats = classifier.statistics(heights)

        assert stats.size == 33
        assert stats.min_height == 0.0
        assert stats.max_height == 255.0
        assert 0.0 <= stats.mean_height <= 255.0
        assert sum(stats.band_counts.values()) == 33 * 33
        assert set(stats.band_counts) == set(BAND_NAMES.values())

        ocean = stats.band_counts["Ocean"]
        assert stats.land_percent == pytest.approx((33 * 33 - ocean) / (33 * 33) * 100)


class TestDistance:
    """Test point distance."""

    def test_distance(self):
        assert distance(Point(0, 0), Point(3, 4)) == 5.0

    def test_distance_symmetric(self):
        a, b = Point(2, 7), Point(-1, 3)
        assert distance(a, b) == distance(b, a)

    def test_distance_to_self(self):
        assert distance(Point(5, 5), Point(5, 5)) == 0.0
        assert math.isclose(distance(Point(0, 0), Point(1, 1)), math.sqrt(2))
