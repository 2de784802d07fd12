"""Tests for distance calculations."""

import pytest

from spacewar.utils import distance_3d


class TestDistance3D:
    """Test straight-line distance."""

    def test_same_point(self):
        assert distance_3d((5, 5, 5), (5, 5, 5)) == 0

    def test_planar(self):
        assert distance_3d((0, 0, 0), (3, 4, 0)) == 5

    def test_all_axes(self):
        assert distance_3d((1, 2, 3), (3, 5, 9)) == pytest.approx(7)

    def test_symmetric(self):
        a, b = (-5, 2, 10), (7, -3, 1)
        assert distance_3d(a, b) == distance_3d(b, a)
