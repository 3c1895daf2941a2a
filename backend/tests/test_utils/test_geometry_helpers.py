"""Tests for numpy/shapely geometry helpers."""

import math

import numpy as np
import pytest

from plangeom.utils.geometry import (
    as_array,
    centroid,
    is_finite_point,
    polygon_area,
    polygon_centroid,
    polygon_perimeter,
    signed_area,
    within,
)


SQUARE = as_array([(0, 0), (10, 0), (10, 10), (0, 10)])
# Concave L shape: vertex mean and area centroid differ
L_SHAPE = as_array([(0, 0), (20, 0), (20, 10), (10, 10), (10, 30), (0, 30)])


def test_as_array_shape():
    assert as_array([]).shape == (0, 2)
    assert as_array(((1, 2), (3, 4))).dtype == np.float64


def test_signed_area_orientation():
    assert signed_area(SQUARE) == pytest.approx(100)
    assert signed_area(SQUARE[::-1]) == pytest.approx(-100)
    assert polygon_area(SQUARE[::-1]) == pytest.approx(100)


def test_area_needs_three_points():
    assert signed_area(as_array([(0, 0), (5, 5)])) == 0.0


def test_perimeter():
    assert polygon_perimeter(SQUARE) == pytest.approx(40)
    assert polygon_perimeter(SQUARE, closed=False) == pytest.approx(30)
    assert polygon_perimeter(as_array([(0, 0)])) == 0.0


def test_centroids():
    assert centroid(SQUARE) == (5.0, 5.0)
    assert centroid(as_array([])) == (0.0, 0.0)
    cx, cy = polygon_centroid(L_SHAPE)
    # area-weighted: (200 * (10, 5) + 200 * (5, 20)) / 400
    assert cx == pytest.approx(7.5)
    assert cy == pytest.approx(12.5)


def test_polygon_centroid_degenerate_falls_back_to_mean():
    line = as_array([(0, 0), (10, 0), (20, 0)])
    assert polygon_centroid(line) == (10.0, 0.0)


def test_finite_and_within():
    assert is_finite_point((1.0, 2.0))
    assert not is_finite_point((math.nan, 0.0))
    assert within((0, 0), (0.4, -0.4), 0.4)
    assert not within((0, 0), (0.41, 0), 0.4)
