"""
Tests for the low level building blocks: tolerance comparisons, vector
helpers, points and oriented great circles.

These run on synthetic values only and pin down the conventions the
region code builds on: azimuth wrapping, the pole lying on the minus
side of its circle and the orientation of circles through two points.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

# Make the regions package importable when running tests directly via pytest
sys.path.append(str(Path(__file__).resolve().parents[1]))

from regions.geometry.circles import GreatCircle
from regions.geometry.errors import DegenerateGeometryError, GeometryError
from regions.geometry.locations import HyperplaneLocation
from regions.geometry.points import (
    MINUS_I,
    MINUS_J,
    MINUS_K,
    PLUS_I,
    PLUS_J,
    PLUS_K,
    TWO_PI,
    Point2S,
    normalize_azimuth,
)
from regions.geometry.precision import Precision
from regions.geometry.vectors import (
    angle,
    cross,
    dot,
    linear_combination,
    norm,
    normalize,
    orthogonal,
    two_product,
    vec_sum,
)

from sphere_test_utils import TEST_EPS, TEST_PRECISION, assert_points_eq

HALF_PI = 0.5 * math.pi


# ----------------------------------------------------------------------
# Precision
# ----------------------------------------------------------------------


def test_precision_comparisons() -> None:
    precision = Precision(1e-3)
    assert precision.eq(1.0, 1.0005)
    assert not precision.eq(1.0, 1.002)
    assert precision.eq_zero(-0.0009)
    assert precision.compare(1.0, 1.0005) == 0
    assert precision.compare(1.0, 2.0) == -1
    assert precision.compare(2.0, 1.0) == 1
    assert precision.sign(-0.5) == -1
    assert precision.sign(0.0001) == 0
    assert precision.lt(0.0, 0.1)
    assert not precision.lt(0.0, 0.0001)
    assert precision.lte(0.0, 0.0001)
    assert precision.gt(0.1, 0.0)
    assert precision.gte(0.0001, 0.0)


def test_precision_treats_matching_infinities_as_equal() -> None:
    assert TEST_PRECISION.eq(math.inf, math.inf)
    assert not TEST_PRECISION.eq(math.inf, -math.inf)


@pytest.mark.parametrize("epsilon", [0.0, -1e-10, math.nan, math.inf])
def test_precision_rejects_invalid_epsilon(epsilon: float) -> None:
    with pytest.raises(ValueError):
        Precision(epsilon)


# ----------------------------------------------------------------------
# Vectors
# ----------------------------------------------------------------------


def test_two_product_is_exact() -> None:
    a = 1.0 + 2.0**-30
    b = 1.0 - 2.0**-30
    p, e = two_product(a, b)
    # a * b = 1 - 2**-60, which rounds to 1
    assert p == 1.0
    assert e == -(2.0**-60)


def test_linear_combination_survives_cancellation() -> None:
    value = linear_combination([(1e16, 1.0), (1.0, 1.0), (-1e16, 1.0)])
    assert value == 1.0


def test_cross_and_dot_basics() -> None:
    assert cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == (0.0, 0.0, 1.0)
    assert cross((0.0, 1.0, 0.0), (1.0, 0.0, 0.0)) == (0.0, 0.0, -1.0)
    assert dot((1.0, 2.0, 3.0), (4.0, -5.0, 6.0)) == 12.0


def test_cross_of_nearly_parallel_vectors_keeps_direction() -> None:
    """Cancellation in the cross product must not destroy its direction."""
    a = Point2S.of(1.0, HALF_PI).vector
    b = Point2S.of(1.0 + 1e-12, HALF_PI).vector
    c = cross(a, b)
    assert norm(c) == pytest.approx(1e-12, rel=1e-3)
    unit = normalize(c)
    assert unit[2] == pytest.approx(1.0, abs=1e-9)


def test_normalize_and_orthogonal() -> None:
    assert normalize((3.0, 0.0, 4.0)) == pytest.approx((0.6, 0.0, 0.8))
    with pytest.raises(DegenerateGeometryError):
        normalize((0.0, 0.0, 0.0))
    for vec in [(1.0, 0.0, 0.0), (0.0, 2.0, 0.0), (0.0, 0.0, -3.0), (1.0, 1.0, 1.0), (0.9, -0.1, 0.3)]:
        ortho = orthogonal(vec)
        assert norm(ortho) == pytest.approx(1.0, abs=1e-15)
        assert dot(ortho, vec) == pytest.approx(0.0, abs=1e-15)
    with pytest.raises(DegenerateGeometryError):
        orthogonal((0.0, 0.0, 0.0))


def test_angle_is_accurate_near_zero_and_pi() -> None:
    assert angle((1.0, 0.0, 0.0), (1.0, 1e-12, 0.0)) == pytest.approx(1e-12, rel=1e-9)
    assert angle((1.0, 0.0, 0.0), (-1.0, 1e-12, 0.0)) == pytest.approx(math.pi - 1e-12, abs=1e-15)
    assert angle((1.0, 0.0, 0.0), (0.0, 5.0, 0.0)) == pytest.approx(HALF_PI)


def test_vec_sum() -> None:
    assert vec_sum([(1e16, 1.0, 0.0), (1.0, 1.0, 0.0), (-1e16, 1.0, 2.0)]) == (1.0, 3.0, 2.0)
    assert vec_sum([]) == (0.0, 0.0, 0.0)


def test_errors_are_value_errors() -> None:
    assert issubclass(DegenerateGeometryError, GeometryError)
    assert issubclass(GeometryError, ValueError)


# ----------------------------------------------------------------------
# Points
# ----------------------------------------------------------------------


@pytest.mark.parametrize(
    "azimuth, expected",
    [
        (0.0, 0.0),
        (-HALF_PI, 1.5 * math.pi),
        (TWO_PI, 0.0),
        (5 * math.pi, math.pi),
        (-1e-300, 0.0),
    ],
)
def test_normalize_azimuth(azimuth: float, expected: float) -> None:
    result = normalize_azimuth(azimuth)
    assert 0.0 <= result < TWO_PI
    assert result == pytest.approx(expected, abs=1e-15)


def test_point_of_wraps_azimuth_and_computes_vector() -> None:
    pt = Point2S.of(-HALF_PI, HALF_PI)
    assert pt.azimuth == pytest.approx(1.5 * math.pi)
    assert pt.polar == HALF_PI
    assert_points_eq(MINUS_J, pt)


@pytest.mark.parametrize("polar", [-0.1, math.pi + 0.1, math.nan, math.inf])
def test_point_of_rejects_invalid_polar(polar: float) -> None:
    with pytest.raises(DegenerateGeometryError):
        Point2S.of(0.0, polar)


def test_point_from_vector() -> None:
    pt = Point2S.from_vector((0.0, 0.0, -2.0))
    assert pt.polar == pytest.approx(math.pi)
    assert pt.vector == (0.0, 0.0, -1.0)
    pt = Point2S.from_vector((-1.0, -1.0, 0.0))
    assert pt.azimuth == pytest.approx(1.25 * math.pi)
    assert pt.polar == pytest.approx(HALF_PI)
    with pytest.raises(DegenerateGeometryError):
        Point2S.from_vector((0.0, 0.0, 0.0))


def test_axis_constants() -> None:
    for constant, vector in [
        (PLUS_I, (1.0, 0.0, 0.0)),
        (MINUS_I, (-1.0, 0.0, 0.0)),
        (PLUS_J, (0.0, 1.0, 0.0)),
        (MINUS_J, (0.0, -1.0, 0.0)),
        (PLUS_K, (0.0, 0.0, 1.0)),
        (MINUS_K, (0.0, 0.0, -1.0)),
    ]:
        assert constant.vector == vector
        assert_points_eq(Point2S.of(constant.azimuth, constant.polar), constant)


def test_point_distance_and_antipodal() -> None:
    assert PLUS_I.distance(PLUS_J) == pytest.approx(HALF_PI)
    assert PLUS_K.distance(MINUS_K) == pytest.approx(math.pi)
    assert PLUS_I.distance(PLUS_I) == 0.0
    assert_points_eq(MINUS_J, PLUS_J.antipodal())


def test_point_slerp() -> None:
    assert_points_eq(PLUS_I, PLUS_I.slerp(PLUS_J, 0.0))
    assert_points_eq(PLUS_J, PLUS_I.slerp(PLUS_J, 1.0))
    assert_points_eq(Point2S.of(0.25 * math.pi, HALF_PI), PLUS_I.slerp(PLUS_J, 0.5))
    assert_points_eq(MINUS_I, PLUS_I.slerp(PLUS_J, 2.0))
    assert PLUS_K.slerp(PLUS_K, 0.3) is PLUS_K
    with pytest.raises(DegenerateGeometryError):
        PLUS_I.slerp(MINUS_I, 0.5)


def test_point_eq_uses_tolerance() -> None:
    assert PLUS_I.eq(Point2S.of(1e-11, HALF_PI), TEST_PRECISION)
    assert not PLUS_I.eq(Point2S.of(1e-9, HALF_PI), TEST_PRECISION)
    # Azimuth is irrelevant at the poles
    assert PLUS_K.eq(Point2S.of(2.0, 0.0), TEST_PRECISION)


def test_point_is_finite_and_sort_key() -> None:
    assert PLUS_I.is_finite()
    points = [PLUS_J, MINUS_K, PLUS_I, PLUS_K]
    ordered = sorted(points, key=Point2S.polar_azimuth_key)
    assert ordered == [PLUS_K, PLUS_I, PLUS_J, MINUS_K]


# ----------------------------------------------------------------------
# Great circles
# ----------------------------------------------------------------------


def test_circle_from_pole_basis_is_orthonormal() -> None:
    circle = GreatCircle.from_pole((1.0, 2.0, -3.0), TEST_PRECISION)
    assert norm(circle.pole) == pytest.approx(1.0)
    assert norm(circle.u) == pytest.approx(1.0)
    assert norm(circle.v) == pytest.approx(1.0)
    assert dot(circle.pole, circle.u) == pytest.approx(0.0, abs=TEST_EPS)
    assert dot(circle.u, circle.v) == pytest.approx(0.0, abs=TEST_EPS)
    assert cross(circle.u, circle.v) == pytest.approx(circle.pole)


def test_circle_from_pole_and_u_projects_hint() -> None:
    circle = GreatCircle.from_pole_and_u((0.0, 0.0, 1.0), (1.0, 0.0, 0.5), TEST_PRECISION)
    assert circle.u == pytest.approx((1.0, 0.0, 0.0))
    assert circle.v == pytest.approx((0.0, 1.0, 0.0))
    with pytest.raises(DegenerateGeometryError):
        GreatCircle.from_pole_and_u((0.0, 0.0, 1.0), (0.0, 0.0, 2.0), TEST_PRECISION)


def test_circle_from_points_orientation() -> None:
    """Walking from the first point to the second increases the azimuth."""
    circle = GreatCircle.from_points(PLUS_I, PLUS_J, TEST_PRECISION)
    assert_points_eq(PLUS_K, circle.pole_point())
    assert circle.azimuth(PLUS_I) == pytest.approx(0.0, abs=TEST_EPS)
    assert circle.azimuth(PLUS_J) == pytest.approx(HALF_PI)
    assert circle.azimuth(MINUS_I) == pytest.approx(math.pi)
    assert_points_eq(MINUS_J, circle.to_space(1.5 * math.pi))


@pytest.mark.parametrize(
    "a, b",
    [
        (PLUS_I, PLUS_I),
        (PLUS_I, Point2S.of(1e-11, HALF_PI)),
        (PLUS_I, MINUS_I),
        (PLUS_K, Point2S.of(0.3, math.pi)),
    ],
)
def test_circle_from_points_rejects_equal_or_antipodal(a: Point2S, b: Point2S) -> None:
    with pytest.raises(DegenerateGeometryError):
        GreatCircle.from_points(a, b, TEST_PRECISION)


def test_circle_offset_and_classify() -> None:
    circle = GreatCircle.from_pole((0.0, 0.0, 1.0), TEST_PRECISION)
    assert circle.offset(PLUS_K) == pytest.approx(-HALF_PI)
    assert circle.offset(MINUS_K) == pytest.approx(HALF_PI)
    assert circle.offset(PLUS_I) == pytest.approx(0.0, abs=TEST_EPS)
    assert circle.offset(Point2S.of(0.0, 0.25 * math.pi)) == pytest.approx(-0.25 * math.pi)

    assert circle.classify(PLUS_K) == HyperplaneLocation.MINUS
    assert circle.classify(MINUS_K) == HyperplaneLocation.PLUS
    assert circle.classify(PLUS_J) == HyperplaneLocation.ON
    assert circle.classify(Point2S.of(1.0, HALF_PI + 1e-11)) == HyperplaneLocation.ON
    assert circle.classify(Point2S.of(1.0, HALF_PI + 1e-9)) == HyperplaneLocation.PLUS
    assert circle.contains(MINUS_I)
    assert not circle.contains(PLUS_K)
    # Raw vectors are accepted wherever points are
    assert circle.classify((0.0, 0.0, 5.0)) == HyperplaneLocation.MINUS


def test_circle_minus_and_plus_points() -> None:
    circle = GreatCircle.from_points(PLUS_K, PLUS_I, TEST_PRECISION)
    assert_points_eq(PLUS_J, circle.minus_point())
    assert_points_eq(MINUS_J, circle.plus_point())


def test_circle_project() -> None:
    circle = GreatCircle.from_points(PLUS_I, PLUS_J, TEST_PRECISION)
    assert_points_eq(Point2S.of(0.25 * math.pi, HALF_PI), circle.project(Point2S.of(0.25 * math.pi, 0.3)))
    assert circle.to_subspace(PLUS_J) == pytest.approx(HALF_PI)


def test_circle_reverse_negates_azimuth() -> None:
    circle = GreatCircle.from_points(PLUS_I, PLUS_J, TEST_PRECISION)
    rev = circle.reverse()
    assert_points_eq(MINUS_K, rev.pole_point())
    assert rev.azimuth(PLUS_J) == pytest.approx(1.5 * math.pi)
    assert rev.classify(PLUS_K) == HyperplaneLocation.PLUS
    assert circle.is_same_circle(rev)
    assert not circle.eq(rev)
    assert not circle.similar_orientation(rev)


def test_circle_intersection() -> None:
    xy = GreatCircle.from_pole((0.0, 0.0, 1.0), TEST_PRECISION)
    yz = GreatCircle.from_pole((1.0, 0.0, 0.0), TEST_PRECISION)
    assert_points_eq(PLUS_J, xy.intersection(yz))
    assert_points_eq(MINUS_J, yz.intersection(xy))
    assert xy.intersection(GreatCircle.from_pole((0.0, 0.0, 2.0), TEST_PRECISION)) is None
    assert xy.intersection(xy.reverse()) is None


def test_circle_angle() -> None:
    xy = GreatCircle.from_pole((0.0, 0.0, 1.0), TEST_PRECISION)
    tilted = GreatCircle.from_pole((0.0, math.sin(0.3), math.cos(0.3)), TEST_PRECISION)
    assert xy.angle(tilted) == pytest.approx(0.3)
    # Signed relative to the intersection point
    assert xy.angle(tilted, MINUS_I) == pytest.approx(0.3)
    assert xy.angle(tilted, PLUS_I) == pytest.approx(-0.3)
    assert xy.angle(xy.reverse()) == pytest.approx(math.pi)


def test_circle_eq_and_similar_orientation() -> None:
    a = GreatCircle.from_pole((0.0, 0.0, 1.0), TEST_PRECISION)
    b = GreatCircle.from_pole((1e-12, 0.0, 1.0), TEST_PRECISION)
    c = GreatCircle.from_pole((0.0, 0.1, 1.0), TEST_PRECISION)
    assert a.eq(b)
    assert not a.eq(c)
    assert a.similar_orientation(c)
    assert a.is_same_circle(b.reverse())


def test_circle_arc_takes_increasing_azimuth() -> None:
    circle = GreatCircle.from_points(PLUS_I, PLUS_J, TEST_PRECISION)
    arc = circle.arc(Point2S.of(1.75 * math.pi, HALF_PI), Point2S.of(0.25 * math.pi, HALF_PI))
    assert arc.size == pytest.approx(HALF_PI)
    assert arc.contains(PLUS_I)
    with pytest.raises(DegenerateGeometryError):
        circle.arc(PLUS_J, PLUS_I)
