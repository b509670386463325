"""Tests for Vector3 / Point3 algebra and parsing."""

import math

import pytest

from visu3d.errors import DegenerateVectorError, ParseError
from visu3d.utils.vector_operations import (
    EPSILON,
    Point3,
    Vector3,
    normalize_vector,
    reflect_vector,
    vector_cross,
    vector_dot,
)


class TestArithmetic:
    def test_add_and_subtract(self):
        assert Vector3(1, 2, 3) + Vector3(4, 5, 6) == Vector3(5, 7, 9)
        assert Vector3(4, 5, 6) - Vector3(1, 2, 3) == Vector3(3, 3, 3)

    def test_scale_both_sides(self):
        assert Vector3(1, -2, 3) * 2 == Vector3(2, -4, 6)
        assert 0.5 * Vector3(2, 4, 6) == Vector3(1, 2, 3)

    def test_negate(self):
        assert -Vector3(1, -2, 0) == Vector3(-1, 2, 0)

    def test_dot_and_cross(self):
        x, y, z = Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1)
        assert vector_dot(x, y) == 0
        assert vector_dot(Vector3(1, 2, 3), Vector3(4, 5, 6)) == 32
        assert vector_cross(x, y) == z
        assert vector_cross(y, z) == x
        assert vector_cross(z, x) == y

    def test_norms(self):
        v = Vector3(3, 4, 12)
        assert v.squared_norm() == 169
        assert v.norm() == 13

    def test_point_vector_mix(self):
        p = Point3(1, 1, 1)
        q = Point3(4, 5, 1)
        assert q - p == Vector3(3, 4, 0)
        assert p + Vector3(3, 4, 0) == q
        assert q - Vector3(3, 4, 0) == p
        assert (q - p).squared_norm() == 25

    def test_point_plus_point_is_rejected(self):
        with pytest.raises(TypeError):
            Point3(0, 0, 0) + Point3(1, 1, 1)

    def test_values_are_immutable(self):
        v = Vector3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5


class TestNormalize:
    @pytest.mark.parametrize("v", [Vector3(1, 2, 3), Vector3(-1e-3, 0, 2e-3), Vector3(100, -200, 0.5)])
    def test_normalized_vectors_are_unit(self, v):
        unit = normalize_vector(v)
        assert unit.is_unit()
        assert unit.norm() == pytest.approx(1.0, abs=EPSILON)

    def test_zero_vector_raises(self):
        with pytest.raises(DegenerateVectorError):
            Vector3(0, 0, 0).normalize()

    def test_zero_vector_error_is_a_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            Vector3(1e-9, 0, 0).normalize()

    def test_is_unit_tolerance(self):
        assert Vector3(1, 0, 0).is_unit()
        assert not Vector3(1.001, 0, 0).is_unit()

    def test_reflect(self):
        incoming = Vector3(1, -1, 0).normalize()
        reflected = reflect_vector(incoming, Vector3(0, 1, 0))
        assert reflected.x == pytest.approx(incoming.x)
        assert reflected.y == pytest.approx(-incoming.y)
        assert reflected.z == pytest.approx(0.0)

    def test_reflect_matches_mirror_of_view_vector(self):
        incoming = Vector3(0.3, -0.8, 0.5).normalize()
        normal = Vector3(0, 1, 0)
        view = -incoming
        expected = normal * (2 * vector_dot(normal, view)) - view
        reflected = reflect_vector(incoming, normal)
        assert (reflected.x, reflected.y, reflected.z) == pytest.approx((expected.x, expected.y, expected.z))

    def test_head_on_reflection_comes_back(self):
        assert reflect_vector(Vector3(1, 0, 0), Vector3(-1, 0, 0)) == Vector3(-1, 0, 0)


class TestParsing:
    def test_parse_components(self):
        v = Vector3.parse("(1.50, -2.00, 3.00)")
        assert (v.x, v.y, v.z) == (1.5, -2.0, 3.0)

    def test_parse_surrounding_whitespace(self):
        assert Point3.parse("  (0, 1 ,2)  ") == Point3(0, 1, 2)

    def test_round_trip_through_str(self):
        v = Vector3(math.pi, -1.0 / 3.0, 42.0)
        parsed = Vector3.parse(str(v))
        assert parsed.x == pytest.approx(v.x, abs=0.005)
        assert parsed.y == pytest.approx(v.y, abs=0.005)
        assert parsed.z == pytest.approx(v.z, abs=0.005)

    def test_str_format(self):
        assert str(Point3(1, -2, 0.125)) == "(1.00, -2.00, 0.12)"

    @pytest.mark.parametrize(
        "text",
        ["1, 2, 3", "(1, 2)", "(1, 2, 3, 4)", "(1, two, 3)", "(1, 2, 3", "", "()"],
    )
    def test_malformed_text(self, text):
        with pytest.raises(ParseError):
            Vector3.parse(text)

    def test_non_string(self):
        with pytest.raises(ParseError):
            Point3.parse(3.0)
