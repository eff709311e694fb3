from __future__ import annotations

import pytest

from fbx_importer.models import Face
from fbx_importer.utils import (
    calculate_surface_normal,
    is_point_in_triangle_2d,
    project_face_to_2d,
    triangle_area_2d,
    triangle_contains_other_points_2d,
)

SQUARE = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]


def test_surface_normal_of_counter_clockwise_square_points_up():
    assert calculate_surface_normal(Face([0, 1, 2, 3]), SQUARE) == (0.0, 0.0, 1.0)


def test_surface_normal_follows_winding():
    assert calculate_surface_normal(Face([3, 2, 1, 0]), SQUARE) == (0.0, 0.0, -1.0)


def test_surface_normal_of_degenerate_face_is_zero():
    line = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0)]

    assert calculate_surface_normal(Face([0, 1, 2]), line) == (0.0, 0.0, 0.0)


def test_projection_drops_dominant_axis():
    wall = [(5.0, 0.0, 0.0), (5.0, 1.0, 0.0), (5.0, 1.0, 1.0), (5.0, 0.0, 1.0)]

    assert project_face_to_2d(Face([0, 1, 2, 3]), wall) == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


def test_projection_keeps_counter_clockwise_winding_for_flipped_faces():
    plane = project_face_to_2d(Face([3, 2, 1, 0]), SQUARE)

    assert triangle_area_2d(plane[0], plane[1], plane[2]) < 0.0


def test_triangle_area_sign():
    assert triangle_area_2d((0.0, 0.0), (1.0, 0.0), (1.0, 1.0)) == -1.0
    assert triangle_area_2d((0.0, 0.0), (1.0, 1.0), (1.0, 0.0)) == 1.0


@pytest.mark.parametrize(
    "v0, v1, v2, points, expected",
    [
        ((0.0, 0.0), (0.0, -10.0), (10.0, 10.0), [(5.5, 5.5)], True),
        ((0.0, 0.0), (0.0, -10.0), (10.0, -5.0), [(0.0, -5.0)], True),
        ((0.0, 0.0), (0.0, -10.0), (10.0, -5.0), [(-0.5, -5.0)], False),
        ((0.0, 0.0), (0.0, -10.0), (10.0, -5.0), [], False),
        ((0.0, 0.0), (0.0, -10.0), (10.0, -5.0), [(0.0, 0.0), (10.0, -5.0)], False),
    ],
)
def test_triangle_contains_other_points(v0, v1, v2, points, expected):
    assert triangle_contains_other_points_2d(v0, v1, v2, points) is expected


def test_point_in_triangle():
    assert is_point_in_triangle_2d((1.0, 1.0), (0.0, 0.0), (4.0, 0.0), (0.0, 4.0))
    assert not is_point_in_triangle_2d((3.0, 3.0), (0.0, 0.0), (4.0, 0.0), (0.0, 4.0))
