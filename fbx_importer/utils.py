"""Shared polygon geometry helpers used by the mesh processors."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from .models import Face, Vector3

Vector2 = Tuple[float, float]


def calculate_surface_normal(face: Face, vertices: Sequence[Vector3]) -> Vector3:
    """Return the unit normal of an arbitrary polygon using Newell's method.

    Degenerate polygons (zero area) yield ``(0.0, 0.0, 0.0)``.
    """

    nx = ny = nz = 0.0
    count = len(face.indices)
    for i in range(count):
        cx, cy, cz = vertices[face.indices[i]]
        px, py, pz = vertices[face.indices[(i + 1) % count]]
        nx += (cy - py) * (cz + pz)
        ny += (cz - pz) * (cx + px)
        nz += (cx - px) * (cy + py)

    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (nx / length, ny / length, nz / length)


def project_face_to_2d(face: Face, vertices: Sequence[Vector3]) -> List[Vector2]:
    """Drop the dominant normal axis so the face keeps its winding in 2D."""

    normal = calculate_surface_normal(face, vertices)
    ax, ay, az = (abs(component) for component in normal)

    axis_a, axis_b, sign = 0, 1, normal[2]
    if ax > ay:
        if ax > az:
            axis_a, axis_b, sign = 1, 2, normal[0]
    elif ay > az:
        axis_a, axis_b, sign = 2, 0, normal[1]

    if sign < 0.0:
        axis_a, axis_b = axis_b, axis_a

    return [(vertices[index][axis_a], vertices[index][axis_b]) for index in face.indices]


def triangle_area_2d(v1: Vector2, v2: Vector2, v3: Vector2) -> float:
    """Twice the signed area of ``v1 v2 v3``; negative when counter-clockwise."""

    return v1[0] * (v3[1] - v2[1]) + v2[0] * (v1[1] - v3[1]) + v3[0] * (v2[1] - v1[1])


def is_point_on_left_side_of_line(line_start: Vector2, line_end: Vector2, point: Vector2) -> bool:
    return triangle_area_2d(line_start, point, line_end) > 0.0


def is_point_in_triangle_2d(point: Vector2, v0: Vector2, v1: Vector2, v2: Vector2) -> bool:
    """Return ``True`` if ``point`` lies inside the triangle or on one of its edges."""

    def sign(a: Vector2, b: Vector2, c: Vector2) -> float:
        return (a[0] - c[0]) * (b[1] - c[1]) - (b[0] - c[0]) * (a[1] - c[1])

    d1 = sign(point, v0, v1)
    d2 = sign(point, v1, v2)
    d3 = sign(point, v2, v0)

    has_negative = d1 < 0.0 or d2 < 0.0 or d3 < 0.0
    has_positive = d1 > 0.0 or d2 > 0.0 or d3 > 0.0
    return not (has_negative and has_positive)


def triangle_contains_other_points_2d(
    v0: Vector2, v1: Vector2, v2: Vector2, points: Iterable[Vector2]
) -> bool:
    """Return ``True`` if any point other than the corners lies in the triangle."""

    corners = (v0, v1, v2)
    return any(
        point not in corners and is_point_in_triangle_2d(point, v0, v1, v2)
        for point in points
    )
