"""Ear-clipping triangulation of polygon faces."""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..models import Face, Mesh, Vector3
from ..utils import (
    is_point_on_left_side_of_line,
    project_face_to_2d,
    triangle_contains_other_points_2d,
)
from .base import MeshProcessor

logger = logging.getLogger(__name__)


def triangulate_face(face: Face, vertices: Sequence[Vector3]) -> List[Face]:
    """Split ``face`` into triangles by clipping ears.

    The face is projected onto the plane of its dominant normal axis so it is
    counter-clockwise in 2D; a vertex is an ear when it is convex and no other
    remaining vertex lies in the triangle it forms with its neighbours. Faces
    that already have 3 or fewer indices are returned unchanged.
    """

    if len(face.indices) <= 3:
        return [Face(list(face.indices))]

    plane = project_face_to_2d(face, vertices)
    remaining = list(range(len(face.indices)))
    triangles: List[Face] = []

    while len(remaining) > 3:
        for position, current in enumerate(remaining):
            previous = remaining[position - 1]
            following = remaining[(position + 1) % len(remaining)]
            v0, v1, v2 = plane[previous], plane[current], plane[following]

            if is_point_on_left_side_of_line(v0, v2, v1):
                continue  # reflex vertex

            others = (plane[i] for i in remaining if i not in (previous, current, following))
            if triangle_contains_other_points_2d(v0, v1, v2, others):
                continue

            triangles.append(
                Face([face.indices[previous], face.indices[current], face.indices[following]])
            )
            del remaining[position]
            break
        else:
            logger.warning(
                "No ear found in %d-gon; falling back to a triangle fan", len(remaining)
            )
            anchor = remaining[0]
            for left, right in zip(remaining[1:-1], remaining[2:]):
                triangles.append(Face([face.indices[anchor], face.indices[left], face.indices[right]]))
            return triangles

    triangles.append(Face([face.indices[i] for i in remaining]))
    return triangles


class TriangulateProcessor(MeshProcessor):
    """Replace every polygon face of a mesh with triangles."""

    id = "triangulate"

    def process(self, mesh: Mesh) -> None:
        faces: List[Face] = []
        for number, face in enumerate(mesh.faces, start=1):
            if len(face.indices) > 3:
                logger.debug(
                    "Triangulating face %d of %d in '%s'", number, len(mesh.faces), mesh.name
                )
            faces.extend(triangulate_face(face, mesh.vertices))
        mesh.faces = faces
