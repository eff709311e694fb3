"""Build a mesh scene from a decoded node tree."""

from __future__ import annotations

import logging
import math
import struct
from typing import Iterable, Iterator, List, Optional, Sequence

from ..models import Face, Mesh, NodeRecord, PropertyType, Scene, Vector3
from .exceptions import FBXImportError
from .node_collection import NodeCollection

logger = logging.getLogger(__name__)

MESH_GEOMETRY_TYPE = "Mesh"


def iter_faces(indices: Iterable[int]) -> Iterator[Face]:
    """Split a polygon vertex index array into faces.

    A negative index closes the current face; its real value is ``~index``.
    Indices left over after the last negative value form a final face.
    """

    current: List[int] = []
    for index in indices:
        if index < 0:
            current.append(~index)
            yield Face(current)
            current = []
        else:
            current.append(index)
    if current:
        yield Face(current)


def _to_single(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        # Out-of-range doubles saturate like a C float cast.
        return math.copysign(math.inf, value)


def to_vertices(coordinates: Sequence[float]) -> List[Vector3]:
    """Group XYZ doubles into points reduced to 32-bit float precision.

    Values beyond the single precision range become signed infinity.
    """

    if len(coordinates) % 3:
        raise FBXImportError(
            f"Vertex coordinate count {len(coordinates)} is not a multiple of 3"
        )
    count = len(coordinates)
    try:
        singles = struct.unpack(f"<{count}f", struct.pack(f"<{count}f", *coordinates))
    except OverflowError:
        singles = tuple(_to_single(value) for value in coordinates)
    return [tuple(singles[i : i + 3]) for i in range(0, count, 3)]  # type: ignore[misc]


def _first_property(node: NodeRecord, expected: PropertyType, owner: str):
    if not node.properties:
        raise FBXImportError(f"'{node.name}' node of geometry '{owner}' has no properties")
    prop = node.properties[0]
    if prop.type is not expected:
        raise FBXImportError(
            f"'{node.name}' node of geometry '{owner}' holds {prop.type.name}, expected {expected.name}"
        )
    return prop.value


def _geometry_name(geometry: NodeRecord) -> str:
    prop = geometry.properties[1]
    if prop.type is not PropertyType.STRING:
        raise FBXImportError(f"Geometry name must be a string, got {prop.type.name}")
    return prop.value


def _geometry_type(geometry: NodeRecord) -> Optional[str]:
    prop = geometry.properties[2]
    return prop.value if prop.type is PropertyType.STRING else None


def build_mesh(geometry: NodeRecord) -> Mesh:
    """Build a mesh from a ``Geometry`` node of type ``Mesh``."""

    name = _geometry_name(geometry)
    children = NodeCollection.of_children(geometry)

    coordinates = _first_property(children.get("Vertices"), PropertyType.FLOAT64_ARRAY, name)
    indices = _first_property(children.get("PolygonVertexIndex"), PropertyType.INT32_ARRAY, name)

    mesh = Mesh(name=name, vertices=to_vertices(coordinates), faces=list(iter_faces(indices)))
    vertex_count = len(mesh.vertices)
    for number, face in enumerate(mesh.faces):
        for index in face.indices:
            if index >= vertex_count:
                raise FBXImportError(
                    f"Face {number} of geometry '{name}' references vertex {index}, "
                    f"but only {vertex_count} vertices exist"
                )
    degenerate = sum(1 for face in mesh.faces if len(face.indices) < 3)
    if degenerate:
        logger.debug("Mesh '%s' has %d faces with fewer than 3 indices", name, degenerate)
    return mesh


def import_scene(nodes: Iterable[NodeRecord]) -> Scene:
    """Collect every mesh geometry below the top-level ``Objects`` node.

    ``Objects``, ``Vertices`` and ``PolygonVertexIndex`` are required and their
    absence aborts the import. Geometry of other types is skipped, and a file
    without geometry yields an empty scene.
    """

    objects = NodeCollection(nodes).get("Objects")
    geometries = NodeCollection.of_children(objects).get_all("Geometry")
    if not geometries:
        logger.debug("No Geometry nodes found; scene is empty")

    meshes: List[Mesh] = []
    for geometry in geometries:
        if len(geometry.properties) < 3:
            logger.debug("Skipping Geometry node with %d properties", len(geometry.properties))
            continue

        geometry_type = _geometry_type(geometry)
        if geometry_type != MESH_GEOMETRY_TYPE:
            logger.debug("Skipping unsupported geometry type %r", geometry_type)
            continue

        mesh = build_mesh(geometry)
        logger.debug(
            "Imported mesh '%s' (%d vertices, %d faces)",
            mesh.name,
            len(mesh.vertices),
            len(mesh.faces),
        )
        meshes.append(mesh)

    return Scene(meshes=meshes)
