from __future__ import annotations

import io

import pytest

import fbx_builder as fb
from fbx_builder import Node
from fbx_importer.core.limits import ParserLimits
from fbx_importer.core.reader import BinaryReader


@pytest.fixture
def limits() -> ParserLimits:
    return ParserLimits()


@pytest.fixture
def make_reader():
    def factory(data: bytes, position: int = 0) -> BinaryReader:
        stream = io.BytesIO(data)
        stream.seek(position)
        return BinaryReader(stream)

    return factory


@pytest.fixture
def quad_fbx(tmp_path):
    """A file with one quad mesh, one NURBS geometry and unrelated nodes."""

    nodes = [
        Node("FBXHeaderExtension", children=[Node("FBXVersion", [fb.i32(7400)])]),
        Node("Definitions", children=[Node("Count", [fb.i32(2)])]),
        Node(
            "Objects",
            children=[
                fb.mesh_geometry(
                    "Quad",
                    [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.0],
                    [0, 1, 2, -4],
                    compress=True,
                ),
                fb.mesh_geometry("Curve", [0.0, 0.0, 0.0], [], geometry_type="NurbsCurve"),
                Node("Model", [fb.i64(5), fb.string("Quad\x00\x01Model"), fb.string("Mesh")]),
            ],
        ),
        Node("Connections", children=[Node("C", [fb.string("OO"), fb.i64(1000), fb.i64(5)])]),
    ]
    path = tmp_path / "quad.fbx"
    path.write_bytes(fb.fbx_file(nodes, version=7400) + b"\xfa\xbc" * 8)
    return path
