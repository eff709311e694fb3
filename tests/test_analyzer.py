from __future__ import annotations

import io

import pytest

import fbx_builder as fb
from fbx_importer import FBXImporter, TriangulateProcessor, load_scene
from fbx_importer.core.analyzer import apply_processors, read_document
from fbx_importer.core.exceptions import FBXImportError, FBXIOError, FBXValidationError
from fbx_importer.core.limits import ParserLimits
from fbx_importer.models import Face, Mesh, Scene


class RecordingProcessor:
    def __init__(self, id, log):
        self.id = id
        self.log = log

    def process(self, mesh):
        self.log.append((self.id, mesh.name))


class RenamingProcessor:
    id = "rename"

    def process(self, mesh):
        mesh.name = mesh.name.upper()


def test_read_document_returns_header_and_nodes(quad_fbx):
    with open(quad_fbx, "rb") as stream:
        document = read_document(stream)

    assert document.header.version == 7400
    assert [node.name for node in document.nodes] == [
        "FBXHeaderExtension",
        "Definitions",
        "Objects",
        "Connections",
    ]


def test_read_document_enforces_file_size_limit():
    data = fb.fbx_file([fb.Node("Objects")])

    with pytest.raises(FBXValidationError):
        read_document(io.BytesIO(data), ParserLimits(max_file_size=len(data) - 1))


def test_load_scene_imports_meshes(quad_fbx):
    scene = load_scene(str(quad_fbx))

    (mesh,) = scene.meshes
    assert mesh.name == "Quad"
    assert mesh.vertices == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    assert mesh.faces == [Face([0, 1, 2, 3])]


def test_load_scene_applies_processors(quad_fbx):
    scene = load_scene(str(quad_fbx), [TriangulateProcessor()])

    assert len(scene.meshes[0].faces) == 2


def test_importer_context_manager(quad_fbx):
    with FBXImporter(str(quad_fbx)) as importer:
        assert importer.path == str(quad_fbx)
        assert importer.document.header.version == 7400
        scene = importer.run()

    assert len(scene.meshes) == 1
    with pytest.raises(RuntimeError):
        importer.document


def test_document_before_load_raises():
    with pytest.raises(RuntimeError):
        FBXImporter("unused.fbx").document


def test_missing_file_raises_io_error(tmp_path):
    with pytest.raises(FBXIOError):
        load_scene(str(tmp_path / "missing.fbx"))


def test_processors_run_in_registration_order():
    log = []
    scene = Scene([Mesh("A"), Mesh("B")])

    apply_processors(scene, [RecordingProcessor("first", log), RecordingProcessor("second", log)])

    assert log == [("first", "A"), ("first", "B"), ("second", "A"), ("second", "B")]


def test_processor_must_not_rename_meshes():
    with pytest.raises(FBXImportError, match="renamed"):
        apply_processors(Scene([Mesh("a")]), [RenamingProcessor()])
