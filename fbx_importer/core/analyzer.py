"""High level import orchestration."""

from __future__ import annotations

import contextlib
import logging
from typing import BinaryIO, Iterable, Optional

from ..models import FBXDocument, Scene
from ..processors.base import MeshProcessor
from .exceptions import FBXImportError, FBXIOError, FBXValidationError
from .header import parse_header
from .importer import import_scene
from .limits import ParserLimits
from .nodes import parse_nodes
from .reader import BinaryReader

logger = logging.getLogger(__name__)


def read_document(stream: BinaryIO, limits: Optional[ParserLimits] = None) -> FBXDocument:
    """Decode the header and the top-level node list from ``stream``."""

    limits = limits or ParserLimits()
    reader = BinaryReader(stream)
    if limits.max_file_size is not None and reader.length > limits.max_file_size:
        raise FBXValidationError(
            f"File of {reader.length} bytes exceeds the limit of {limits.max_file_size} bytes"
        )

    header = parse_header(reader)
    logger.debug("FBX binary version %d, %d bytes", header.version, reader.length)
    nodes = parse_nodes(reader, limits)
    return FBXDocument(header=header, nodes=nodes)


def apply_processors(scene: Scene, processors: Iterable[MeshProcessor]) -> Scene:
    """Run every processor over every mesh, in registration order."""

    for processor in processors:
        for mesh in scene.meshes:
            name = mesh.name
            logger.debug("Running processor '%s' on mesh '%s'", processor.id, name)
            processor.process(mesh)
            if mesh.name != name:
                raise FBXImportError(
                    f"Processor '{processor.id}' renamed mesh '{name}' to '{mesh.name}'"
                )
    return scene


class FBXImporter(contextlib.AbstractContextManager["FBXImporter"]):
    """Loads an FBX binary file and builds its mesh scene."""

    def __init__(self, path: str, limits: Optional[ParserLimits] = None) -> None:
        self._path = path
        self._limits = limits or ParserLimits()
        self._document: Optional[FBXDocument] = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def document(self) -> FBXDocument:
        if self._document is None:
            raise RuntimeError("Importer not loaded. Call load() before accessing the document.")
        return self._document

    def load(self) -> "FBXImporter":
        if self._document is not None:
            return self

        try:
            with open(self._path, "rb") as stream:
                self._document = read_document(stream, self._limits)
        except OSError as exc:
            raise FBXIOError(f"Failed to read FBX file '{self._path}': {exc}") from exc
        return self

    def close(self) -> None:
        self._document = None

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None

    # Allow usage as context manager via `with FBXImporter(path) as importer:`
    def __enter__(self) -> "FBXImporter":
        return self.load()

    def run(self, processors: Iterable[MeshProcessor] = ()) -> Scene:
        """Build the scene and apply ``processors`` to each of its meshes."""

        scene = import_scene(self.document.nodes)
        return apply_processors(scene, processors)


def load_scene(
    path: str,
    processors: Iterable[MeshProcessor] = (),
    limits: Optional[ParserLimits] = None,
) -> Scene:
    """Import the meshes of the FBX binary file at ``path``."""

    with FBXImporter(path, limits) as importer:
        return importer.run(processors)
