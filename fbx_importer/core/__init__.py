"""Core infrastructure for FBX binary decoding and scene import."""

from .analyzer import FBXImporter, apply_processors, load_scene, read_document
from .exceptions import (
    FBXError,
    FBXFormatError,
    FBXImportError,
    FBXIOError,
    FBXValidationError,
    NoSuchNodeError,
)
from .limits import ParserLimits
from .node_collection import NodeCollection

__all__ = [
    "FBXImporter",
    "apply_processors",
    "load_scene",
    "read_document",
    "FBXError",
    "FBXFormatError",
    "FBXImportError",
    "FBXIOError",
    "FBXValidationError",
    "NoSuchNodeError",
    "ParserLimits",
    "NodeCollection",
]
