"""Decode FBX binary files into scenes of polygon meshes."""

from .core import (
    FBXError,
    FBXFormatError,
    FBXImporter,
    FBXImportError,
    FBXIOError,
    FBXValidationError,
    NodeCollection,
    NoSuchNodeError,
    ParserLimits,
    load_scene,
    read_document,
)
from .models import Face, FBXDocument, Header, Mesh, NodeRecord, Property, PropertyType, Scene
from .processors import MeshProcessor, TriangulateProcessor

__version__ = "0.1.0"

__all__ = [
    "FBXError",
    "FBXFormatError",
    "FBXImporter",
    "FBXImportError",
    "FBXIOError",
    "FBXValidationError",
    "NodeCollection",
    "NoSuchNodeError",
    "ParserLimits",
    "load_scene",
    "read_document",
    "Face",
    "FBXDocument",
    "Header",
    "Mesh",
    "NodeRecord",
    "Property",
    "PropertyType",
    "Scene",
    "MeshProcessor",
    "TriangulateProcessor",
]
