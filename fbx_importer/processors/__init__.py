"""Mesh processors applied to imported scenes."""

from .base import MeshProcessor
from .triangulate import TriangulateProcessor, triangulate_face

__all__ = ["MeshProcessor", "TriangulateProcessor", "triangulate_face"]
