"""Domain models used across the importer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Tuple

Vector3 = Tuple[float, float, float]


class PropertyType(enum.Enum):
    """Property kinds keyed by their one-byte type tag."""

    INT16 = "Y"
    BOOL = "C"
    INT32 = "I"
    FLOAT32 = "F"
    FLOAT64 = "D"
    INT64 = "L"
    FLOAT32_ARRAY = "f"
    FLOAT64_ARRAY = "d"
    INT64_ARRAY = "l"
    INT32_ARRAY = "i"
    BOOL_ARRAY = "b"
    STRING = "S"
    BINARY = "R"

    @property
    def is_array(self) -> bool:
        return self.value in "fdlib"


@dataclass(frozen=True)
class Header:
    version: int


@dataclass(frozen=True)
class Property:
    """One decoded property value tagged with its type."""

    type: PropertyType
    value: Any


@dataclass(frozen=True)
class NodeRecord:
    name: str
    properties: Tuple[Property, ...] = ()
    children: Tuple["NodeRecord", ...] = ()


@dataclass(frozen=True)
class FBXDocument:
    """The raw decoded file: header plus the top-level node records."""

    header: Header
    nodes: Tuple[NodeRecord, ...]


@dataclass
class Face:
    indices: List[int]


@dataclass
class Mesh:
    name: str
    vertices: List[Vector3] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)

    @property
    def face_count(self) -> int:
        return len(self.faces)


@dataclass
class Scene:
    meshes: List[Mesh] = field(default_factory=list)
