"""Node tree parsing.

A node record is laid out as::

    u32 end_offset | u32 property_count | u32 property_byte_length
    u8 name_length | name | properties | [child records]* | 13 zero bytes

``end_offset == 0`` marks the end of a sibling list. The zero block is only
present when the record has room for nested records. Children are decoded with
an explicit stack so hostile nesting is bounded by ``ParserLimits.max_depth``
rather than by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..models import NodeRecord, Property
from .exceptions import FBXValidationError
from .limits import ParserLimits
from .properties import parse_properties
from .reader import BinaryReader

logger = logging.getLogger(__name__)

# Three zeroed u32 fields and a zeroed name length.
SENTINEL_LENGTH = 4 * 3 + 1


@dataclass
class _OpenNode:
    """A record whose header and properties are read but whose children are not."""

    name: str
    properties: List[Property]
    end_offset: int
    has_children: bool
    children: List[NodeRecord] = field(default_factory=list)

    @property
    def children_end(self) -> int:
        return self.end_offset - SENTINEL_LENGTH

    def build(self) -> NodeRecord:
        return NodeRecord(
            name=self.name,
            properties=tuple(self.properties),
            children=tuple(self.children),
        )


def _open_node(reader: BinaryReader, limits: ParserLimits) -> Optional[_OpenNode]:
    file_length = reader.length
    record_offset = reader.tell()
    end_offset = reader.read_u32()
    if end_offset == 0:
        return None

    if end_offset >= file_length:
        raise FBXValidationError(
            f"End offset {end_offset} is outside bounds of file ({file_length} bytes)",
            offset=record_offset,
        )

    property_count = reader.read_u32()
    property_byte_length = reader.read_u32()
    name = reader.read_name()

    properties_start = reader.tell()
    if properties_start + property_byte_length > file_length:
        raise FBXValidationError(
            f"Property length {property_byte_length} of node '{name}' is out of bounds",
            offset=properties_start,
        )

    properties = parse_properties(reader, property_count, limits)
    consumed = reader.tell() - properties_start
    if consumed != property_byte_length:
        raise FBXValidationError(
            f"Node '{name}' declares {property_byte_length} property bytes but {consumed} were read",
            offset=properties_start,
        )

    position = reader.tell()
    has_children = position < end_offset
    if has_children and end_offset - position < SENTINEL_LENGTH:
        raise FBXValidationError(
            f"Insufficient bytes at end of node '{name}' for the sentinel block",
            offset=position,
        )

    return _OpenNode(
        name=name,
        properties=properties,
        end_offset=end_offset,
        has_children=has_children,
    )


def _close_node(reader: BinaryReader, node: _OpenNode) -> None:
    if node.has_children:
        sentinel_offset = reader.tell()
        sentinel = reader.read_exact(SENTINEL_LENGTH)
        if any(sentinel):
            raise FBXValidationError(
                f"Sentinel block of node '{node.name}' contains non-zero values",
                offset=sentinel_offset,
            )

    position = reader.tell()
    if position != node.end_offset:
        raise FBXValidationError(
            f"End offset {node.end_offset} of node '{node.name}' not reached exactly (stopped at {position})",
            offset=position,
        )


def parse_node(reader: BinaryReader, limits: Optional[ParserLimits] = None) -> Optional[NodeRecord]:
    """Decode one node record and all of its descendants.

    Returns ``None`` when the record at the cursor is a terminator.
    """

    limits = limits or ParserLimits()
    root = _open_node(reader, limits)
    if root is None:
        return None

    stack: List[_OpenNode] = [root]
    while stack:
        current = stack[-1]
        if current.has_children and reader.tell() < current.children_end:
            child = _open_node(reader, limits)
            if child is not None:
                if len(stack) >= limits.max_depth:
                    raise FBXValidationError(
                        f"Node nesting exceeds the maximum depth of {limits.max_depth}",
                        offset=reader.tell(),
                    )
                stack.append(child)
            continue

        _close_node(reader, current)
        stack.pop()
        record = current.build()
        if not stack:
            return record
        stack[-1].children.append(record)

    return None  # pragma: no cover - the loop always returns the root


def parse_nodes(reader: BinaryReader, limits: Optional[ParserLimits] = None) -> Tuple[NodeRecord, ...]:
    """Decode the top-level sibling list up to a terminator or end of stream."""

    limits = limits or ParserLimits()
    nodes: List[NodeRecord] = []
    while reader.tell() < reader.length:
        node = parse_node(reader, limits)
        if node is None:
            break
        logger.debug("Parsed top-level node '%s' with %d children", node.name, len(node.children))
        nodes.append(node)
    return tuple(nodes)
