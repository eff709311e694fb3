"""Utilities for traversing decoded node trees."""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from ..models import NodeRecord


def iter_nodes(roots: Iterable[NodeRecord]) -> Iterator[Tuple[int, NodeRecord]]:
    """Yield ``(depth, node)`` pairs depth-first, in document order."""

    stack = [(0, root) for root in reversed(tuple(roots))]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        for child in reversed(node.children):
            stack.append((depth + 1, child))
