"""Name-indexed view over one list of sibling node records."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from ..models import NodeRecord
from .exceptions import NoSuchNodeError


class NodeCollection:
    """Ordered multimap from node name to the sibling records carrying it.

    Only the given records are indexed; their children are not flattened in.
    Several siblings may share a name, ``get`` returns the first of them.
    """

    def __init__(self, records: Iterable[NodeRecord] = ()) -> None:
        self._nodes: Dict[str, List[NodeRecord]] = defaultdict(list)
        for record in records:
            self._nodes[record.name].append(record)

    @classmethod
    def of_children(cls, record: NodeRecord) -> "NodeCollection":
        return cls(record.children)

    def get(self, name: str) -> NodeRecord:
        records = self._nodes.get(name)
        if not records:
            raise NoSuchNodeError(name)
        return records[0]

    def get_all(self, name: str) -> List[NodeRecord]:
        return list(self._nodes.get(name, ()))

    def names(self) -> List[str]:
        return list(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return sum(len(records) for records in self._nodes.values())
