"""Mesh processor protocol."""

from __future__ import annotations

from typing import Protocol

from ..models import Mesh


class MeshProcessor(Protocol):
    """Protocol for post-import passes that rewrite a mesh in place.

    Processors may replace ``vertices`` and ``faces`` but must leave ``name``
    untouched.
    """

    id: str

    def process(self, mesh: Mesh) -> None:
        """Mutate ``mesh``."""
