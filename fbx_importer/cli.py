"""Command-line interface for fbx_importer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from .core import FBXError, FBXImporter, ParserLimits
from .core.limits import DEFAULT_MAX_ARRAY_BYTES, DEFAULT_MAX_DEPTH
from .core.traversal import iter_nodes
from .models import NodeRecord, Property, Scene
from .processors import MeshProcessor, TriangulateProcessor

# Arrays and blobs are summarised instead of printed in full.
_PREVIEW_LENGTH = 8


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import meshes from FBX binary files.")
    parser.add_argument("path", type=Path, help="Path to the FBX binary file to import.")
    parser.add_argument(
        "--triangulate",
        action="store_true",
        help="Split polygon faces into triangles after import.",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the decoded node tree before the mesh summary.",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum node nesting depth accepted (default: %(default)s).",
    )
    parser.add_argument(
        "--max-array-bytes",
        type=int,
        default=DEFAULT_MAX_ARRAY_BYTES,
        help="Maximum size of a single decoded array in bytes (default: %(default)s).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path: Path = args.path
    if not path.exists():
        parser.error(f"File not found: {path}")

    try:
        limits = ParserLimits(max_depth=args.max_depth, max_array_bytes=args.max_array_bytes)
    except ValueError as exc:
        parser.error(str(exc))

    processors: List[MeshProcessor] = []
    if args.triangulate:
        processors.append(TriangulateProcessor())

    try:
        with FBXImporter(str(path), limits) as importer:
            document = importer.document
            scene = importer.run(processors)
    except FBXError as exc:
        parser.error(str(exc))

    print(f"{path.name}: FBX binary version {document.header.version}")
    if args.tree:
        _print_node_tree(document.nodes)
    _print_scene_summary(scene)
    return 0


def _format_property(prop: Property) -> str:
    value = prop.value
    if prop.type.is_array:
        preview = ", ".join(str(item) for item in value[:_PREVIEW_LENGTH])
        if len(value) > _PREVIEW_LENGTH:
            preview += ", ..."
        return f"{prop.type.name.lower()}[{len(value)}]: [{preview}]"
    if isinstance(value, bytes):
        return f"{prop.type.name.lower()}: <{len(value)} bytes>"
    return f"{prop.type.name.lower()}: {value!r}"


def _print_node_tree(nodes: Iterable[NodeRecord]) -> None:
    print("Node tree:")
    for depth, node in iter_nodes(nodes):
        indent = "  " * (depth + 1)
        print(f"{indent}{node.name}")
        for prop in node.properties:
            print(f"{indent}  - {_format_property(prop)}")


def _print_scene_summary(scene: Scene) -> None:
    if not scene.meshes:
        print("Meshes: <none>")
        return

    print("Meshes:")
    for mesh in scene.meshes:
        print(f"  - {mesh.name} [vertices: {len(mesh.vertices)}, faces: {mesh.face_count}]")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
