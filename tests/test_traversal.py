from __future__ import annotations

from fbx_importer.core.traversal import iter_nodes
from fbx_importer.models import NodeRecord


def tree():
    geometry = NodeRecord("Geometry", children=(NodeRecord("Vertices"), NodeRecord("Layer")))
    objects = NodeRecord("Objects", children=(geometry, NodeRecord("Geometry")))
    return (NodeRecord("FBXHeaderExtension"), objects)


def test_iter_nodes_is_depth_first_in_document_order():
    visited = [(depth, node.name) for depth, node in iter_nodes(tree())]

    assert visited == [
        (0, "FBXHeaderExtension"),
        (0, "Objects"),
        (1, "Geometry"),
        (2, "Vertices"),
        (2, "Layer"),
        (1, "Geometry"),
    ]


def test_iter_nodes_handles_deep_chains():
    node = NodeRecord("Leaf")
    for _ in range(5000):
        node = NodeRecord("N", children=(node,))

    depths = [depth for depth, _ in iter_nodes([node])]

    assert depths[-1] == 5000
