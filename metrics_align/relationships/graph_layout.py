"""
Placement of the relationship graph on the canvas.

Positions are not computed from the graph: nodes take a fixed slot by render
order and edges take a fixed line by render order. Keeping this behind
compute_layout() lets a real layout algorithm (force-directed, layered, ...)
replace the tables without touching the renderer.
"""

from typing import List

from .relationship_models import (
    AlignmentClass,
    DepartmentNode,
    EdgeLine,
    EdgeStyle,
    GraphLayout,
    NodePosition,
    PositionedEdge,
    PositionedNode,
    RelationshipEdge,
)

NODE_SLOTS = (
    NodePosition(x=10, y=20),
    NodePosition(x=75, y=15),
    NodePosition(x=85, y=70),
    NodePosition(x=15, y=75),
    NodePosition(x=45, y=45),   # center
)

EDGE_LINES = (
    EdgeLine(x1=20, y1=30, x2=75, y2=25),
    EdgeLine(x1=20, y1=30, x2=85, y2=70),
    EdgeLine(x1=85, y1=70, x2=55, y2=55),
    EdgeLine(x1=75, y1=25, x2=25, y2=85),
    EdgeLine(x1=55, y1=55, x2=25, y2=85),
    EdgeLine(x1=85, y1=70, x2=55, y2=55),
    EdgeLine(x1=75, y1=25, x2=25, y2=85),
)

_EDGE_COLORS = {
    AlignmentClass.HIGH: "#10b981",
    AlignmentClass.MEDIUM: "#f59e0b",
}
_EDGE_DASHES = {
    AlignmentClass.HIGH: "none",
    AlignmentClass.MEDIUM: "5,5",
}
EDGE_OPACITY = 0.7


def edge_style(edge: RelationshipEdge) -> EdgeStyle:
    """Color and dash follow the alignment class; lines are thicker above strength 80."""
    alignment = edge.alignment_class
    return EdgeStyle(
        color=_EDGE_COLORS[alignment],
        dash=_EDGE_DASHES[alignment],
        width=3 if edge.strength > 80 else 2,
        opacity=EDGE_OPACITY,
    )


def compute_layout(nodes: List[DepartmentNode], edges: List[RelationshipEdge]) -> GraphLayout:
    if len(nodes) > len(NODE_SLOTS):
        raise ValueError(f"Only {len(NODE_SLOTS)} node slots are available, got {len(nodes)} departments.")

    positioned_nodes = [
        PositionedNode(node=node, position=NODE_SLOTS[i])
        for i, node in enumerate(nodes)
    ]
    # edge lines wrap around when there are more edges than lines
    positioned_edges = [
        PositionedEdge(edge=edge, line=EDGE_LINES[i % len(EDGE_LINES)], style=edge_style(edge))
        for i, edge in enumerate(edges)
    ]
    return GraphLayout(nodes=positioned_nodes, edges=positioned_edges)
