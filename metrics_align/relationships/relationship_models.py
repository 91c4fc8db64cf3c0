from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class AlignmentClass(str, Enum):
    HIGH = "high-alignment"
    MEDIUM = "medium-alignment"


HIGH_ALIGNMENT_THRESHOLD = 80


def classify_alignment(strength: float) -> AlignmentClass:
    """strength >= 80 is high alignment, anything below is medium."""
    if strength >= HIGH_ALIGNMENT_THRESHOLD:
        return AlignmentClass.HIGH
    return AlignmentClass.MEDIUM


@dataclass(frozen=True)
class DepartmentNode:
    """A department cluster in the relationship graph and the metrics it owns."""
    id: str
    name: str
    color: str
    metrics: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RelationshipEdge:
    """
    A pairing of two metrics (by name) across departments.
    strength is a 0-100 alignment score; the alignment class is derived from it.
    """
    source: str
    target: str
    strength: int

    @property
    def alignment_class(self) -> AlignmentClass:
        return classify_alignment(self.strength)


@dataclass(frozen=True)
class NodePosition:
    """Percentages of the canvas width/height."""
    x: float
    y: float


@dataclass(frozen=True)
class EdgeLine:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class EdgeStyle:
    color: str
    dash: str
    width: int
    opacity: float


@dataclass(frozen=True)
class PositionedNode:
    node: DepartmentNode
    position: NodePosition


@dataclass(frozen=True)
class PositionedEdge:
    edge: RelationshipEdge
    line: EdgeLine
    style: EdgeStyle


@dataclass
class GraphLayout:
    nodes: List[PositionedNode] = field(default_factory=list)
    edges: List[PositionedEdge] = field(default_factory=list)


@dataclass
class RelationshipGraph:
    """
    A container for department nodes (in render order) and metric edges.
    """
    departments: List[DepartmentNode] = field(default_factory=list)
    edges: List[RelationshipEdge] = field(default_factory=list)

    def get_department_ids(self) -> List[str]:
        return [d.id for d in self.departments]

    def get_metric_names(self) -> List[str]:
        return [m for d in self.departments for m in d.metrics]
