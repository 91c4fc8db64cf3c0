import logging
from typing import Dict, List, Set

from metrics_align.core.exceptions import DuplicateIdError, InvalidFilterValue, InvalidMetricReference
from .graph_layout import compute_layout
from .relationship_models import (
    DepartmentNode,
    GraphLayout,
    HIGH_ALIGNMENT_THRESHOLD,
    RelationshipEdge,
    RelationshipGraph,
)

logger = logging.getLogger(__name__)

ALL = "all"


class RelationshipGraphService:
    def __init__(self):
        self._graph: RelationshipGraph = RelationshipGraph()
        self._departments_by_id: Dict[str, DepartmentNode] = {}
        self._owner_by_metric: Dict[str, str] = {}

    def load_relationship_graph(self, graph: RelationshipGraph):
        self._graph = graph
        self._departments_by_id = {d.id: d for d in graph.departments}
        self._owner_by_metric = {m: d.id for d in graph.departments for m in d.metrics}
        logger.info(
            "Loaded relationship graph: %d departments, %d connections",
            len(graph.departments),
            len(graph.edges),
        )

    def validate_relationship_graph(self) -> bool:
        self._check_duplicate_ids()
        self._check_edges_exist()
        return True

    def _check_duplicate_ids(self):
        ids = self._graph.get_department_ids()
        if len(ids) != len(set(ids)):
            raise DuplicateIdError("Duplicate department IDs found.")

    def _check_edges_exist(self):
        for edge in self._graph.edges:
            for name in (edge.source, edge.target):
                if name not in self._owner_by_metric:
                    raise InvalidMetricReference(
                        f"Connection {edge.source} -> {edge.target} references '{name}', "
                        "which no department owns."
                    )

    def get_graph(self) -> RelationshipGraph:
        return self._graph

    def departments(self) -> List[DepartmentNode]:
        return list(self._graph.departments)

    def get_department_by_id(self, department_id: str) -> DepartmentNode:
        return self._departments_by_id[department_id]

    def department_for_metric(self, metric_name: str) -> DepartmentNode:
        return self._departments_by_id[self._owner_by_metric[metric_name]]

    def all_edges(self) -> List[RelationshipEdge]:
        return list(self._graph.edges)

    def visible_edges(self, department: str = ALL) -> List[RelationshipEdge]:
        """
        Edges to draw for the department selector. The selector is validated
        but does not narrow the result yet: every edge is drawn.
        """
        if department != ALL and department not in self._departments_by_id:
            raise InvalidFilterValue(f"Unknown department filter '{department}'.")
        return self.all_edges()

    def strong_alignments(self) -> List[RelationshipEdge]:
        return [e for e in self._graph.edges if e.strength >= HIGH_ALIGNMENT_THRESHOLD]

    def potential_conflicts(self) -> List[RelationshipEdge]:
        return [e for e in self._graph.edges if e.strength < HIGH_ALIGNMENT_THRESHOLD]

    def layout(self, department: str = ALL) -> GraphLayout:
        return compute_layout(self._graph.departments, self.visible_edges(department))

    def get_connected_metrics(self, metric_name: str) -> Set[str]:
        """
        Returns every metric reachable from metric_name over connections,
        in either direction, excluding metric_name itself.
        """
        if metric_name not in self._owner_by_metric:
            raise InvalidMetricReference(f"'{metric_name}' is not owned by any department.")

        adjacency: Dict[str, Set[str]] = {}
        for e in self._graph.edges:
            adjacency.setdefault(e.source, set()).add(e.target)
            adjacency.setdefault(e.target, set()).add(e.source)

        visited = set()
        stack = [metric_name]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            for adj in adjacency.get(current, ()):
                if adj not in visited:
                    stack.append(adj)
        visited.remove(metric_name)
        return visited
