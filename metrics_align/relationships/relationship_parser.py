import logging
import toml
from typing import Any, Dict, List

from .relationship_models import DepartmentNode, RelationshipEdge, RelationshipGraph, classify_alignment

logger = logging.getLogger(__name__)


def parse_relationship_graph_toml(toml_str: str) -> RelationshipGraph:
    """
    Parse department nodes and metric connections.
    Example structure:

    [[departments]]
    id = "sales"
    name = "Sales"
    color = "blue"
    metrics = ["Qualified Lead", "Pipeline Value"]

    [[connections]]
    from = "Qualified Lead"
    to = "MQL"
    strength = 92

    Older files may also carry `type = "high-alignment"` on a connection.
    That value is never stored: the class is always derived from strength,
    and a disagreeing `type` is logged.
    """
    data = toml.loads(toml_str)

    departments = [_parse_department(raw_d) for raw_d in data.get("departments", [])]

    raw_connections = data.get("connections", [])
    for mismatch in find_type_mismatches(raw_connections):
        logger.warning(
            "Connection %s -> %s declares type '%s' but strength %s classifies as '%s'; using strength",
            mismatch["from"], mismatch["to"], mismatch["declared"], mismatch["strength"], mismatch["derived"],
        )
    edges = [_parse_connection(raw_c) for raw_c in raw_connections]

    return RelationshipGraph(departments=departments, edges=edges)


def load_relationship_graph(path: str) -> RelationshipGraph:
    with open(path, "r") as f:
        return parse_relationship_graph_toml(f.read())


def find_type_mismatches(raw_connections: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Returns the connections whose declared `type` disagrees with the class
    derived from their strength. Connections without a `type` are skipped.
    """
    mismatches = []
    for raw_c in raw_connections:
        declared = raw_c.get("type")
        if declared is None:
            continue
        derived = classify_alignment(raw_c["strength"]).value
        if declared != derived:
            mismatches.append({
                "from": raw_c["from"],
                "to": raw_c["to"],
                "strength": raw_c["strength"],
                "declared": declared,
                "derived": derived,
            })
    return mismatches


def _parse_department(raw_d: Dict[str, Any]) -> DepartmentNode:
    return DepartmentNode(
        id=raw_d["id"],
        name=raw_d.get("name", raw_d["id"]),
        color=raw_d.get("color", "gray"),
        metrics=tuple(raw_d.get("metrics", [])),
    )


def _parse_connection(raw_c: Dict[str, Any]) -> RelationshipEdge:
    strength = raw_c["strength"]
    if not 0 <= strength <= 100:
        raise ValueError(f"Connection {raw_c['from']} -> {raw_c['to']} has strength {strength} outside [0, 100].")
    return RelationshipEdge(source=raw_c["from"], target=raw_c["to"], strength=int(strength))
