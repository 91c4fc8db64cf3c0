import pytest
import toml

from metrics_align.core.exceptions import InvalidFilterValue, InvalidMetricReference
from metrics_align.core.settings import Settings
from metrics_align.relationships.graph_layout import EDGE_LINES, NODE_SLOTS, compute_layout, edge_style
from metrics_align.relationships.relationship_models import (
    AlignmentClass,
    DepartmentNode,
    RelationshipEdge,
    classify_alignment,
)
from metrics_align.relationships.relationship_parser import (
    find_type_mismatches,
    load_relationship_graph,
    parse_relationship_graph_toml,
)
from metrics_align.relationships.relationship_service import RelationshipGraphService

SAMPLE_PATH = Settings().definition_path("relationship_graph.toml")


def _sample_service() -> RelationshipGraphService:
    svc = RelationshipGraphService()
    svc.load_relationship_graph(load_relationship_graph(SAMPLE_PATH))
    return svc


def test_sample_graph_loads_and_validates():
    svc = _sample_service()
    assert svc.validate_relationship_graph() is True
    assert [d.id for d in svc.departments()] == ["sales", "marketing", "product", "finance", "cs"]
    assert len(svc.all_edges()) == 7
    assert svc.department_for_metric("CAC").name == "Finance"


def test_alignment_class_follows_strength():
    svc = _sample_service()
    for edge in svc.all_edges():
        assert (edge.alignment_class == AlignmentClass.HIGH) == (edge.strength >= 80)

    assert classify_alignment(80) == AlignmentClass.HIGH
    assert classify_alignment(79) == AlignmentClass.MEDIUM


def test_sample_declared_types_agree_with_strength():
    with open(SAMPLE_PATH, "r") as f:
        raw = toml.load(f)
    assert find_type_mismatches(raw["connections"]) == []


def test_declared_type_mismatch_is_flagged_and_ignored():
    toml_str = """
    [[departments]]
    id = "sales"
    name = "Sales"
    metrics = ["A"]

    [[departments]]
    id = "marketing"
    name = "Marketing"
    metrics = ["B"]

    [[connections]]
    from = "A"
    to = "B"
    strength = 79
    type = "high-alignment"
    """
    mismatches = find_type_mismatches(toml.loads(toml_str)["connections"])
    assert mismatches == [{
        "from": "A",
        "to": "B",
        "strength": 79,
        "declared": "high-alignment",
        "derived": "medium-alignment",
    }]

    graph = parse_relationship_graph_toml(toml_str)
    assert graph.edges[0].alignment_class == AlignmentClass.MEDIUM


def test_strong_alignments_and_conflicts():
    svc = _sample_service()
    assert [e.strength for e in svc.strong_alignments()] == [92, 87, 94, 83]
    assert [e.strength for e in svc.potential_conflicts()] == [65, 78, 71]


def test_edge_style():
    high = edge_style(RelationshipEdge(source="A", target="B", strength=92))
    assert (high.color, high.dash, high.width, high.opacity) == ("#10b981", "none", 3, 0.7)

    medium = edge_style(RelationshipEdge(source="A", target="B", strength=78))
    assert (medium.color, medium.dash, medium.width) == ("#f59e0b", "5,5", 2)

    # exactly 80 is high alignment but still drawn with the thin line
    boundary = edge_style(RelationshipEdge(source="A", target="B", strength=80))
    assert (boundary.color, boundary.width) == ("#10b981", 2)


def test_department_filter_does_not_narrow_edges():
    svc = _sample_service()
    assert svc.visible_edges("sales") == svc.all_edges()
    assert svc.visible_edges() == svc.all_edges()
    with pytest.raises(InvalidFilterValue):
        svc.visible_edges("legal")


def test_layout_uses_fixed_slots():
    svc = _sample_service()
    layout = svc.layout()

    positions = {p.node.id: (p.position.x, p.position.y) for p in layout.nodes}
    assert positions["sales"] == (10, 20)
    assert positions["cs"] == (45, 45)

    assert len(layout.edges) == 7
    assert layout.edges[0].line == EDGE_LINES[0]
    assert layout.edges[0].style.width == 3


def test_layout_limits():
    nodes = [DepartmentNode(id=f"d{i}", name=f"D{i}", color="gray") for i in range(len(NODE_SLOTS) + 1)]
    with pytest.raises(ValueError):
        compute_layout(nodes, [])

    edges = [RelationshipEdge(source="A", target="B", strength=50) for _ in range(len(EDGE_LINES) + 1)]
    layout = compute_layout([], edges)
    assert layout.edges[-1].line == EDGE_LINES[0]


def test_connected_metrics():
    svc = _sample_service()
    assert svc.get_connected_metrics("Qualified Lead") == {
        "MQL", "User Activation", "Health Score", "Pipeline Value", "Churn Rate",
    }
    assert svc.get_connected_metrics("CAC") == {"Campaign ROI"}
    assert svc.get_connected_metrics("DAU") == set()

    with pytest.raises(InvalidMetricReference):
        svc.get_connected_metrics("Ghost")


def test_invalid_graph_definitions():
    toml_str = """
    [[departments]]
    id = "sales"
    metrics = ["A"]

    [[connections]]
    from = "A"
    to = "Ghost"
    strength = 50
    """
    svc = RelationshipGraphService()
    svc.load_relationship_graph(parse_relationship_graph_toml(toml_str))
    with pytest.raises(InvalidMetricReference):
        svc.validate_relationship_graph()

    with pytest.raises(ValueError):
        parse_relationship_graph_toml(toml_str.replace("strength = 50", "strength = 150"))
