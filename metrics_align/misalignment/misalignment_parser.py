import toml
from typing import Any, Dict

from metrics_align.glossary.glossary_models import Department
from metrics_align.glossary.glossary_parser import parse_date
from .misalignment_models import (
    DepartmentHealth,
    IssueStatus,
    IssueType,
    MisalignmentIssue,
    MisalignmentRegistry,
    Severity,
)


def parse_misalignments_toml(toml_str: str) -> MisalignmentRegistry:
    """
    Parse detected issues and the department health snapshot.
    Example structure:

    [[issues]]
    id = "1"
    title = "Lead Definition Conflict"
    severity = "high"
    type = "definition"
    departments = ["Sales", "Marketing"]
    description = "..."
    impact = "..."
    suggested_action = "..."
    detected_date = 2024-06-08
    status = "new"

    [[department_health]]
    department = "Sales"
    score = 78
    issues = 3
    """
    data = toml.loads(toml_str)

    issues = [_parse_single_issue(raw_i) for raw_i in data.get("issues", [])]
    health = [_parse_department_health(raw_h) for raw_h in data.get("department_health", [])]

    return MisalignmentRegistry(issues=issues, department_health=health)


def load_misalignments(path: str) -> MisalignmentRegistry:
    with open(path, "r") as f:
        return parse_misalignments_toml(f.read())


def _parse_single_issue(raw_i: Dict[str, Any]) -> MisalignmentIssue:
    issue_id = str(raw_i["id"])
    departments = tuple(Department.from_value(d) for d in raw_i.get("departments", []))
    if not departments:
        raise ValueError(f"Issue '{issue_id}' must name at least one department.")

    return MisalignmentIssue(
        id=issue_id,
        title=raw_i["title"],
        severity=Severity(raw_i["severity"]),
        type=IssueType(raw_i["type"]),
        departments=departments,
        description=raw_i.get("description", ""),
        impact=raw_i.get("impact", ""),
        suggested_action=raw_i.get("suggested_action", ""),
        detected_date=parse_date(raw_i["detected_date"]),
        status=IssueStatus(raw_i.get("status", "new")),
    )


def _parse_department_health(raw_h: Dict[str, Any]) -> DepartmentHealth:
    score = int(raw_h["score"])
    if not 0 <= score <= 100:
        raise ValueError(f"Health score for '{raw_h['department']}' out of range: {score}")
    return DepartmentHealth(
        department=Department.from_value(raw_h["department"]),
        score=score,
        issues=int(raw_h.get("issues", 0)),
    )
