from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Tuple

from metrics_align.glossary.glossary_models import Department


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueType(str, Enum):
    DEFINITION = "definition"
    CALCULATION = "calculation"
    REPORTING = "reporting"
    OWNERSHIP = "ownership"


class IssueStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class MisalignmentIssue:
    """
    A recorded discrepancy between departments' definitions or calculations
    of related metrics.
    """
    id: str
    title: str
    severity: Severity
    type: IssueType
    departments: Tuple[Department, ...]
    description: str
    impact: str
    suggested_action: str
    detected_date: date
    status: IssueStatus

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "severity": self.severity.value,
            "type": self.type.value,
            "departments": [d.value for d in self.departments],
            "description": self.description,
            "impact": self.impact,
            "suggested_action": self.suggested_action,
            "detected_date": self.detected_date.isoformat(),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class IssueStats:
    total: int
    high: int
    resolved: int
    in_progress: int


@dataclass(frozen=True)
class DepartmentHealth:
    department: Department
    score: int      # 0-100
    issues: int


@dataclass
class MisalignmentRegistry:
    """
    A container for issues and the per-department health snapshot.
    """
    issues: List[MisalignmentIssue] = field(default_factory=list)
    department_health: List[DepartmentHealth] = field(default_factory=list)

    def get_issue_ids(self) -> List[str]:
        return [i.id for i in self.issues]
