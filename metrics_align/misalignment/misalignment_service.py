import logging
from typing import Dict, Iterable, List

import pandas as pd

from metrics_align.core.exceptions import DuplicateIdError
from .misalignment_models import (
    DepartmentHealth,
    IssueStats,
    IssueStatus,
    MisalignmentIssue,
    MisalignmentRegistry,
    Severity,
)

logger = logging.getLogger(__name__)

_COUNTABLE_FIELDS = ("severity", "type", "status")


def aggregate_issue_stats(issues: Iterable[MisalignmentIssue]) -> IssueStats:
    """Headline counts for the detector: total, high severity, resolved, in progress."""
    issues = list(issues)
    return IssueStats(
        total=len(issues),
        high=sum(1 for i in issues if i.severity == Severity.HIGH),
        resolved=sum(1 for i in issues if i.status == IssueStatus.RESOLVED),
        in_progress=sum(1 for i in issues if i.status == IssueStatus.IN_PROGRESS),
    )


class MisalignmentService:
    """
    Read-only access to the misalignment registry. Status changes
    (assign owner, start resolution) are not supported.
    """

    def __init__(self):
        self._registry: MisalignmentRegistry = MisalignmentRegistry()
        self._issues_by_id: Dict[str, MisalignmentIssue] = {}

    def load_registry(self, registry: MisalignmentRegistry):
        self._registry = registry
        self._issues_by_id = {i.id: i for i in registry.issues}
        logger.info(
            "Loaded %d misalignment issues, %d department health rows",
            len(registry.issues),
            len(registry.department_health),
        )

    def validate_registry(self) -> bool:
        ids = self._registry.get_issue_ids()
        if len(ids) != len(set(ids)):
            raise DuplicateIdError("Duplicate issue IDs found.")
        depts = [h.department for h in self._registry.department_health]
        if len(depts) != len(set(depts)):
            raise DuplicateIdError("Department health listed more than once for a department.")
        return True

    def all_issues(self) -> List[MisalignmentIssue]:
        return list(self._registry.issues)

    def get_issue_by_id(self, issue_id: str) -> MisalignmentIssue:
        return self._issues_by_id[issue_id]

    def stats(self) -> IssueStats:
        return aggregate_issue_stats(self._registry.issues)

    def recent_issues(self, limit: int = 3) -> List[MisalignmentIssue]:
        """The first `limit` issues in registry order (the registry is kept newest first)."""
        return self._registry.issues[:limit]

    def department_health(self) -> List[DepartmentHealth]:
        return list(self._registry.department_health)

    def issues_frame(self) -> pd.DataFrame:
        """One row per issue; departments joined into a single display string."""
        rows = []
        for issue in self._registry.issues:
            row = issue.to_dict()
            row["departments"] = ", ".join(row["departments"])
            rows.append(row)
        columns = list(MisalignmentIssue.__dataclass_fields__)
        return pd.DataFrame(rows, columns=columns)

    def counts_by(self, field_name: str) -> Dict[str, int]:
        """
        Issue counts per value of severity, type or status.
        Values with no issues are omitted.
        """
        if field_name not in _COUNTABLE_FIELDS:
            raise ValueError(f"Cannot count issues by '{field_name}'. Use one of {_COUNTABLE_FIELDS}.")
        frame = self.issues_frame()
        if frame.empty:
            return {}
        counts = frame[field_name].value_counts()
        return {str(k): int(v) for k, v in counts.items()}
