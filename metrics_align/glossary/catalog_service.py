import logging
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from metrics_align.core.exceptions import DuplicateIdError, InvalidFilterValue
from .glossary_models import AlignmentStatus, Department, MetricCatalog, MetricRecord

logger = logging.getLogger(__name__)

ALL = "all"

DepartmentFilter = Union[str, Department]
AlignmentFilter = Union[str, AlignmentStatus]


def filter_metrics(
    records: Iterable[MetricRecord],
    search_term: str = "",
    department: DepartmentFilter = ALL,
    alignment: AlignmentFilter = ALL,
) -> List[MetricRecord]:
    """
    Returns the records matching every selector, in their original order.

    - search_term: case-insensitive substring of name, definition or any alias.
      An empty term matches everything.
    - department / alignment: "all" or an exact match.
    """
    dept = _resolve_department(department)
    status = _resolve_alignment(alignment)
    needle = search_term.lower()

    return [
        m for m in records
        if _matches_search(m, needle)
        and (dept is None or m.department == dept)
        and (status is None or m.alignment == status)
    ]


def _matches_search(metric: MetricRecord, needle: str) -> bool:
    if needle == "":
        return True
    return (
        needle in metric.name.lower()
        or needle in metric.definition.lower()
        or any(needle in alias.lower() for alias in metric.aliases)
    )


def _resolve_department(value: DepartmentFilter) -> Optional[Department]:
    if value == ALL:
        return None
    if isinstance(value, Department):
        return value
    try:
        return Department.from_value(value)
    except ValueError:
        raise InvalidFilterValue(f"Unknown department filter '{value}'.")


def _resolve_alignment(value: AlignmentFilter) -> Optional[AlignmentStatus]:
    if value == ALL:
        return None
    try:
        return AlignmentStatus(value)
    except ValueError:
        raise InvalidFilterValue(f"Unknown alignment filter '{value}'.")


class CatalogService:
    def __init__(self):
        self._catalog: MetricCatalog = MetricCatalog()
        self._metrics_by_id: Dict[str, MetricRecord] = {}

    def load_metric_catalog(self, catalog: MetricCatalog):
        self._catalog = catalog
        self._metrics_by_id.clear()
        for m in catalog.metrics:
            self._metrics_by_id[m.id] = m
        logger.info("Loaded %d glossary metrics", len(catalog.metrics))

    def validate_metric_catalog(self) -> bool:
        ids = self._catalog.get_metric_ids()
        if len(ids) != len(set(ids)):
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            raise DuplicateIdError(f"Duplicate metric IDs found: {dupes}")

        unresolved = self.unresolved_related_metrics()
        if unresolved:
            # related metrics are informational, so this is not fatal
            logger.warning("Related metrics not defined in the glossary: %s", unresolved)
        return True

    def get_metric_by_id(self, metric_id: str) -> MetricRecord:
        return self._metrics_by_id[metric_id]

    def all_metrics(self) -> List[MetricRecord]:
        return list(self._catalog.metrics)

    def get_catalog(self) -> MetricCatalog:
        return self._catalog

    def filter_metrics(
        self,
        search_term: str = "",
        department: DepartmentFilter = ALL,
        alignment: AlignmentFilter = ALL,
    ) -> List[MetricRecord]:
        return filter_metrics(self._catalog.metrics, search_term, department, alignment)

    def unresolved_related_metrics(self) -> Dict[str, List[str]]:
        """
        Returns {metric_id: [related names not in the glossary]} for metrics
        whose related_metrics point outside the catalog.
        """
        known = set(self._catalog.get_metric_names())
        unresolved = {}
        for m in self._catalog.metrics:
            missing = [name for name in m.related_metrics if name not in known]
            if missing:
                unresolved[m.id] = missing
        return unresolved

    def department_summary(self) -> pd.DataFrame:
        """
        Metric counts per department (rows) and alignment status (columns).
        Every department and status appears, even with a zero count.
        """
        frame = pd.DataFrame(
            {
                "department": [m.department.value for m in self._catalog.metrics],
                "alignment": [m.alignment.value for m in self._catalog.metrics],
            }
        )
        summary = pd.crosstab(frame["department"], frame["alignment"])
        summary = summary.reindex(
            index=[d.value for d in Department],
            columns=[s.value for s in AlignmentStatus],
            fill_value=0,
        )
        summary["total"] = summary.sum(axis=1)
        return summary
