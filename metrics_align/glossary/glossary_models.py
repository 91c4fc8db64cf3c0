from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple


class Department(str, Enum):
    SALES = "Sales"
    MARKETING = "Marketing"
    PRODUCT = "Product"
    FINANCE = "Finance"
    CUSTOMER_SUCCESS = "Customer Success"

    @property
    def short_id(self) -> str:
        """Short id used by the relationship graph, e.g. 'cs' for Customer Success."""
        return _DEPARTMENT_SHORT_IDS[self]

    @classmethod
    def from_value(cls, value: str) -> "Department":
        """Accepts a display name ('Customer Success') or a short id ('cs')."""
        for dept in cls:
            if value == dept.value or value == dept.short_id:
                return dept
        raise ValueError(f"Unknown department '{value}'. Expected one of {[d.value for d in cls]}")


_DEPARTMENT_SHORT_IDS = {
    Department.SALES: "sales",
    Department.MARKETING: "marketing",
    Department.PRODUCT: "product",
    Department.FINANCE: "finance",
    Department.CUSTOMER_SUCCESS: "cs",
}


class AlignmentStatus(str, Enum):
    """Whether a metric's definition agrees across departments."""
    ALIGNED = "aligned"
    CONFLICTED = "conflicted"
    UNMAPPED = "unmapped"


@dataclass(frozen=True)
class MetricRecord:
    """
    A single glossary entry from the TOML.
    related_metrics are names, and may point at metrics outside the catalog.
    """
    id: str
    name: str
    definition: str
    department: Department
    owner: str
    last_updated: date
    alignment: AlignmentStatus

    formula: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    related_metrics: Tuple[str, ...] = ()


@dataclass
class MetricCatalog:
    """
    A container for all glossary entries, in display order.
    """
    metrics: List[MetricRecord] = field(default_factory=list)

    def get_metric_ids(self) -> List[str]:
        """Returns the list of all metric IDs in the catalog."""
        return [m.id for m in self.metrics]

    def get_metric_names(self) -> List[str]:
        return [m.name for m in self.metrics]
