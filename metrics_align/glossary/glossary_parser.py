import datetime
import toml
from typing import Any, Dict

from .glossary_models import AlignmentStatus, Department, MetricCatalog, MetricRecord


def parse_metric_catalog_toml(toml_str: str) -> MetricCatalog:
    """
    Parse a TOML string of glossary entries.
    Example structure:

    [[metrics]]
    id = "1"
    name = "Qualified Lead"
    definition = "A prospect who ..."
    department = "Sales"
    formula = "Leads with score >= 75 AND (demo requested OR pricing inquiry)"
    aliases = ["SQL", "Sales Qualified Lead"]
    related_metrics = ["Lead Score", "Conversion Rate"]
    last_updated = 2024-06-08
    owner = "Sarah Johnson"
    alignment = "conflicted"
    """
    data = toml.loads(toml_str)
    raw_metrics = data.get("metrics", [])

    metric_defs = []
    for raw_m in raw_metrics:
        metric_defs.append(_parse_single_metric(raw_m))

    return MetricCatalog(metrics=metric_defs)


def load_metric_catalog(path: str) -> MetricCatalog:
    with open(path, "r") as f:
        return parse_metric_catalog_toml(f.read())


def _parse_single_metric(raw_m: Dict[str, Any]) -> MetricRecord:
    metric_id = str(raw_m["id"])
    name = raw_m.get("name", metric_id)

    # Enumerations
    department = Department.from_value(raw_m["department"])
    try:
        alignment = AlignmentStatus(raw_m.get("alignment", "unmapped"))
    except ValueError:
        raise ValueError(f"Metric '{metric_id}' has unknown alignment '{raw_m.get('alignment')}'.")

    return MetricRecord(
        id=metric_id,
        name=name,
        definition=raw_m.get("definition", ""),
        department=department,
        owner=raw_m.get("owner", "Unknown"),
        last_updated=parse_date(raw_m["last_updated"]),
        alignment=alignment,
        formula=raw_m.get("formula"),
        aliases=tuple(raw_m.get("aliases", [])),
        related_metrics=tuple(raw_m.get("related_metrics", [])),
    )


def parse_date(value: Any) -> datetime.date:
    # toml gives native dates for bare 2024-06-08, strings when quoted
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value))
