from dataclasses import dataclass
from typing import Any, Dict, Tuple

from metrics_align.glossary.glossary_models import Department


@dataclass(frozen=True)
class TranslationRequest:
    """
    A request to express one department's metric in another department's terms.
    Built by TranslationService once the inputs are known to be complete.
    """
    metric_name: str
    source_dept: Department
    target_dept: Department

    @property
    def lookup_key(self) -> str:
        """
        e.g. ("Qualified Lead", Sales, Marketing) -> "qualified-lead-sales-marketing"
        """
        return build_translation_key(self.metric_name, self.source_dept.value, self.target_dept.value)


def build_translation_key(metric_name: str, source_dept: str, target_dept: str) -> str:
    metric_slug = "-".join(metric_name.lower().split())
    return f"{metric_slug}-{source_dept.lower()}-{target_dept.lower()}"


@dataclass(frozen=True)
class SuggestedMapping:
    formula: str
    attributes: Tuple[str, ...]
    frequency: str


@dataclass(frozen=True)
class TranslationResult:
    """
    A suggested equivalence for a metric in the target department's terminology.
    confidence is an integer percentage in [0, 100].
    """
    source_metric: str
    source_dept: str
    target_dept: str
    translation: str
    confidence: int
    explanation: str
    key_differences: Tuple[str, ...]
    suggested_mapping: SuggestedMapping

    def __post_init__(self):
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"confidence must be within [0, 100], got {self.confidence}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_metric": self.source_metric,
            "source_dept": self.source_dept,
            "target_dept": self.target_dept,
            "translation": self.translation,
            "confidence": self.confidence,
            "explanation": self.explanation,
            "key_differences": list(self.key_differences),
            "suggested_mapping": {
                "formula": self.suggested_mapping.formula,
                "attributes": list(self.suggested_mapping.attributes),
                "frequency": self.suggested_mapping.frequency,
            },
        }
