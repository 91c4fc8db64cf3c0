import toml
from typing import Any, Dict

from metrics_align.glossary.glossary_models import Department
from .translation_models import SuggestedMapping, TranslationResult, build_translation_key


def parse_translations_toml(toml_str: str) -> Dict[str, TranslationResult]:
    """
    Parse canned translations into a dict keyed by lookup key.
    Example structure:

    [[translations]]
    source_metric = "Qualified Lead"
    source_dept = "Sales"
    target_dept = "Marketing"
    translation = "Marketing Qualified Lead (MQL)"
    confidence = 92
    explanation = "..."
    key_differences = ["...", "..."]

    [translations.suggested_mapping]
    formula = "MQL + Lead Score >= 75"
    attributes = ["Engagement Score"]
    frequency = "Real-time sync between departments"

    The key is derived from the entry itself unless an explicit `key` is given;
    an explicit key lets an entry answer to a shorthand metric name.
    """
    data = toml.loads(toml_str)
    translations = {}
    for raw_t in data.get("translations", []):
        key, result = _parse_single_translation(raw_t)
        if key in translations:
            raise ValueError(f"Duplicate translation key '{key}'.")
        translations[key] = result
    return translations


def load_translations(path: str) -> Dict[str, TranslationResult]:
    with open(path, "r") as f:
        return parse_translations_toml(f.read())


def _parse_single_translation(raw_t: Dict[str, Any]):
    source_dept = Department.from_value(raw_t["source_dept"]).value
    target_dept = Department.from_value(raw_t["target_dept"]).value

    mapping = raw_t.get("suggested_mapping", {})
    result = TranslationResult(
        source_metric=raw_t["source_metric"],
        source_dept=source_dept,
        target_dept=target_dept,
        translation=raw_t["translation"],
        confidence=int(raw_t["confidence"]),
        explanation=raw_t.get("explanation", ""),
        key_differences=tuple(raw_t.get("key_differences", [])),
        suggested_mapping=SuggestedMapping(
            formula=mapping.get("formula", ""),
            attributes=tuple(mapping.get("attributes", [])),
            frequency=mapping.get("frequency", ""),
        ),
    )
    key = raw_t.get("key") or build_translation_key(result.source_metric, source_dept, target_dept)
    return key, result
