import itertools

import pytest

from metrics_align.core.exceptions import InvalidTranslationRequest
from metrics_align.core.settings import Settings
from metrics_align.glossary.glossary_models import Department
from metrics_align.translation.static_translation_provider import StaticTranslationProvider
from metrics_align.translation.translation_models import (
    SuggestedMapping,
    TranslationResult,
    build_translation_key,
)
from metrics_align.translation.translation_parser import load_translations, parse_translations_toml
from metrics_align.translation.translation_service import TranslationService
from metrics_align.translation.translation_templates import FALLBACK_CONFIDENCE, confidence_band


def _sample_service() -> TranslationService:
    translations = load_translations(Settings().definition_path("translations.toml"))
    return TranslationService(StaticTranslationProvider(translations))


def test_canned_translation_sales_to_marketing():
    svc = _sample_service()
    result = svc.translate("Qualified Lead", "Sales", "Marketing")

    assert result.translation == "Marketing Qualified Lead (MQL)"
    assert result.confidence == 92
    assert result.source_dept == "Sales"
    assert result.target_dept == "Marketing"
    assert len(result.key_differences) == 3
    assert result.suggested_mapping.frequency == "Real-time sync between departments"


def test_lookup_key_normalizes_case_and_whitespace():
    assert build_translation_key("Qualified  Lead", "Sales", "Customer Success") == \
        "qualified-lead-sales-customer success"

    svc = _sample_service()
    result = svc.translate("  qualified\tLEAD ", Department.SALES, Department.MARKETING)
    assert result.confidence == 92


def test_shorthand_key_for_activation():
    svc = _sample_service()

    result = svc.translate("Activation", "Product", "Sales")
    assert result.translation == "Trial-to-Paid Qualification"
    assert result.confidence == 87
    # the canned entry is filed under the shorthand, so the full name falls back
    full_name = svc.translate("User Activation", "Product", "Sales")
    assert full_name.confidence == FALLBACK_CONFIDENCE


def test_fallback_translation():
    svc = _sample_service()
    result = svc.translate("Foo Metric", "Sales", "Finance")

    assert result.confidence == 75
    assert result.translation == "Finance Equivalent of Foo Metric"
    assert result.source_metric == "Foo Metric"
    assert "Sales" in result.explanation and "Finance" in result.explanation
    assert result.suggested_mapping.attributes == ("Cross-departmental alignment needed",)
    assert confidence_band(result.confidence) == "medium"


def test_incomplete_input_is_a_no_op():
    svc = _sample_service()
    assert svc.translate("", "Sales", "Marketing") is None
    assert svc.translate("   ", "Sales", "Marketing") is None
    assert svc.translate(None, "Sales", "Marketing") is None
    assert svc.translate("Qualified Lead", None, "Marketing") is None
    assert svc.translate("Qualified Lead", "Sales", "") is None


def test_invalid_departments_raise():
    svc = _sample_service()
    with pytest.raises(InvalidTranslationRequest):
        svc.translate("Qualified Lead", "Sales", "Sales")
    with pytest.raises(InvalidTranslationRequest):
        svc.translate("Qualified Lead", "Legal", "Sales")


def test_translation_is_total_over_valid_inputs():
    svc = _sample_service()
    names = ["Qualified Lead", "Activation", "Foo Metric", "x"]

    for name, (source, target) in itertools.product(names, itertools.permutations(Department, 2)):
        result = svc.translate(name, source, target)
        assert isinstance(result, TranslationResult)
        assert 0 <= result.confidence <= 100


def test_target_options_exclude_source():
    options = TranslationService.target_options("Sales")
    assert Department.SALES not in options
    assert len(options) == 4
    assert TranslationService.target_options(None) == list(Department)


def test_confidence_bands():
    assert confidence_band(92) == "high"
    assert confidence_band(90) == "high"
    assert confidence_band(87) == "medium"
    assert confidence_band(75) == "medium"
    assert confidence_band(74) == "low"


def test_parse_translations_and_serialize():
    toml_str = """
    [[translations]]
    source_metric = "Churn Rate"
    source_dept = "Finance"
    target_dept = "cs"
    translation = "Logo Churn"
    confidence = 80
    key_differences = ["Revenue vs logos"]

    [translations.suggested_mapping]
    formula = "Lost logos / starting logos"
    attributes = ["Logo count"]
    frequency = "Monthly"
    """
    translations = parse_translations_toml(toml_str)
    assert list(translations) == ["churn-rate-finance-customer success"]

    result = translations["churn-rate-finance-customer success"]
    assert result.target_dept == "Customer Success"
    assert result.to_dict() == {
        "source_metric": "Churn Rate",
        "source_dept": "Finance",
        "target_dept": "Customer Success",
        "translation": "Logo Churn",
        "confidence": 80,
        "explanation": "",
        "key_differences": ["Revenue vs logos"],
        "suggested_mapping": {
            "formula": "Lost logos / starting logos",
            "attributes": ["Logo count"],
            "frequency": "Monthly",
        },
    }


def test_confidence_out_of_range_is_rejected():
    with pytest.raises(ValueError):
        TranslationResult(
            source_metric="a",
            source_dept="Sales",
            target_dept="Finance",
            translation="b",
            confidence=101,
            explanation="",
            key_differences=(),
            suggested_mapping=SuggestedMapping(formula="", attributes=(), frequency=""),
        )
