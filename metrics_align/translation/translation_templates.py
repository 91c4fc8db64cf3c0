from .translation_models import SuggestedMapping, TranslationRequest, TranslationResult

FALLBACK_CONFIDENCE = 75

FALLBACK_KEY_DIFFERENCES = (
    "Different measurement timelines and criteria",
    "Varying data sources and collection methods",
    "Distinct success indicators and thresholds",
)

FALLBACK_MAPPING = SuggestedMapping(
    formula="Requires custom mapping based on departmental criteria",
    attributes=("Cross-departmental alignment needed",),
    frequency="Manual review recommended",
)


def fallback_translation(request: TranslationRequest) -> TranslationResult:
    """Generic translation for metrics with no canned entry."""
    source = request.source_dept.value
    target = request.target_dept.value
    return TranslationResult(
        source_metric=request.metric_name,
        source_dept=source,
        target_dept=target,
        translation=f"{target} Equivalent of {request.metric_name}",
        confidence=FALLBACK_CONFIDENCE,
        explanation=(
            f"AI analysis suggests this {source} metric translates to {target} "
            f"terminology with some semantic adjustments."
        ),
        key_differences=FALLBACK_KEY_DIFFERENCES,
        suggested_mapping=FALLBACK_MAPPING,
    )


def confidence_band(confidence: int) -> str:
    """'high' from 90, 'medium' from 75, otherwise 'low'."""
    if confidence >= 90:
        return "high"
    if confidence >= 75:
        return "medium"
    return "low"
