import logging
from typing import List, Optional, Union

from metrics_align.core.exceptions import InvalidTranslationRequest
from metrics_align.glossary.glossary_models import Department
from .base_translation_provider import BaseTranslationProvider
from .translation_models import TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)

DepartmentInput = Union[str, Department, None]


class TranslationService:
    """
    Validates translator input and hands complete requests to a provider.

    Incomplete input (blank metric name, missing department) is not an error:
    translate() simply returns None, the same way the translate button stays
    disabled until all three fields are filled in.
    """

    def __init__(self, provider: BaseTranslationProvider):
        self.provider = provider

    def build_request(
        self,
        metric_name: Optional[str],
        source_dept: DepartmentInput,
        target_dept: DepartmentInput,
    ) -> Optional[TranslationRequest]:
        if not metric_name or not metric_name.strip() or not source_dept or not target_dept:
            return None

        source = _to_department(source_dept)
        target = _to_department(target_dept)
        if source == target:
            raise InvalidTranslationRequest(
                f"Source and target department are both '{source.value}'."
            )
        return TranslationRequest(metric_name=metric_name.strip(), source_dept=source, target_dept=target)

    def translate(
        self,
        metric_name: Optional[str],
        source_dept: DepartmentInput,
        target_dept: DepartmentInput,
    ) -> Optional[TranslationResult]:
        request = self.build_request(metric_name, source_dept, target_dept)
        if request is None:
            logger.debug("Translation skipped: incomplete input")
            return None
        return self.provider.translate(request)

    @staticmethod
    def target_options(source_dept: DepartmentInput) -> List[Department]:
        """Departments a metric from source_dept can be translated into."""
        if not source_dept:
            return list(Department)
        source = _to_department(source_dept)
        return [d for d in Department if d != source]


def _to_department(value: Union[str, Department]) -> Department:
    if isinstance(value, Department):
        return value
    try:
        return Department.from_value(value)
    except ValueError as e:
        raise InvalidTranslationRequest(str(e))
