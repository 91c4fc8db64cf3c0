import logging
from typing import Dict

from .base_translation_provider import BaseTranslationProvider
from .translation_models import TranslationRequest, TranslationResult
from .translation_templates import fallback_translation

logger = logging.getLogger(__name__)


class StaticTranslationProvider(BaseTranslationProvider):
    """
    Answers from a fixed dictionary of canned translations, keyed by
    TranslationRequest.lookup_key. Misses fall back to a generic template.
    """

    def __init__(self, translations: Dict[str, TranslationResult]):
        self._translations = dict(translations)

    def translate(self, request: TranslationRequest) -> TranslationResult:
        key = request.lookup_key
        canned = self._translations.get(key)
        if canned is not None:
            logger.debug("Canned translation hit for '%s'", key)
            return canned
        logger.debug("No canned translation for '%s'; using fallback", key)
        return fallback_translation(request)

    def known_keys(self):
        return sorted(self._translations)
