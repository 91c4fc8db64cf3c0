from abc import ABC, abstractmethod

from .translation_models import TranslationRequest, TranslationResult


class BaseTranslationProvider(ABC):
    """
    An abstract class that describes the common interface for a translation backend.
    """

    @abstractmethod
    def translate(self, request: TranslationRequest) -> TranslationResult:
        """
        Return exactly one TranslationResult for a complete, valid request.
        Unknown metrics must still produce a result rather than an error.
        """
        pass
