import asyncio
import logging
from typing import Optional

from metrics_align.core.task_runner import SupersedingTaskRunner, TaskOutcome
from .translation_models import TranslationResult
from .translation_service import DepartmentInput, TranslationService

logger = logging.getLogger(__name__)


class TranslatorSession:
    """
    State behind one translator panel: the last settled result and a busy flag.

    Each request waits `delay_seconds` (standing in for a remote translation
    service) before resolving. A newer request cancels an older pending one,
    so `result` always belongs to the most recent request that settled.
    """

    def __init__(self, service: TranslationService, delay_seconds: float = 2.0):
        self.service = service
        self.delay_seconds = delay_seconds
        self.result: Optional[TranslationResult] = None
        self._runner = SupersedingTaskRunner("translator")

    @property
    def is_translating(self) -> bool:
        return self._runner.is_pending

    async def request_translation(
        self,
        metric_name: Optional[str],
        source_dept: DepartmentInput,
        target_dept: DepartmentInput,
    ) -> Optional[TaskOutcome]:
        """
        Returns None without starting anything when the input is incomplete.
        Invalid departments raise before any work is scheduled.
        """
        request = self.service.build_request(metric_name, source_dept, target_dept)
        if request is None:
            return None

        outcome = await self._runner.submit(self._translate_after_delay(request))
        latest = self._runner.latest
        if latest is not None and latest.request_id == outcome.request_id:
            self.result = outcome.result
        return outcome

    async def _translate_after_delay(self, request) -> TranslationResult:
        await asyncio.sleep(self.delay_seconds)
        return self.service.provider.translate(request)

    def cancel(self) -> bool:
        return self._runner.cancel_pending()

    async def aclose(self) -> None:
        await self._runner.aclose()
