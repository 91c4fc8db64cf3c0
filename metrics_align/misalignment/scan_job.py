import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List

from metrics_align.core.task_runner import SupersedingTaskRunner, TaskOutcome
from .misalignment_models import MisalignmentIssue

logger = logging.getLogger(__name__)


class BaseDetectionJob(ABC):
    """
    The contract a real misalignment-detection job would fulfil:
    look at the current glossary and return newly found issues.
    """

    @abstractmethod
    async def detect(self) -> List[MisalignmentIssue]:
        pass


class StubDetectionJob(BaseDetectionJob):
    """
    A placeholder job. It waits `delay_seconds` and finds nothing.
    In production, you'd implement a job that compares definitions
    and calculations across departments.
    """

    def __init__(self, delay_seconds: float = 3.0):
        self.delay_seconds = delay_seconds

    async def detect(self) -> List[MisalignmentIssue]:
        await asyncio.sleep(self.delay_seconds)
        return []


class ScannerSession:
    """
    State behind the "Run Scan" button. is_scanning is True while a scan
    is pending. Starting a scan while one is pending cancels the older one.
    """

    def __init__(self, job: BaseDetectionJob):
        self.job = job
        self.last_findings: List[MisalignmentIssue] = []
        self._runner = SupersedingTaskRunner("scanner")

    @property
    def is_scanning(self) -> bool:
        return self._runner.is_pending

    async def run_scan(self) -> TaskOutcome:
        logger.info("Misalignment scan started")
        outcome = await self._runner.submit(self.job.detect())
        latest = self._runner.latest
        if latest is not None and latest.request_id == outcome.request_id:
            self.last_findings = list(outcome.result)
            logger.info("Misalignment scan finished with %d findings", len(self.last_findings))
        return outcome

    async def aclose(self) -> None:
        await self._runner.aclose()
