import asyncio

from metrics_align.core.task_runner import TaskState
from metrics_align.misalignment.scan_job import ScannerSession, StubDetectionJob


def test_scan_toggles_busy_flag_and_finds_nothing():
    async def scenario():
        scanner = ScannerSession(StubDetectionJob(delay_seconds=0.01))
        pending = asyncio.create_task(scanner.run_scan())
        await asyncio.sleep(0)
        busy = scanner.is_scanning
        outcome = await pending
        return scanner, busy, outcome

    scanner, busy, outcome = asyncio.run(scenario())

    assert busy is True
    assert scanner.is_scanning is False
    assert outcome.state == TaskState.SETTLED
    assert scanner.last_findings == []


def test_second_scan_cancels_first():
    async def scenario():
        scanner = ScannerSession(StubDetectionJob(delay_seconds=0.05))
        first = asyncio.create_task(scanner.run_scan())
        await asyncio.sleep(0)
        second = await scanner.run_scan()
        return await first, second

    first, second = asyncio.run(scenario())
    assert first.state == TaskState.CANCELLED
    assert second.state == TaskState.SETTLED
    assert second.request_id > first.request_id
