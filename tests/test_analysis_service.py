import asyncio
import time
import unittest

from models.analyze_request import AnalyzeRequest
from services.analysis_service import AnalysisService
from tests.fakes import FakeAIClient, FakeScraper, make_report_db


class SlowReportDB:
    """Wraps a mongomock store; `save` blocks the calling thread like a slow Mongo write."""

    def __init__(self, delay: float):
        self.delay = delay
        self.inner = make_report_db()

    def save(self, report):
        time.sleep(self.delay)
        return self.inner.save(report)


class TestRunAnalysis(unittest.IsolatedAsyncioTestCase):
    async def test_slow_save_does_not_block_event_loop(self):
        report_db = SlowReportDB(delay=0.3)
        service = AnalysisService(report_db, FakeAIClient('{"ok": true}'), FakeScraper())
        request = AnalyzeRequest(productTitle="Mug", targetCountry="FR", keywords="mug")

        gaps = []
        done = asyncio.Event()

        async def ticker():
            last = time.monotonic()
            while not done.is_set():
                await asyncio.sleep(0.02)
                now = time.monotonic()
                gaps.append(now - last)
                last = now

        tick_task = asyncio.create_task(ticker())
        started = time.monotonic()
        results = await asyncio.gather(service.run_analysis(request), service.run_analysis(request))
        elapsed = time.monotonic() - started
        done.set()
        await tick_task

        self.assertEqual(report_db.inner.count_reports(), 2)
        self.assertNotEqual(results[0]["id"], results[1]["id"])
        # both saves ran in worker threads, side by side
        self.assertLess(elapsed, 0.55)
        self.assertLess(max(gaps), 0.2)


if __name__ == "__main__":
    unittest.main()
