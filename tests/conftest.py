# tests/conftest.py
import asyncio
import time

import pytest
from fastapi.testclient import TestClient

from contactscout.exceptions import FetchError
from contactscout.main import create_app
from contactscout.services.jobs import JobEngine

PAGES = {
    "https://acme.test/contact": "Write to sales@acme.test or support@acme.test (sales@acme.test again)",
    "https://acme.test/about": "<p>No addresses here.</p>",
    "https://beta.test/": "<a href='mailto:hello@beta.test'>hello@beta.test</a>",
}


# ---------------------------------------------------------------------
# Fake fetcher: pages by URL, FetchError for anything unknown
# ---------------------------------------------------------------------
class FakeFetcher:
    def __init__(self, pages=None, latency=0.0, gate=None):
        self.pages = dict(PAGES if pages is None else pages)
        self.latency = latency
        self.gate = gate
        self.calls = []
        self.closed = False

    async def fetch_text(self, url):
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        delay = self.latency.get(url, 0.0) if isinstance(self.latency, dict) else self.latency
        if delay:
            await asyncio.sleep(delay)
        if url not in self.pages:
            raise FetchError("HTTP error! Status: 404")
        page = self.pages[url]
        if isinstance(page, BaseException):
            raise page
        return page

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_fetcher_cls():
    return FakeFetcher


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run


@pytest.fixture
def wait_completed():
    async def _wait(engine, job_id, timeout=2.0):
        deadline = time.monotonic() + timeout
        while True:
            snap = engine.status(job_id)
            if snap["status"] == "completed":
                return snap
            if time.monotonic() > deadline:
                raise AssertionError(f"job {job_id} still {snap['status']} after {timeout}s")
            await asyncio.sleep(0.005)

    return _wait


@pytest.fixture
def client(fake_fetcher):
    app = create_app(engine_factory=lambda: JobEngine(fetcher=fake_fetcher, delay=0, retention=60))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def poll_status(client):
    def _poll(job_id, timeout=2.0):
        deadline = time.monotonic() + timeout
        while True:
            resp = client.get("/status", params={"jobId": job_id})
            assert resp.status_code == 200, resp.text
            body = resp.json()
            if body["status"] == "completed":
                return body
            if time.monotonic() > deadline:
                raise AssertionError(f"job {job_id} not completed: {body}")
            time.sleep(0.01)

    return _poll
