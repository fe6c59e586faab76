# contactscout/services/jobs.py
import asyncio
import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from ..config import settings
from ..exceptions import FetchError, JobNotFound, ValidationError
from ..models.job import Job, JobStatus, ResultEntry, ResultStatus
from ..utils.extractor import extract_emails
from ..utils.urls import normalize_url
from .fetcher import Fetcher

LOG = logging.getLogger("contactscout.jobs")

EVICT_ON_COMPLETION = "completion"
EVICT_ON_LAST_READ = "last_read"
EVICTION_MODES = (EVICT_ON_COMPLETION, EVICT_ON_LAST_READ)

INVALID_URL_MESSAGE = "Invalid URL format"
INVALID_REQUEST_MESSAGE = "Invalid request: urls array is required"


class JobEngine:
    """
    In-memory scrape job table plus the per-job processing tasks.

    All state lives on the event loop thread: the table is only touched by
    ``create``/``status``, by each job's own task, and by eviction timers.
    Jobs are lost on restart.
    """

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        delay: Optional[float] = None,
        retention: Optional[float] = None,
        eviction_mode: Optional[str] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.fetcher = fetcher or Fetcher.from_settings()
        self.delay = settings.FETCH_DELAY_SECONDS if delay is None else float(delay)
        self.retention = settings.JOB_RETENTION_SECONDS if retention is None else float(retention)
        self.eviction_mode = eviction_mode or settings.EVICTION_MODE
        if self.eviction_mode not in EVICTION_MODES:
            raise ValueError(f"unknown eviction mode: {self.eviction_mode!r}")
        self._sleep = sleep

        self._jobs: Dict[str, Job] = {}
        self._tasks: Dict[str, asyncio.Task] = {}
        self._evictions: Dict[str, asyncio.TimerHandle] = {}
        self._closed = False

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs

    # ---------------------------------------------------
    # Public operations
    # ---------------------------------------------------
    def create(self, urls: Sequence[Any]) -> str:
        """Store a new job, start its processing task, return its id."""
        if urls is None or not isinstance(urls, (list, tuple)):
            raise ValidationError(INVALID_REQUEST_MESSAGE)
        if self._closed:
            raise RuntimeError("job engine is shut down")

        job_id = str(uuid.uuid4())
        job = Job(id=job_id, urls=list(urls))
        self._jobs[job_id] = job

        task = asyncio.get_running_loop().create_task(
            self._process(job), name=f"scrape-job-{job_id}"
        )
        self._tasks[job_id] = task
        task.add_done_callback(lambda t, jid=job_id: self._tasks.pop(jid, None))

        LOG.info("Job CREATED id=%s total=%d", job_id, job.total)
        return job_id

    def status(self, job_id: Optional[str]) -> Dict[str, Any]:
        """
        Snapshot of the job as it is right now.

        A running job may show a prefix of its results, the last of which
        can still be pending. Raises ``JobNotFound`` for unknown or evicted ids.
        """
        job = self._jobs.get(job_id) if job_id else None
        if job is None:
            raise JobNotFound(job_id)

        if job.is_completed and self.eviction_mode == EVICT_ON_LAST_READ:
            self._schedule_eviction(job_id)

        return job.snapshot()

    async def shutdown(self) -> None:
        """Cancel running jobs and pending evictions, close the fetcher."""
        self._closed = True

        for handle in self._evictions.values():
            handle.cancel()
        self._evictions.clear()

        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            LOG.info("Cancelled %d running job(s)", len(tasks))

        await self.fetcher.aclose()

    # ---------------------------------------------------
    # Processing loop
    # ---------------------------------------------------
    async def _process(self, job: Job) -> None:
        last = job.total - 1
        for i, raw in enumerate(job.urls):
            url = (raw if isinstance(raw, str) else str(raw)).strip()
            entry = ResultEntry(url=url)
            job.results.append(entry)

            target = normalize_url(url)
            if target is None:
                entry.fail(INVALID_URL_MESSAGE)
                job.processed += 1
                LOG.debug("Job %s url=%s invalid", job.id, url)
                continue

            await self._scrape_one(job, entry, target)
            job.processed += 1

            if i < last and self.delay > 0:
                await self._sleep(self.delay)

        self._complete(job)

    async def _scrape_one(self, job: Job, entry: ResultEntry, target: str) -> None:
        try:
            html = await self.fetcher.fetch_text(target)
            entry.succeed(extract_emails(html))
        except FetchError as e:
            entry.fail(f"Error: {e}")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            LOG.exception("Unexpected error scraping url=%s job=%s", entry.url, job.id)
            entry.fail(f"Error: {str(e) or type(e).__name__}")

        if entry.status == ResultStatus.success:
            LOG.debug("Job %s url=%s emails=%d", job.id, entry.url, len(entry.emails))
        else:
            LOG.debug("Job %s url=%s error=%s", job.id, entry.url, entry.error)

    def _complete(self, job: Job) -> None:
        job.status = JobStatus.completed
        job.completed_at = time.monotonic()

        ok = sum(1 for r in job.results if r.status == ResultStatus.success)
        LOG.info(
            "Job COMPLETED id=%s processed=%d/%d success=%d error=%d duration=%.2fs",
            job.id,
            job.processed,
            job.total,
            ok,
            job.processed - ok,
            job.completed_at - job.created_at,
        )

        if self.eviction_mode == EVICT_ON_COMPLETION:
            self._schedule_eviction(job.id)

    # ---------------------------------------------------
    # Eviction
    # ---------------------------------------------------
    def _schedule_eviction(self, job_id: str) -> None:
        if self._closed:
            return
        previous = self._evictions.pop(job_id, None)
        if previous is not None:
            previous.cancel()
        loop = asyncio.get_running_loop()
        self._evictions[job_id] = loop.call_later(self.retention, self._evict, job_id)

    def _evict(self, job_id: str) -> None:
        self._evictions.pop(job_id, None)
        if self._jobs.pop(job_id, None) is not None:
            LOG.info("Job EVICTED id=%s", job_id)
