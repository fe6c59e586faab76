# contactscout/exceptions.py


class ScraperError(Exception):
    """Base class for errors raised by the scraping service."""


class ValidationError(ScraperError):
    """A job-creation request was malformed; no job was created."""


class JobNotFound(ScraperError):
    """The job id is unknown, or the job was already evicted."""

    def __init__(self, job_id):
        super().__init__(f"job not found: {job_id!r}")
        self.job_id = job_id


class FetchError(ScraperError):
    """A single URL could not be fetched (HTTP status or transport failure)."""
