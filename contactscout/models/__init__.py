from .job import Job, JobStatus, ResultEntry, ResultStatus

__all__ = [
    "Job",
    "JobStatus",
    "ResultEntry",
    "ResultStatus",
]
