import enum
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class JobStatus(str, enum.Enum):
    processing = "processing"
    completed = "completed"


class ResultStatus(str, enum.Enum):
    pending = "pending"
    success = "success"
    error = "error"


@dataclass
class ResultEntry:
    url: str
    status: ResultStatus = ResultStatus.pending
    emails: Optional[List[str]] = None
    error: Optional[str] = None

    def succeed(self, emails: List[str]) -> None:
        self.emails = emails
        self.status = ResultStatus.success

    def fail(self, message: str) -> None:
        self.error = message
        self.status = ResultStatus.error

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"url": self.url, "status": self.status.value}
        if self.status == ResultStatus.success:
            out["emails"] = list(self.emails or [])
        elif self.status == ResultStatus.error:
            out["error"] = self.error
        return out


@dataclass
class Job:
    """
    One batch-scrape request and its accumulating state.

    Only the job's own processing task writes to it once it is stored.
    """

    id: str
    urls: List[Any]
    status: JobStatus = JobStatus.processing
    processed: int = 0
    results: List[ResultEntry] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    completed_at: Optional[float] = None

    @property
    def total(self) -> int:
        return len(self.urls)

    @property
    def is_completed(self) -> bool:
        return self.status == JobStatus.completed

    def snapshot(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "processed": self.processed,
            "total": self.total,
            "results": [r.to_dict() for r in self.results],
        }
