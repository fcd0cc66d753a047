"""Batch report of per-page failures collected during a pipeline run."""

from typing import List

from pydantic import BaseModel, Field

from .episode import Episode


class PageFailure(BaseModel):
    """A single page or field that did not yield data."""

    url: str = Field(..., description="URL the failure belongs to")
    kind: str = Field(..., description="Error class name, e.g. 'FetchError'")
    message: str = Field(..., description="Human readable description")


class BatchReport(BaseModel):
    """Ordered collection of failures for one pipeline run."""

    failures: List[PageFailure] = Field(default_factory=list)

    def record(self, url: str, error: Exception) -> None:
        """Record an error against the URL it happened on."""
        self.failures.append(
            PageFailure(url=url, kind=type(error).__name__, message=str(error))
        )

    def failures_for(self, url: str) -> List[PageFailure]:
        return [failure for failure in self.failures if failure.url == url]

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def urls(self) -> List[str]:
        """URLs with at least one failure, in the order they were first recorded."""
        seen: List[str] = []
        for failure in self.failures:
            if failure.url not in seen:
                seen.append(failure.url)
        return seen


class PipelineResult(BaseModel):
    """The assembled episodes plus everything that went missing on the way."""

    episodes: List[Episode] = Field(default_factory=list)
    report: BatchReport = Field(default_factory=BatchReport)
