"""Data models for appcheck."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class PageCategory(str, Enum):
    """What a probe found at a target."""

    # Classifier verdicts
    PLATFORM_ERROR = "platform_error"
    APPLICATION_ERROR = "application_error"
    WELCOME_PAGE = "welcome_page"
    HTML_PAGE = "html_page"
    CONTENT = "content"

    # Failures before a body could be classified
    NO_TARGET = "no_target"
    CONNECTION_EOF = "connection_eof"
    CERTIFICATE_ERROR = "certificate_error"
    FETCH_ERROR = "fetch_error"
    READ_ERROR = "read_error"


class Classification(BaseModel):
    """Verdict of the response classifier for one body."""

    model_config = ConfigDict(frozen=True)

    category: PageCategory
    reachable: bool
    notes: str
    marker: str | None = Field(
        default=None,
        description="Literal marker that matched, if a signature decided the verdict"
    )


class ProbeResult(BaseModel):
    """Outcome of probing a single target. Created once, never modified."""

    model_config = ConfigDict(frozen=True)

    target: str = Field(..., description="Identifier exactly as it appeared in the input")
    reachable: bool = Field(..., description="A substantive, non-placeholder response was obtained")
    status: int = Field(..., description="HTTP status, or the sentinel when none exists")
    notes: str = Field(default="", description="Classification or error explanation")
    category: PageCategory = Field(..., description="Classifier verdict or failure kind")

    @classmethod
    def from_classification(
        cls,
        target: str,
        status: int,
        classification: Classification,
    ) -> "ProbeResult":
        return cls(
            target=target,
            reachable=classification.reachable,
            status=status,
            notes=classification.notes,
            category=classification.category,
        )


class ProbeReport(BaseModel):
    """All results of a probe run in arrival order."""

    results: list[ProbeResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @computed_field
    @property
    def total(self) -> int:
        return len(self.results)

    @computed_field
    @property
    def reachable_count(self) -> int:
        return sum(1 for r in self.results if r.reachable)

    @computed_field
    @property
    def unreachable_count(self) -> int:
        return self.total - self.reachable_count

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()
