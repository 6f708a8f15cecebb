"""Pydantic models for commit history and attribution."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class RateLimitedError(Exception):
    """The commit history source refused the request for rate-limit reasons."""

    def __init__(self, path: str, status: int | None = None) -> None:
        self.path = path
        self.status = status
        super().__init__(f"commit history for {path} rate limited (status {status})")


class CommitInfo(BaseModel):
    """A single commit touching a file."""

    sha: str = ""
    author_login: str | None = Field(
        default=None, description="GitHub login, None when the author email is not linked"
    )
    authored_at: datetime


class AttributionRecord(BaseModel):
    """Attribution derived from a file's commit history."""

    last_updated: str = Field(description="ISO-8601 UTC timestamp")
    contributors: list[str] = Field(default_factory=list)
