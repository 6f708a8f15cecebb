"""Abstract commit history interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from docpress.vcs.models import CommitInfo


class CommitHistoryProvider(ABC):
    """Lists the commits that touched a file.

    Implementations return commits newest first and raise RateLimitedError
    when the backing service throttles the caller.
    """

    @abstractmethod
    async def list_commits(self, path: str, since: datetime) -> list[CommitInfo]:
        """Commits touching ``path`` authored after ``since``."""
        ...
