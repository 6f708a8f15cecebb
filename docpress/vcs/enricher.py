"""AttributionEnricher — merges commit history attribution into document attributes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timezone

from docpress.parser.models import ParsedDocument
from docpress.vcs.base import CommitHistoryProvider
from docpress.vcs.models import AttributionRecord, CommitInfo, RateLimitedError

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with a trailing Z, matching what the GitHub API returns."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_attribution(
    commits: list[CommitInfo],
    since: datetime,
    declared: Iterable[str] = (),
) -> AttributionRecord:
    """Derive attribution from commits listed newest first.

    Declared contributors keep their position; commit authors are appended
    once each in the order they were seen.
    """
    contributors: list[str] = []
    for login in [*declared, *(c.author_login for c in commits)]:
        if login and login not in contributors:
            contributors.append(login)

    last_updated = commits[0].authored_at if commits else since
    return AttributionRecord(
        last_updated=format_timestamp(last_updated),
        contributors=contributors,
    )


class AttributionEnricher:
    """Adds ``lastUpdated`` and ``contributors`` from a file's commit history.

    Failures never propagate: a rate-limited or broken history source leaves
    the document exactly as parsed.
    """

    def __init__(
        self,
        provider: CommitHistoryProvider,
        since: datetime | date,
        token_env: str = "GITHUB_TOKEN",
    ) -> None:
        if not isinstance(since, datetime):
            since = datetime.combine(since, time.min, tzinfo=timezone.utc)
        self.provider = provider
        self.since = since
        self.token_env = token_env

    async def fetch(self, path: str, declared: Iterable[str] = ()) -> AttributionRecord | None:
        """Return the attribution for ``path``, or None when history is unavailable."""
        try:
            commits = await self.provider.list_commits(path, self.since)
        except RateLimitedError:
            logger.warning(
                "Ignoring commit history for %s due to GitHub API limit. "
                "To resolve, set the %s environment variable.",
                path,
                self.token_env,
            )
            return None
        except Exception:
            logger.warning("Could not fetch commit history for %s", path, exc_info=True)
            return None

        return build_attribution(commits, self.since, declared)

    async def enrich(self, path: str, doc: ParsedDocument) -> ParsedDocument:
        record = await self.fetch(path, _declared_contributors(doc.attributes))
        if record is None:
            return doc

        attributes = {
            **doc.attributes,
            "lastUpdated": record.last_updated,
            "contributors": record.contributors,
        }
        return doc.model_copy(update={"attributes": attributes})


def _declared_contributors(attributes: dict) -> list[str]:
    declared = attributes.get("contributors")
    if declared is None:
        return []
    if isinstance(declared, str):
        return [declared]
    return [str(c) for c in declared]
