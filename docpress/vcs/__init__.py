"""Commit history providers and attribution enrichment."""

import logging
import os

from docpress.config.models import GitHubConfig
from docpress.vcs.base import CommitHistoryProvider
from docpress.vcs.enricher import AttributionEnricher, build_attribution
from docpress.vcs.github import GitHubProvider
from docpress.vcs.models import AttributionRecord, CommitInfo, RateLimitedError

logger = logging.getLogger(__name__)


def create_provider(config: GitHubConfig) -> GitHubProvider:
    """Create a GitHub provider from config.

    Resolves the token from the environment variable named in config.token_env.
    A missing token is not fatal: requests go out anonymously, with GitHub's
    much lower rate limit.
    """
    token = os.environ.get(config.token_env, "")
    if not token:
        logger.info(
            "%s not set; fetching commit history anonymously", config.token_env
        )
    return GitHubProvider(
        repo=config.repo,
        token=token or None,
        base_url=config.base_url,
        timeout=config.timeout,
    )


def create_enricher(config: GitHubConfig) -> AttributionEnricher | None:
    """Build the enricher, or None when attribution is switched off."""
    if not config.enabled:
        return None
    if not config.repo:
        logger.info("github.repo not configured; skipping attribution")
        return None
    return AttributionEnricher(create_provider(config), config.since, config.token_env)


__all__ = [
    "AttributionEnricher",
    "AttributionRecord",
    "CommitHistoryProvider",
    "CommitInfo",
    "GitHubProvider",
    "RateLimitedError",
    "build_attribution",
    "create_enricher",
    "create_provider",
]
