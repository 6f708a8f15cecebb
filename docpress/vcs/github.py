"""GitHub commit history provider using PyGithub."""

import asyncio
from datetime import datetime
from functools import cached_property

from github import Auth, Github, GithubException, RateLimitExceededException
from github.Repository import Repository

from docpress.vcs.base import CommitHistoryProvider
from docpress.vcs.models import CommitInfo, RateLimitedError

DEFAULT_BASE_URL = "https://api.github.com"


class GitHubProvider(CommitHistoryProvider):
    """GitHub implementation of CommitHistoryProvider using PyGithub.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.
    Retries are disabled: a throttled request should surface as
    RateLimitedError right away instead of sleeping until the reset.
    """

    def __init__(
        self,
        repo: str,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 15,
    ):
        if not repo or "/" not in repo:
            raise ValueError(f"Invalid repo identifier {repo!r}: expected 'owner/repo'")
        self.repo_id = repo
        self._token = token or None
        self._base_url = base_url
        self._timeout = timeout

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    @cached_property
    def _client(self) -> Github:
        auth = Auth.Token(self._token) if self._token else None
        return Github(auth=auth, base_url=self._base_url, timeout=self._timeout, retry=None)

    @cached_property
    def _repo(self) -> Repository:
        return self._client.get_repo(self.repo_id, lazy=True)

    async def list_commits(self, path: str, since: datetime) -> list[CommitInfo]:
        """List commits touching a path since a cutoff, newest first."""

        def _sync() -> list[CommitInfo]:
            try:
                commits = self._repo.get_commits(since=since, path=path)
                return [
                    CommitInfo(
                        sha=c.sha,
                        author_login=c.author.login if c.author else None,
                        authored_at=c.commit.author.date,
                    )
                    for c in commits
                ]
            except RateLimitExceededException as e:
                raise RateLimitedError(path, e.status) from e
            except GithubException as e:
                if e.status in (403, 429):
                    raise RateLimitedError(path, e.status) from e
                raise

        return await asyncio.to_thread(_sync)
