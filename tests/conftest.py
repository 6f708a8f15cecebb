"""Shared test fixtures for docpress."""

import json
from datetime import datetime, timezone

import pytest
from unittest.mock import AsyncMock, MagicMock

from docpress.config.models import DocpressConfig, OutputConfig, SiteConfig
from docpress.structure import SiteStructureIndex, SiteStructureItem
from docpress.vcs.base import CommitHistoryProvider
from docpress.vcs.models import CommitInfo


SAMPLE_STRUCTURE = [
    {
        "text": "Getting Started",
        "url": "/docs",
        "filePath": "/assets/docs/index.json",
        "children": [
            {"text": "Intro", "url": "/docs/intro", "filePath": "/assets/docs/intro.json"},
        ],
    },
    {
        "text": "Guide",
        "children": [
            {"text": "Page", "url": "/docs/guide/page", "filePath": "/assets/docs/guide/page.json"},
            {"text": "Other", "url": "/docs/other/page", "filePath": "/assets/docs/other/page.json"},
        ],
    },
]


@pytest.fixture
def sample_structure():
    return SAMPLE_STRUCTURE


@pytest.fixture
def structure_index(sample_structure):
    return SiteStructureIndex(
        SiteStructureItem.model_validate(item) for item in sample_structure
    )


@pytest.fixture
def sample_commits():
    """Newest first, as the GitHub API returns them."""
    return [
        CommitInfo(
            sha="c3",
            author_login="octocat",
            authored_at=datetime(2019, 3, 2, 10, 30, tzinfo=timezone.utc),
        ),
        CommitInfo(
            sha="c2",
            author_login="hubot",
            authored_at=datetime(2019, 1, 15, 8, 0, tzinfo=timezone.utc),
        ),
        CommitInfo(
            sha="c1",
            author_login="octocat",
            authored_at=datetime(2018, 7, 1, 12, 0, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def mock_history_provider(sample_commits):
    provider = MagicMock(spec=CommitHistoryProvider)
    provider.list_commits = AsyncMock(return_value=sample_commits)
    return provider


@pytest.fixture
def docs_tree(tmp_path, monkeypatch, sample_structure):
    """A project directory with a docs source tree and structure file.

    The working directory is switched to the project root so paths stay
    relative, the way they appear in docpress.yaml.
    """
    docs = tmp_path / "docs"
    (docs / "guide").mkdir(parents=True)
    (docs / "other").mkdir()

    (docs / "README.md").write_text("# Docs source\n\nNot published.\n")
    (docs / "intro.md").write_text("# Intro\n\nWelcome.\n\n## Setup\n\nInstall it.\n\n# Usage\n\nRun it.\n")
    (docs / "guide" / "page.md").write_text(
        "---\n"
        "title: Guide Page\n"
        "contributors:\n"
        "  - docs-team\n"
        "---\n"
        "# Guide\n"
        "\n"
        "See [the other page](../other/page.md#details) and [example](https://example.com).\n"
        "\n"
        "```ts\n"
        "const x = 1 < 2 && true;\n"
        "```\n"
    )
    (docs / "guide" / "README.md").write_text("# Nested readme\n")
    (docs / "other" / "page.md").write_text("## Details\n\nBack to [intro](/assets/docs/intro.md).\n")

    site = tmp_path / "site"
    site.mkdir()
    (site / "structure.json").write_text(json.dumps(sample_structure))

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_config(docs_tree):
    return DocpressConfig(
        sites=[
            SiteConfig(source="docs", structure="site/structure.json", assets="assets/docs"),
        ],
        output=OutputConfig(root="site"),
    )
