"""Tests for docpress.pipeline — discovery, conversion, and batch failure policies."""

import json
import logging
from datetime import date
from pathlib import Path

import pytest
from unittest.mock import AsyncMock

from docpress.config.models import SiteConfig
from docpress.output import ArtifactWriter
from docpress.parser import FrontMatterError
from docpress.pipeline import ContentPipeline, discover_sources
from docpress.structure import StructureError
from docpress.vcs.enricher import AttributionEnricher
from docpress.vcs.models import RateLimitedError

ASSETS = Path("site/assets/docs")


def _load(rel: str) -> dict:
    return json.loads((ASSETS / rel).read_text(encoding="utf-8"))


def _snapshot() -> dict[str, bytes]:
    return {p.relative_to(ASSETS).as_posix(): p.read_bytes() for p in sorted(ASSETS.rglob("*.json"))}


@pytest.fixture
def enricher(mock_history_provider):
    return AttributionEnricher(mock_history_provider, since=date(2018, 6, 1))


# ---------------------------------------------------------------------------
# discover_sources
# ---------------------------------------------------------------------------


class TestDiscoverSources:
    def test_excludes_root_readme_only(self, docs_tree):
        files = [p.relative_to("docs").as_posix() for p in discover_sources(Path("docs"), ["README.md"])]
        assert files == ["guide/README.md", "guide/page.md", "intro.md", "other/page.md"]

    def test_skips_hidden_paths(self, docs_tree):
        (docs_tree / "docs" / ".drafts").mkdir()
        (docs_tree / "docs" / ".drafts" / "wip.md").write_text("# wip")
        (docs_tree / "docs" / ".hidden.md").write_text("# hidden")
        files = [p.name for p in discover_sources(Path("docs"), [])]
        assert "wip.md" not in files
        assert ".hidden.md" not in files

    def test_ignores_other_extensions(self, docs_tree):
        (docs_tree / "docs" / "notes.txt").write_text("text")
        assert all(p.suffix == ".md" for p in discover_sources(Path("docs"), []))


# ---------------------------------------------------------------------------
# ContentPipeline
# ---------------------------------------------------------------------------


class TestContentPipeline:
    async def test_one_artifact_per_source(self, sample_config):
        reports = await ContentPipeline(sample_config).run()

        assert reports[0].converted == 4
        assert reports[0].ok
        assert sorted(_snapshot()) == [
            "guide/README.json",
            "guide/page.json",
            "intro.json",
            "other/page.json",
        ]

    async def test_root_readme_excluded(self, sample_config):
        await ContentPipeline(sample_config).run()
        assert not (ASSETS / "README.json").exists()

    async def test_file_without_front_matter(self, sample_config):
        await ContentPipeline(sample_config).run()
        data = _load("intro.json")
        assert set(data) == {"headings", "srcPath", "content"}
        assert data["srcPath"] == "docs/intro.md"

    async def test_headings_in_document_order(self, sample_config):
        await ContentPipeline(sample_config).run()
        headings = _load("intro.json")["headings"]
        assert headings == [
            {"level": 1, "text": "Intro", "id": "intro"},
            {"level": 2, "text": "Setup", "id": "setup"},
            {"level": 1, "text": "Usage", "id": "usage"},
        ]

    async def test_front_matter_links_and_code(self, sample_config):
        await ContentPipeline(sample_config).run()
        data = _load("guide/page.json")

        assert data["title"] == "Guide Page"
        assert data["contributors"] == ["docs-team"]
        assert '<a href="/docs/other/page#details">the other page</a>' in data["content"]
        assert '<a href="https://example.com">example</a>' in data["content"]
        assert '<code class="language-ts" data-language="ts">const x = 1 &lt; 2 &amp;&amp; true;</code>' in data["content"]

    async def test_crlf_source(self, sample_config, docs_tree):
        (docs_tree / "docs" / "intro.md").write_bytes(
            b"---\r\ntitle: Windows\r\n---\r\n# Intro\r\n\r\n```sh\r\ndir\r\n```\r\n"
        )
        await ContentPipeline(sample_config).run()

        data = _load("intro.json")
        assert data["title"] == "Windows"
        assert data["headings"] == [{"level": 1, "text": "Intro", "id": "intro"}]
        assert '<code class="language-sh" data-language="sh">dir</code>' in data["content"]
        assert "\r" not in data["content"]

    async def test_site_absolute_link(self, sample_config):
        await ContentPipeline(sample_config).run()
        assert '<a href="/docs/intro">intro</a>' in _load("other/page.json")["content"]

    async def test_clears_stale_artifacts(self, sample_config):
        stale = ASSETS / "removed.json"
        stale.parent.mkdir(parents=True)
        stale.write_text("{}")

        await ContentPipeline(sample_config).run()

        assert not stale.exists()

    async def test_enrichment_merged(self, sample_config, enricher):
        await ContentPipeline(sample_config, enricher=enricher).run()

        page = _load("guide/page.json")
        assert page["lastUpdated"] == "2019-03-02T10:30:00Z"
        assert page["contributors"] == ["docs-team", "octocat", "hubot"]

        intro = _load("intro.json")
        assert set(intro) == {"headings", "srcPath", "content", "lastUpdated", "contributors"}
        enricher.provider.list_commits.assert_any_await("docs/intro.md", enricher.since)

    async def test_rate_limited_enrichment_completes(self, sample_config, enricher, caplog):
        enricher.provider.list_commits = AsyncMock(side_effect=RateLimitedError("x", 403))

        with caplog.at_level(logging.WARNING):
            reports = await ContentPipeline(sample_config, enricher=enricher).run()

        assert reports[0].converted == 4
        page = _load("guide/page.json")
        assert "lastUpdated" not in page
        assert page["contributors"] == ["docs-team"]
        assert "lastUpdated" not in _load("intro.json")

    async def test_idempotent_runs(self, sample_config, enricher):
        pipeline = ContentPipeline(sample_config, enricher=enricher)
        await pipeline.run()
        first = _snapshot()
        await pipeline.run()
        assert _snapshot() == first

    async def test_sites_run_in_order(self, sample_config, docs_tree):
        sample_config.sites.append(
            SiteConfig(source="docs/other", structure="site/structure.json", assets="assets/other")
        )
        reports = await ContentPipeline(sample_config).run()
        assert [r.assets for r in reports] == ["assets/docs", "assets/other"]
        assert reports[1].converted == 1
        assert Path("site/assets/other/page.json").exists()

    async def test_dry_run_writes_nothing(self, sample_config):
        writer = ArtifactWriter(sample_config.output, dry_run=True)
        reports = await ContentPipeline(sample_config, writer=writer).run()
        assert reports[0].converted == 4
        assert not ASSETS.exists()


class TestFatalErrors:
    async def test_missing_structure_file(self, sample_config):
        Path("site/structure.json").unlink()
        with pytest.raises(FileNotFoundError):
            await ContentPipeline(sample_config).run()

    async def test_malformed_structure_file(self, sample_config):
        Path("site/structure.json").write_text("{broken")
        with pytest.raises(StructureError):
            await ContentPipeline(sample_config).run()

    async def test_missing_source_directory(self, sample_config):
        sample_config.sites[0].source = "does-not-exist"
        with pytest.raises(FileNotFoundError, match="does-not-exist"):
            await ContentPipeline(sample_config).run()


class TestFailurePolicy:
    @pytest.fixture
    def broken_file(self, docs_tree, sample_config):
        # Absolute paths keep any write still in a worker thread inside tmp_path
        sample_config.sites[0].source = str(docs_tree / "docs")
        sample_config.sites[0].structure = str(docs_tree / "site" / "structure.json")
        sample_config.output.root = str(docs_tree / "site")
        path = docs_tree / "docs" / "broken.md"
        path.write_text("---\ntitle: [unclosed\n---\nbody\n")
        return path

    async def test_fail_fast_propagates_and_logs_path(self, sample_config, broken_file, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(FrontMatterError):
                await ContentPipeline(sample_config).run()
        assert "docs/broken.md" in caplog.text

    async def test_fail_fast_stops_before_next_site(self, sample_config, broken_file):
        sample_config.sites.append(
            SiteConfig(source="docs/other", structure="site/structure.json", assets="assets/other")
        )
        with pytest.raises(FrontMatterError):
            await ContentPipeline(sample_config).run()
        assert not Path("site/assets/other").exists()

    async def test_collect_reports_all_errors(self, sample_config, broken_file):
        sample_config.on_error = "collect"

        reports = await ContentPipeline(sample_config).run()

        report = reports[0]
        assert not report.ok
        assert report.converted == 4
        assert len(report.errors) == 1
        assert report.errors[0].path.endswith("docs/broken.md")
        assert "YAML parse error" in report.errors[0].error
        assert (ASSETS / "intro.json").exists()
        assert not (ASSETS / "broken.json").exists()
