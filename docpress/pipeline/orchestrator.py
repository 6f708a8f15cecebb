"""ContentPipeline — converts each configured markdown tree into JSON artifacts."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from docpress.config.models import DocpressConfig, SiteConfig
from docpress.output.models import ContentArtifact
from docpress.output.writer import ArtifactWriter
from docpress.parser.frontmatter import split_front_matter
from docpress.pipeline.models import BatchReport, FileError
from docpress.render.models import HeadingEntry
from docpress.render.renderer import create_site_renderer
from docpress.structure import SiteStructureIndex
from docpress.vcs.enricher import AttributionEnricher

logger = logging.getLogger(__name__)


def discover_sources(source_dir: Path, exclude: list[str]) -> list[Path]:
    """All markdown files under ``source_dir``, sorted.

    Hidden files and directories are skipped, as are paths listed in
    ``exclude`` (relative to ``source_dir``, POSIX separators).
    """
    excluded = {e.strip("/") for e in exclude}
    files = []
    for path in source_dir.rglob("*.md"):
        rel = path.relative_to(source_dir)
        if any(part.startswith(".") for part in rel.parts):
            continue
        if rel.as_posix() in excluded or not path.is_file():
            continue
        files.append(path)
    return sorted(files)


class ContentPipeline:
    """Drives split → enrich → render → write for every configured site.

    Sites run one after another in configuration order. Within a site every
    file is converted concurrently. With ``on_error="fail_fast"`` the first
    failing file cancels its siblings and the error propagates; with
    ``"collect"`` every file runs and failures land in the BatchReport.
    """

    def __init__(
        self,
        config: DocpressConfig,
        writer: ArtifactWriter | None = None,
        enricher: AttributionEnricher | None = None,
    ) -> None:
        self.config = config
        self.writer = writer or ArtifactWriter(config.output)
        self.enricher = enricher

    async def run(self) -> list[BatchReport]:
        reports = []
        for site in self.config.sites:
            reports.append(await self.run_site(site))
        return reports

    async def run_site(self, site: SiteConfig) -> BatchReport:
        start = time.monotonic()
        report = BatchReport(source=site.source, assets=site.assets)

        index = await SiteStructureIndex.load(site.structure)
        source_dir = Path(site.source)
        if not source_dir.is_dir():
            raise FileNotFoundError(f"Source directory not found: {source_dir}")

        logger.info("collecting %s/**/*.md", source_dir.as_posix())
        files = await asyncio.to_thread(discover_sources, source_dir, site.exclude)

        await self.writer.clear(site.assets)

        tasks = [
            asyncio.create_task(self.convert_file(site, source_dir, path, index))
            for path in files
        ]
        if self.config.on_error == "fail_fast":
            try:
                await asyncio.gather(*tasks)
            except Exception:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
            report.converted = len(files)
        else:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for path, result in zip(files, results):
                if isinstance(result, BaseException):
                    report.errors.append(FileError(path=path.as_posix(), error=str(result) or type(result).__name__))
                else:
                    report.converted += 1

        report.duration = time.monotonic() - start
        logger.info("successfully converted %d files from %s", report.converted, site.source)
        if report.errors:
            logger.error("%d files failed in %s", len(report.errors), site.source)
        return report

    async def convert_file(
        self,
        site: SiteConfig,
        source_dir: Path,
        path: Path,
        index: SiteStructureIndex,
    ) -> Path:
        """Convert one markdown file and write its artifact. Returns the artifact path."""
        rel = path.relative_to(source_dir)
        dest = self.writer.artifact_path(site.assets, rel)
        site_path = self.writer.site_path(site.assets, rel)
        src_path = path.as_posix()

        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
            doc = split_front_matter(raw)
            if self.enricher is not None:
                doc = await self.enricher.enrich(src_path, doc)

            headings: list[HeadingEntry] = []
            renderer = create_site_renderer(headings, site_path, index, self.config.render)
            content = renderer.render(doc.body)

            artifact = ContentArtifact.build(doc.attributes, headings, src_path, content)
            return await self.writer.write(dest, artifact)
        except Exception:
            logger.error("failed to convert %s", src_path)
            raise
