"""ArtifactWriter — owns the asset tree: paths, wipe, directory creation, writes."""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path, PurePath, PurePosixPath

from docpress.config.models import OutputConfig
from docpress.output.models import ContentArtifact

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """Writes ContentArtifacts under ``<root>/<assets>/``.

    Handles destination path mapping, the pre-batch wipe of an asset
    directory, directory creation, and dry-run mode.
    """

    def __init__(self, config: OutputConfig, *, dry_run: bool = False) -> None:
        self.config = config
        self.root = Path(config.root)
        self.dry_run = dry_run

    # -- paths -------------------------------------------------------------

    def asset_dir(self, assets: str) -> Path:
        return self.root / assets

    def artifact_path(self, assets: str, rel: PurePath) -> Path:
        """``guide/page.md`` -> ``<root>/<assets>/guide/page.json``."""
        return self.asset_dir(assets) / rel.with_suffix(".json")

    def site_path(self, assets: str, rel: PurePath) -> str:
        """Artifact location as seen from the site root, e.g. ``/assets/guide/page.json``."""
        dest = PurePosixPath(assets.strip("/")) / PurePosixPath(rel.as_posix()).with_suffix(".json")
        return f"/{dest.as_posix()}"

    # -- filesystem --------------------------------------------------------

    async def clear(self, assets: str) -> None:
        """Remove the asset directory and everything in it."""
        target = self.asset_dir(assets)
        root = self.root.resolve()
        resolved = target.resolve()
        if resolved == root or not resolved.is_relative_to(root):
            raise ValueError(f"Refusing to clear {target}: not inside output root {self.root}")

        if self.dry_run:
            logger.debug("dry-run: would clear %s", target)
            return
        if target.exists():
            await asyncio.to_thread(shutil.rmtree, target)
            logger.debug("cleared %s", target)

    async def ensure_dir(self, path: Path) -> None:
        if self.dry_run:
            return
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)

    async def write(self, dest: Path, artifact: ContentArtifact) -> Path:
        """Serialize ``artifact`` to ``dest``. Returns the (would-be) path."""
        data = artifact.to_json(indent=self.config.indent)
        if self.dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        await self.ensure_dir(dest.parent)
        await asyncio.to_thread(dest.write_text, data, encoding="utf-8")
        logger.info("wrote %s (%d bytes)", dest, len(data))
        return dest
