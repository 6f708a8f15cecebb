"""SiteStructureIndex — normalized-path lookup over navigation entries."""

from __future__ import annotations

import asyncio
import logging
import posixpath
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from docpress.structure.models import SiteStructureItem, StructureError

logger = logging.getLogger(__name__)

_ITEMS = TypeAdapter(list[SiteStructureItem])


def normalize_site_path(path: str) -> str | None:
    """Collapse a site path to its lookup key.

    "/assets/docs/../guide/intro.json" -> "assets/guide/intro". Returns None
    for paths that climb above the site root.
    """
    norm = posixpath.normpath(path.lstrip("/"))
    if norm in (".", "..") or norm.startswith("../"):
        return None
    root, _ext = posixpath.splitext(norm)
    return root


class SiteStructureIndex:
    """Read-only view of the site structure used for link resolution.

    Entries are keyed by their normalized ``filePath``. Entries without a
    ``filePath`` or ``url`` are skipped; when two entries share a key the
    first one in document order wins.
    """

    def __init__(self, items: Iterable[SiteStructureItem]) -> None:
        self.items = list(items)
        self._urls: dict[str, str] = {}
        for item in _walk(self.items):
            if not item.file_path or item.url is None:
                continue
            key = normalize_site_path(item.file_path)
            if key is not None:
                self._urls.setdefault(key, item.url)

    def __len__(self) -> int:
        return len(self._urls)

    def __contains__(self, key: str) -> bool:
        return key in self._urls

    def lookup(self, key: str) -> str | None:
        """Return the url registered for a normalized path, or None."""
        return self._urls.get(key)

    @classmethod
    def from_json(cls, raw: str | bytes) -> SiteStructureIndex:
        try:
            return cls(_ITEMS.validate_json(raw))
        except ValidationError as e:
            raise StructureError(f"Invalid site structure: {e}") from e

    @classmethod
    async def load(cls, path: str | Path) -> SiteStructureIndex:
        """Read and parse a structure file. A missing file raises FileNotFoundError."""
        raw = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        try:
            index = cls.from_json(raw)
        except StructureError as e:
            raise StructureError(f"{path}: {e}") from e
        logger.debug("loaded %d structure entries from %s", len(index), path)
        return index


def _walk(items: list[SiteStructureItem]) -> Iterator[SiteStructureItem]:
    for item in items:
        yield item
        yield from _walk(item.children)
