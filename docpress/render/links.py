"""Rewrites internal markdown links to the site urls registered in the structure index."""

from __future__ import annotations

import logging
import posixpath
from urllib.parse import urlsplit
from xml.etree.ElementTree import Element

from markdown import Markdown

from docpress.render.base import RenderHook
from docpress.structure import SiteStructureIndex, normalize_site_path

logger = logging.getLogger(__name__)


class LinkLocalizer(RenderHook):
    """Resolves relative links against the artifact's own site path.

    ``site_path`` is where the artifact lives as seen from the site root,
    e.g. ``/assets/docs-content/guide/page.json``. A link to
    ``../other/page.md`` from there is looked up as
    ``assets/docs-content/other/page``. Unknown targets are left alone.
    """

    tags = ("a",)

    def __init__(self, site_path: str, index: SiteStructureIndex) -> None:
        self.site_path = site_path
        self.index = index

    def handle(self, element: Element, md: Markdown) -> None:
        href = element.get("href")
        if not href:
            return
        localized = self.localize(href)
        if localized != href:
            element.set("href", localized)

    def localize(self, href: str) -> str:
        parts = urlsplit(href)
        if parts.scheme or parts.netloc or not parts.path:
            return href

        if parts.path.startswith("/"):
            target = parts.path
        else:
            target = posixpath.join(posixpath.dirname(self.site_path), parts.path)

        key = normalize_site_path(target)
        url = self.index.lookup(key) if key is not None else None
        if url is None:
            logger.debug("no structure entry for link %s in %s", href, self.site_path)
            return href

        if parts.fragment:
            return f"{url}#{parts.fragment}"
        return url
