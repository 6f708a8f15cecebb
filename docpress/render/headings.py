"""Collects an ordered heading outline and injects anchor ids."""

from __future__ import annotations

import html
from xml.etree.ElementTree import Element

from markdown import Markdown
from markdown.extensions.toc import render_inner_html, slugify, strip_tags, unique

from docpress.render.base import RenderHook
from docpress.render.models import HeadingEntry


class HeadingCollector(RenderHook):
    """Appends a HeadingEntry to ``headings`` for every heading rendered.

    The list belongs to the caller and is only appended to, so one collector
    (and one list) per document keeps outlines from leaking across files.
    """

    tags = ("h1", "h2", "h3", "h4", "h5", "h6")

    def __init__(self, headings: list[HeadingEntry], separator: str = "-") -> None:
        self.headings = headings
        self.separator = separator
        self._ids: set[str] = set()

    def reset(self) -> None:
        self._ids = set()

    def handle(self, element: Element, md: Markdown) -> None:
        # Inline code is already entity-escaped here; the text is stored unescaped
        text = html.unescape(strip_tags(render_inner_html(element, md)))
        anchor = unique(slugify(text, self.separator), self._ids)
        element.set("id", anchor)
        self.headings.append(HeadingEntry(level=int(element.tag[1]), text=text, id=anchor))
