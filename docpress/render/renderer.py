"""MarkdownRenderer — Python-Markdown with site render hooks wired in."""

from __future__ import annotations

import markdown

from docpress.config.models import RenderConfig
from docpress.render.base import HookExtension, RenderHook
from docpress.render.code import CodeBlockTransformer
from docpress.render.headings import HeadingCollector
from docpress.render.links import LinkLocalizer
from docpress.render.models import HeadingEntry
from docpress.structure import SiteStructureIndex


class MarkdownRenderer:
    """Renders markdown to HTML, running ``hooks`` over every pass.

    A fresh Markdown instance is built per call so no parser state carries
    over between documents.
    """

    def __init__(self, hooks: list[RenderHook], extensions: list[str] | None = None) -> None:
        self.hooks = hooks
        self.extensions = list(extensions or [])

    def render(self, text: str) -> str:
        for hook in self.hooks:
            hook.reset()
        md = markdown.Markdown(
            extensions=[*self.extensions, HookExtension(self.hooks)],
            output_format="html",
        )
        return md.convert(text)


def create_site_renderer(
    headings: list[HeadingEntry],
    site_path: str,
    index: SiteStructureIndex,
    config: RenderConfig | None = None,
) -> MarkdownRenderer:
    """Build the renderer used for one document.

    Hook order is headings, code, links. No two of them handle the same
    element tag.
    """
    config = config or RenderConfig()
    return MarkdownRenderer(
        [
            HeadingCollector(headings),
            CodeBlockTransformer(config.code_block_class, config.language_prefix),
            LinkLocalizer(site_path, index),
        ],
        extensions=config.extensions,
    )
