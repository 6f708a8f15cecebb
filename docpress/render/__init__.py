"""Markdown rendering with heading, code block, and link hooks."""

from .base import HookExtension, RenderHook
from .code import CodeBlockTransformer
from .headings import HeadingCollector
from .links import LinkLocalizer
from .models import HeadingEntry
from .renderer import MarkdownRenderer, create_site_renderer

__all__ = [
    "CodeBlockTransformer",
    "HeadingCollector",
    "HeadingEntry",
    "HookExtension",
    "LinkLocalizer",
    "MarkdownRenderer",
    "RenderHook",
    "create_site_renderer",
]
