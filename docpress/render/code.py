"""Code block markup with language annotations."""

from __future__ import annotations

import html
from xml.etree.ElementTree import Element

from markdown import Markdown

from docpress.render.base import RenderHook


class CodeBlockTransformer(RenderHook):
    """Wraps code blocks for the site's highlighter.

    Fenced blocks become ``<pre class="highlight"><code class="language-ts"
    data-language="ts">`` with the payload escaped for HTML and otherwise
    byte-for-byte identical to the source. Indented blocks only get the
    ``pre`` class; their text is left to Python-Markdown.
    """

    tags = ("pre",)

    def __init__(self, block_class: str = "highlight", language_prefix: str = "language-") -> None:
        self.block_class = block_class
        self.language_prefix = language_prefix

    def handle(self, element: Element, md: Markdown) -> None:
        if self.block_class and not element.get("class"):
            element.set("class", self.block_class)

    def render_fence(self, code: str, info: str) -> str:
        words = info.split()
        lang = words[0] if words else ""

        pre_attrs = f' class="{html.escape(self.block_class)}"' if self.block_class else ""
        code_attrs = ""
        if lang:
            lang = html.escape(lang)
            code_attrs = f' class="{html.escape(self.language_prefix)}{lang}" data-language="{lang}"'

        return f"<pre{pre_attrs}><code{code_attrs}>{html.escape(code, quote=False)}</code></pre>"
