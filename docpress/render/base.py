"""RenderHook interface and the Python-Markdown extension that dispatches to hooks."""

from __future__ import annotations

import html
import re
import uuid
from abc import ABC, abstractmethod
from xml.etree.ElementTree import Element

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

# Opening fence: up to three spaces, then ``` or ~~~ (3+), then an info string.
_FENCE_OPEN_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*$")
# A list item opener as Python-Markdown recognizes it.
_LIST_ITEM_RE = re.compile(r"^ {0,3}(?:[*+-]|\d+\.)[ \t]+\S")


class RenderHook(ABC):
    """A per-element handler run during a single render pass.

    ``tags`` lists the element tags the hook wants to see. Hooks that render
    fenced code return markup from ``render_fence``; everyone else inherits
    the ``None`` default.
    """

    tags: tuple[str, ...] = ()

    def reset(self) -> None:
        """Called once at the start of every render."""

    @abstractmethod
    def handle(self, element: Element, md: Markdown) -> None:
        """Inspect or rewrite one element in place."""
        ...

    def render_fence(self, code: str, info: str) -> str | None:
        return None


def default_fence_html(code: str, info: str) -> str:
    lang = info.split()[0] if info.split() else ""
    class_attr = f' class="language-{html.escape(lang)}"' if lang else ""
    return f"<pre><code{class_attr}>{html.escape(code, quote=False)}</code></pre>"


class _FenceStash:
    """Fenced blocks captured from the raw source, keyed by marker line."""

    def __init__(self) -> None:
        self.marker = f"docpress-fence-{uuid.uuid4().hex}-"
        self.blocks: dict[str, str] = {}

    def add(self, markup: str) -> str:
        key = f"{self.marker}{len(self.blocks)}"
        self.blocks[key] = markup
        return key


class _FenceCapture(Preprocessor):
    """Lift fenced code out of the source before whitespace normalization.

    Python-Markdown expands tabs and blanks whitespace-only lines before the
    block parser runs, so fences are replaced by marker lines here and turned
    into stash placeholders by _FenceRestore afterwards.
    """

    def __init__(self, md: Markdown, hooks: list[RenderHook], stash: _FenceStash) -> None:
        super().__init__(md)
        self.hooks = hooks
        self.stash = stash

    def run(self, lines: list[str]) -> list[str]:
        # Same line-ending rules normalize_whitespace applies later on
        lines = "\n".join(lines).replace("\r\n", "\n").replace("\r", "\n").split("\n")
        out: list[str] = []
        i = 0
        while i < len(lines):
            opening = _FENCE_OPEN_RE.match(lines[i])
            close = self._find_close(lines, i + 1, opening) if opening else None
            if close is None:
                out.append(lines[i])
                i += 1
                continue

            indent = len(opening.group("indent"))
            code = "\n".join(_strip_indent(line, indent) for line in lines[i + 1:close])
            markup = self._render(code, opening.group("info").strip())
            # An indented fence under a list item stays inside that item
            prefix = " " * self.md.tab_length if indent and _in_list_item(out) else ""
            out.extend(["", prefix + self.stash.add(markup), ""])
            i = close + 1
        return out

    @staticmethod
    def _find_close(lines: list[str], start: int, opening: re.Match) -> int | None:
        fence = opening.group("fence")
        if fence[0] == "`" and "`" in opening.group("info"):
            return None
        for j in range(start, len(lines)):
            closing = _FENCE_CLOSE_RE.match(lines[j])
            if closing and closing.group("fence")[0] == fence[0] and len(closing.group("fence")) >= len(fence):
                return j
        return None

    def _render(self, code: str, info: str) -> str:
        for hook in self.hooks:
            markup = hook.render_fence(code, info)
            if markup is not None:
                return markup
        return default_fence_html(code, info)


class _FenceRestore(Preprocessor):
    def __init__(self, md: Markdown, stash: _FenceStash) -> None:
        super().__init__(md)
        self.stash = stash

    def run(self, lines: list[str]) -> list[str]:
        out = []
        for line in lines:
            key = line.lstrip(" ")
            if key in self.stash.blocks:
                line = line[: len(line) - len(key)] + self.md.htmlStash.store(self.stash.blocks[key])
            out.append(line)
        return out


class _HookDispatcher(Treeprocessor):
    def __init__(self, md: Markdown, hooks: list[RenderHook]) -> None:
        super().__init__(md)
        self.hooks = hooks

    def run(self, root: Element) -> None:
        for element in root.iter():
            for hook in self.hooks:
                if element.tag in hook.tags:
                    hook.handle(element, self.md)


class HookExtension(Extension):
    """Registers render hooks on a Markdown instance.

    Hooks see elements in registration order, after inline processing and
    before prettifying (the same slot the toc extension uses).
    """

    def __init__(self, hooks: list[RenderHook], **kwargs) -> None:
        self.hooks = list(hooks)
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        stash = _FenceStash()
        # normalize_whitespace runs at 30, fenced_code at 25
        md.preprocessors.register(_FenceCapture(md, self.hooks, stash), "docpress_fence_capture", 35)
        md.preprocessors.register(_FenceRestore(md, stash), "docpress_fence_restore", 29)
        md.treeprocessors.register(_HookDispatcher(md, self.hooks), "docpress_hooks", 5)


def _in_list_item(lines: list[str]) -> bool:
    """True when the nearest preceding content belongs to a list item."""
    for line in reversed(lines):
        if not line.strip():
            continue
        if _LIST_ITEM_RE.match(line):
            return True
        if not line[0].isspace():
            return False
    return False


def _strip_indent(line: str, width: int) -> str:
    i = 0
    while i < width and i < len(line) and line[i] == " ":
        i += 1
    return line[i:]
