"""Front matter splitter for markdown sources."""

from __future__ import annotations

import re

import yaml

from docpress.parser.models import FrontMatterError, ParsedDocument

# Opening delimiter on the first line, closing delimiter on its own line.
# The newline after the closing delimiter belongs to the block.
_FRONTMATTER_RE = re.compile(
    r"\A\ufeff?(?:---|= yaml =)[ \t]*\n"
    r"(?P<yaml>.*?\n)??"
    r"(?:---|\.\.\.)[ \t]*(?:\n|\Z)",
    re.DOTALL,
)


def split_front_matter(text: str) -> ParsedDocument:
    """Separate a raw document into front matter attributes and body.

    CRLF and lone CR line endings are converted to LF first. Documents
    without a front matter block come back with empty attributes and that
    text as body. Raises FrontMatterError for malformed YAML or a block
    whose top level is not a mapping.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return ParsedDocument(attributes={}, body=text)

    yaml_str = match.group("yaml") or ""
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"YAML parse error: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )

    return ParsedDocument(attributes=data, body=text[match.end():])
