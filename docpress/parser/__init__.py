"""Front matter parsing for markdown sources."""

from docpress.parser.frontmatter import split_front_matter
from docpress.parser.models import FrontMatterError, ParsedDocument

__all__ = [
    "FrontMatterError",
    "ParsedDocument",
    "split_front_matter",
]
