"""Pydantic models for parsed source documents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FrontMatterError(ValueError):
    """Raised when a document's front matter block cannot be parsed."""


class ParsedDocument(BaseModel):
    """A markdown document split into front matter attributes and body."""

    attributes: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
