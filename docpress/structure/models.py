"""Pydantic models for site structure (navigation) files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StructureError(ValueError):
    """Raised when a site structure file cannot be parsed."""


class SiteStructureItem(BaseModel):
    """A navigation entry. Unknown keys are kept but ignored."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    text: str | None = None
    url: str | None = None
    file_path: str | None = Field(default=None, alias="filePath")
    children: list[SiteStructureItem] = Field(default_factory=list)
