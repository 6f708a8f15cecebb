"""Pydantic model for the JSON artifact written per source file."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from docpress.render.models import HeadingEntry


class ContentArtifact(BaseModel):
    """Front matter attributes plus the rendered document.

    Front matter keys are kept as extra fields. ``headings``, ``srcPath`` and
    ``content`` are always computed and win over same-named front matter keys.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    headings: list[HeadingEntry] = Field(default_factory=list)
    src_path: str = Field(alias="srcPath")
    content: str = ""

    @classmethod
    def build(
        cls,
        attributes: dict[str, Any],
        headings: list[HeadingEntry],
        src_path: str,
        content: str,
    ) -> ContentArtifact:
        return cls.model_validate({
            **attributes,
            "headings": headings,
            "srcPath": src_path,
            "content": content,
        })

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
