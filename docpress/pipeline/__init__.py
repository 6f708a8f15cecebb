"""Conversion pipeline orchestration."""

from docpress.pipeline.models import BatchReport, FileError
from docpress.pipeline.orchestrator import ContentPipeline, discover_sources

__all__ = [
    "BatchReport",
    "ContentPipeline",
    "FileError",
    "discover_sources",
]
