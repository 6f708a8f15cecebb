"""Output subsystem — writes JSON content artifacts."""

from docpress.output.models import ContentArtifact
from docpress.output.writer import ArtifactWriter

__all__ = [
    "ArtifactWriter",
    "ContentArtifact",
]
