"""Site structure loading and lookup."""

from docpress.structure.index import SiteStructureIndex, normalize_site_path
from docpress.structure.models import SiteStructureItem, StructureError

__all__ = [
    "SiteStructureIndex",
    "SiteStructureItem",
    "StructureError",
    "normalize_site_path",
]
