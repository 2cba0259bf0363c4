"""Portfolio API models using Pydantic"""

from portfolio_admin.models.common import MongoDocument, normalize_document_id
from portfolio_admin.models.media import MediaItem, MediaType, DisplayVariant, MediaFit
from portfolio_admin.models.project import Project, Timeline

__all__ = [
    "MongoDocument",
    "normalize_document_id",
    "MediaItem",
    "MediaType",
    "DisplayVariant",
    "MediaFit",
    "Project",
    "Timeline",
]
