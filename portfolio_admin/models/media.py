"""Project media models"""

from enum import Enum
from typing import Optional

from pydantic import Field

from portfolio_admin.models.common import MongoDocument


class MediaType(str, Enum):
    """Media type enumeration"""
    IMAGE = "image"
    VIDEO = "video"


class DisplayVariant(str, Enum):
    """Aspect-ratio hint for rendering images"""
    MOBILE = "mobile"
    DESKTOP = "desktop"


class MediaFit(str, Enum):
    """Object-fit used when rendering a media item"""
    CONTAIN = "contain"
    COVER = "cover"


class MediaItem(MongoDocument):
    """One uploaded or linked asset attached to a project"""
    type: MediaType
    url: str
    storage_id: Optional[str] = Field(None, alias="publicId")
    is_external: bool = Field(False, alias="isExternal")
    order: int = Field(default=0, ge=0)
    is_cover: bool = Field(False, alias="displayFirst")
    show_in_viewer: Optional[bool] = Field(True, alias="showInViewer")
    display_variant: Optional[DisplayVariant] = Field(None, alias="displayVariant")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "type": "image",
                "url": "https://res.cloudinary.com/demo/image/upload/v1700000000/portfolio/projects/temp/1700000000.jpg",
                "publicId": "portfolio/projects/temp/1700000000",
                "isExternal": False,
                "order": 0,
                "displayFirst": True,
                "showInViewer": True,
                "displayVariant": "desktop"
            }
        }

    @property
    def is_deletable_remotely(self) -> bool:
        """True when the asset lives in the media store and can be destroyed there"""
        return not self.is_external and bool(self.storage_id)

    def to_payload(self) -> dict:
        """Serialize to the wire shape stored on the project record"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
