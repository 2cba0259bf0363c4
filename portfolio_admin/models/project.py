"""Project models"""

from typing import List, Optional

from pydantic import BaseModel, Field

from portfolio_admin.models.common import MongoDocument
from portfolio_admin.models.media import MediaItem


class Timeline(BaseModel):
    """Project timeline; a missing end means the project is ongoing"""
    start: str
    end: Optional[str] = None

    @property
    def is_ongoing(self) -> bool:
        return self.end is None


class Project(MongoDocument):
    """Portfolio project record"""
    title: str
    description: str
    technologies: List[str] = []
    timeline: Timeline
    image_url: Optional[str] = Field(None, alias="imageUrl")
    media: List[MediaItem] = []
    repo_link: Optional[str] = Field(None, alias="repoLink")
    demo_link: Optional[str] = Field(None, alias="demoLink")
    tags: List[str] = []
    featured: bool = False

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "_id": "507f1f77bcf86cd799439011",
                "title": "Portfolio Website",
                "description": "Personal site with an admin panel",
                "technologies": ["React", "Express", "MongoDB"],
                "timeline": {"start": "2024-01", "end": None},
                "imageUrl": "https://example.com/cover.png",
                "media": [],
                "repoLink": "https://github.com/example/portfolio",
                "tags": ["web"]
            }
        }

    @property
    def cover_media(self) -> Optional[MediaItem]:
        """The media item shown first, falling back to the lowest order"""
        if not self.media:
            return None
        for item in self.media:
            if item.is_cover:
                return item
        return min(self.media, key=lambda item: item.order)
