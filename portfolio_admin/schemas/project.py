"""Project schemas for create/update requests"""

from typing import List, Optional

from pydantic import BaseModel, Field

from portfolio_admin.models.media import MediaItem
from portfolio_admin.models.project import Timeline


class ProjectCreate(BaseModel):
    """Schema for creating a new project"""
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    technologies: List[str] = Field(min_length=1)
    timeline: Timeline
    image_url: Optional[str] = Field(None, alias="imageUrl")
    media: List[MediaItem] = []
    repo_link: Optional[str] = Field(None, alias="repoLink")
    demo_link: Optional[str] = Field(None, alias="demoLink")
    tags: List[str] = Field(min_length=1)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "title": "Portfolio Website",
                "description": "Personal site with an admin panel",
                "technologies": ["React", "Express"],
                "timeline": {"start": "2024-01", "end": None},
                "media": [],
                "tags": ["web"]
            }
        }

    def to_payload(self) -> dict:
        data = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        # an open-ended timeline is sent as an explicit null
        data["timeline"] = self.timeline.model_dump(mode="json")
        return data


class ProjectUpdate(BaseModel):
    """Schema for updating a project"""
    title: Optional[str] = None
    description: Optional[str] = None
    technologies: Optional[List[str]] = None
    timeline: Optional[Timeline] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    media: Optional[List[MediaItem]] = None
    repo_link: Optional[str] = Field(None, alias="repoLink")
    demo_link: Optional[str] = Field(None, alias="demoLink")
    tags: Optional[List[str]] = None

    class Config:
        populate_by_name = True

    def to_payload(self) -> dict:
        # explicitly set fields are sent even when None so a link can be cleared
        data = self.model_dump(by_alias=True, exclude_unset=True, exclude={"media", "timeline"}, mode="json")
        if self.timeline is not None:
            data["timeline"] = self.timeline.model_dump(mode="json")
        if self.media is not None:
            data["media"] = [item.to_payload() for item in self.media]
        return data
