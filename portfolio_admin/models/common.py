"""Common models and base classes"""

from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator, model_validator


def normalize_document_id(value: Any) -> Optional[str]:
    """Coerce a Mongo ``_id`` (ObjectId, ``{"$oid": ...}`` or str) to a plain string"""
    if value is None:
        return None
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict) and "$oid" in value:
        return str(value["$oid"])
    return str(value)


class MongoDocument(BaseModel):
    """
    Base for records that come back from the API with either ``_id`` or ``id``.

    The two spellings are merged here once, so consumers only ever read ``.id``.
    """
    id: Optional[str] = Field(None, alias="_id")

    class Config:
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def merge_id_fields(cls, data: Any) -> Any:
        if isinstance(data, dict) and "_id" not in data and "id" in data:
            data = dict(data)
            data["_id"] = data.pop("id")
        return data

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return normalize_document_id(v)
