"""Utility functions"""

from portfolio_admin.utils.validators import validate_object_id, clean_object_id
from portfolio_admin.utils.cloudinary import (
    is_cloudinary_url,
    get_transformed_image_url,
    get_video_thumbnail,
    get_public_id_from_url,
)

__all__ = [
    "validate_object_id",
    "clean_object_id",
    "is_cloudinary_url",
    "get_transformed_image_url",
    "get_video_thumbnail",
    "get_public_id_from_url",
]
