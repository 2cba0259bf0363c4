"""Custom validators"""

from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId


def validate_object_id(id_str: str) -> bool:
    """
    Validate if a string is a valid MongoDB ObjectId

    Args:
        id_str: String to validate

    Returns:
        True if valid ObjectId, False otherwise
    """
    if not isinstance(id_str, (str, ObjectId)):
        return False
    try:
        ObjectId(id_str)
        return True
    except (InvalidId, TypeError):
        return False


def clean_object_id(value) -> Optional[str]:
    """
    Strip and validate a project id coming from a form or an API payload.

    Returns:
        The cleaned id string, or None when it is empty or not an ObjectId
    """
    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned or cleaned == "undefined":
        return None
    if not validate_object_id(cleaned):
        return None
    return cleaned
