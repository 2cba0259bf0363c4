"""Cloudinary URL transformation helpers"""

import logging
import re
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

IMAGE_SIZES = {
    "THUMBNAIL": {"width": 150, "height": 150, "crop": "fill"},
    "SMALL": {"width": 300, "height": 200, "crop": "fill"},
    "MEDIUM": {"width": 600, "height": 400, "crop": "fill"},
    "LARGE": {"width": 1200, "height": 800, "crop": "fill"},
    "HERO": {"width": 1920, "height": 1080, "crop": "fill"},
}

VIDEO_TRANSFORMS = {
    "PREVIEW": {"streaming_profile": "hd", "format": "mp4", "quality": "auto:good"},
    "HD": {"streaming_profile": "hd", "format": "mp4", "quality": "auto:best"},
    "THUMB": {"width": 640, "height": 360, "crop": "fill", "format": "jpg"},
}

UPLOAD_SEGMENT = "/upload/"
_VIDEO_EXTENSION = re.compile(r"\.(mp4|webm|mov|ogv)($|\?)")


def is_cloudinary_url(url: Optional[str]) -> bool:
    """Check if a URL is served by Cloudinary"""
    return bool(url) and "cloudinary.com" in url


def _is_transformable(url: Optional[str]) -> bool:
    return is_cloudinary_url(url) and UPLOAD_SEGMENT in url


def get_transformed_image_url(url: str, options: Dict[str, Any]) -> str:
    """
    Insert a transformation segment into a Cloudinary image URL.

    Args:
        url: Original Cloudinary URL
        options: width, height, crop, quality and format

    Returns:
        Transformed URL, or the original URL when it is not a Cloudinary upload
    """
    if not _is_transformable(url):
        return url

    transformations = []
    if options.get("width"):
        transformations.append(f"w_{options['width']}")
    if options.get("height"):
        transformations.append(f"h_{options['height']}")
    transformations.append(f"c_{options.get('crop') or 'fill'}")
    transformations.append(f"q_{options.get('quality') or 'auto'}")
    if options.get("format"):
        transformations.append(f"f_{options['format']}")

    head, tail = url.split(UPLOAD_SEGMENT, 1)
    return f"{head}{UPLOAD_SEGMENT}{','.join(transformations)}/{tail}"


def get_video_thumbnail(video_url: str, options: Optional[Dict[str, Any]] = None) -> str:
    """
    Build a still-frame thumbnail URL for a Cloudinary video.

    The video extension is swapped for the thumbnail format extension.
    """
    if not _is_transformable(video_url):
        return video_url

    options = options if options is not None else VIDEO_TRANSFORMS["THUMB"]
    image_format = options.get("format") or "jpg"
    transformations = [
        f"w_{options.get('width') or 640}",
        f"h_{options.get('height') or 360}",
        f"c_{options.get('crop') or 'fill'}",
        "q_auto",
        f"f_{image_format}",
    ]

    head, tail = video_url.split(UPLOAD_SEGMENT, 1)
    path = _VIDEO_EXTENSION.sub(rf".{image_format}\2", tail, count=1)
    return f"{head}{UPLOAD_SEGMENT}{','.join(transformations)}/{path}"


def get_public_id_from_url(url: str) -> Optional[str]:
    """
    Extract the Cloudinary public id (path after /upload/, minus query and extension).

    Returns:
        Public id, or None when the URL is not a Cloudinary upload
    """
    if not is_cloudinary_url(url):
        return None

    upload_index = url.find(UPLOAD_SEGMENT)
    if upload_index == -1:
        return None

    path = url[upload_index + len(UPLOAD_SEGMENT):].split("?", 1)[0]
    stem, dot, _ = path.rpartition(".")
    return stem if dot else path
