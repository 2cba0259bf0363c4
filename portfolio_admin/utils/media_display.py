"""Display helpers shared by every view that renders project media"""

from typing import List, Optional

from portfolio_admin.models.media import DisplayVariant, MediaFit, MediaItem, MediaType


def derive_display_fit(item: Optional[MediaItem]) -> MediaFit:
    """
    Pick the object-fit used to render a media item.

    Videos always letterbox. Images fill the frame only when they were marked
    as desktop captures.
    """
    if item is None:
        return MediaFit.CONTAIN

    if item.type == MediaType.VIDEO:
        return MediaFit.CONTAIN

    if item.display_variant == DisplayVariant.DESKTOP:
        return MediaFit.COVER

    return MediaFit.CONTAIN


def media_fit_class(fit: MediaFit = MediaFit.CONTAIN, include_dimensions: bool = True) -> str:
    """Class names for a media element rendered with the given fit"""
    if fit == MediaFit.COVER:
        base_class = "object-cover object-center"
    else:
        base_class = "object-contain object-center"

    if not include_dimensions:
        return base_class

    return f"w-full h-full {base_class}"


def ensure_display_variant(item: MediaItem) -> MediaItem:
    """Back-fill a missing display variant on legacy image records"""
    if item.type != MediaType.IMAGE or item.display_variant is not None:
        return item

    return item.model_copy(update={"display_variant": DisplayVariant.MOBILE})


def normalize_media_items(items: Optional[List[MediaItem]] = None) -> List[MediaItem]:
    return [ensure_display_variant(item) for item in items or []]
