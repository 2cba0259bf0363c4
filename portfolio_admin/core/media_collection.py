"""Ordered media collection edited by the admin project form"""

import logging
from typing import Any, Callable, Iterator, List, Optional, Sequence, Union

from portfolio_admin.config import settings
from portfolio_admin.core.api_client import ApiError
from portfolio_admin.core.media_store import MediaStoreClient, ProgressCallback
from portfolio_admin.core.notifications import NotificationService
from portfolio_admin.models.media import DisplayVariant, MediaItem, MediaType
from portfolio_admin.models.project import Project
from portfolio_admin.schemas.common import OperationResult, UploadResult
from portfolio_admin.utils.media_display import normalize_media_items

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[List[MediaItem]], None]
MediaInput = Union[MediaItem, dict]


def _coerce(item: MediaInput) -> MediaItem:
    if isinstance(item, MediaItem):
        return item
    return MediaItem.model_validate(item)


def reindex(items: Sequence[MediaItem]) -> List[MediaItem]:
    """
    Re-derive ``order`` from list position and make position 0 the cover.

    Every mutation ends here, so orders stay contiguous and exactly one item
    (the first) is the cover.
    """
    return [
        item.model_copy(update={"order": index, "is_cover": index == 0})
        for index, item in enumerate(items)
    ]


def normalize_loaded_media(items: Sequence[MediaInput]) -> List[MediaItem]:
    """
    Clean up persisted media before editing.

    Items are stable-sorted by their stored order. When several claim to be
    the cover, the one with the lowest order wins and is moved to the front.
    """
    ordered = sorted(normalize_media_items([_coerce(i) for i in items]), key=lambda i: i.order)
    cover_index = next((i for i, item in enumerate(ordered) if item.is_cover), 0)
    if cover_index:
        ordered.insert(0, ordered.pop(cover_index))
    return reindex(ordered)


class MediaCollection:
    """
    The media list of one project while its form is open.

    Local mutations are synchronous. Uploads and deletes go through the media
    store and never raise: failures come back as results and are pushed to the
    notification service.
    """

    def __init__(
        self,
        items: Optional[Sequence[MediaInput]] = None,
        store: Optional[MediaStoreClient] = None,
        token: Optional[str] = None,
        project_id: Optional[str] = None,
        notifier: Optional[NotificationService] = None,
        on_change: Optional[ChangeCallback] = None,
        allow_offline_removal: Optional[bool] = None
    ):
        self.store = store
        self.token = token
        self.project_id = project_id
        self.notifier = notifier or NotificationService()
        self.on_change = on_change
        if allow_offline_removal is None:
            allow_offline_removal = settings.allow_offline_media_removal
        self.allow_offline_removal = allow_offline_removal
        self.upload_progress = 0
        self._active_uploads = 0
        self._items: List[MediaItem] = normalize_loaded_media(items or [])

    @classmethod
    def from_project(cls, project: Optional[Project], **kwargs: Any) -> "MediaCollection":
        """
        Seed a collection from a saved project.

        Projects saved before multi-media support only have ``imageUrl``; that
        image becomes a single external cover item.
        """
        if project is not None:
            kwargs.setdefault("project_id", project.id)

        if project is None:
            items: List[MediaInput] = []
        elif project.media:
            items = list(project.media)
        elif project.image_url:
            items = [MediaItem(
                type=MediaType.IMAGE,
                url=project.image_url,
                is_external=True,
                order=0,
                is_cover=True,
            )]
        else:
            items = []
        return cls(items, **kwargs)

    # Read access

    @property
    def items(self) -> List[MediaItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[MediaItem]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> MediaItem:
        return self._items[index]

    @property
    def uploading(self) -> bool:
        """True while at least one upload is in flight"""
        return self._active_uploads > 0

    @property
    def cover(self) -> Optional[MediaItem]:
        return self._items[0] if self._items else None

    def viewer_items(self) -> List[MediaItem]:
        """Items the lightbox should show, in collection order"""
        return [item for item in self._items if item.show_in_viewer is not False]

    def to_payload(self) -> List[dict]:
        return [item.to_payload() for item in self._items]

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def _commit(self, items: Sequence[MediaItem]) -> None:
        self._items = reindex(items)
        if self.on_change is not None:
            self.on_change(self.items)

    # Local mutations

    def add_items(self, new_items: Sequence[MediaInput]) -> None:
        """Append uploaded items after everything already in the collection"""
        if not new_items:
            return
        appended = normalize_media_items([_coerce(i) for i in new_items])
        logger.debug(f"Appending {len(appended)} media item(s) to {len(self._items)}")
        self._commit(self._items + appended)

    def _swap(self, index: int, other: int) -> None:
        items = list(self._items)
        items[index], items[other] = items[other], items[index]
        self._commit(items)

    def move_left(self, index: int) -> None:
        if not self._in_range(index) or index == 0:
            return
        self._swap(index, index - 1)

    def move_right(self, index: int) -> None:
        if not self._in_range(index) or index == len(self._items) - 1:
            return
        self._swap(index, index + 1)

    def set_display_variant(self, index: int, variant: Union[DisplayVariant, str]) -> None:
        """Mark an image as a mobile or desktop capture; videos are left alone"""
        variant = DisplayVariant(variant)
        if not self._in_range(index):
            return
        item = self._items[index]
        if item.type != MediaType.IMAGE or item.display_variant == variant:
            return
        items = list(self._items)
        items[index] = item.model_copy(update={"display_variant": variant})
        self._commit(items)

    def toggle_show_in_viewer(self, index: int) -> None:
        if not self._in_range(index):
            return
        item = self._items[index]
        items = list(self._items)
        items[index] = item.model_copy(update={"show_in_viewer": item.show_in_viewer is False})
        self._commit(items)

    # Remote operations

    def _fail(self, error: str) -> OperationResult:
        self.notifier.error(error)
        return OperationResult.fail(error)

    def _remove_local(self, index: int) -> None:
        self._commit(self._items[:index] + self._items[index + 1:])

    def _index_of_stored(self, storage_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.storage_id == storage_id:
                return index
        return None

    async def remove_item(self, index: int) -> OperationResult:
        """
        Remove an item, deleting the stored asset first when there is one.

        The local list only changes after the store confirms the delete, so a
        failed delete can simply be retried.
        """
        if not self._in_range(index):
            logger.warning(f"Remove ignored: index {index} out of range ({len(self._items)} items)")
            return OperationResult.fail("Media item not found")

        item = self._items[index]

        if item.is_external:
            self._remove_local(index)
            message = "External media removed successfully"
            self.notifier.success(message)
            return OperationResult.ok(message=message)

        if not item.is_deletable_remotely:
            logger.warning(f"Refusing to delete media at {index}: stored item without publicId")
            return self._fail("Cannot delete media: missing identification")

        if self.store is None or not self.token:
            if self.allow_offline_removal:
                logger.warning(f"Removing media {item.storage_id} locally; remote asset kept")
                self._remove_local(index)
                return OperationResult.ok(message="Media removed from project")
            if not self.token:
                return self._fail("You must be authenticated to delete media")
            return self._fail("Media store is not configured")

        try:
            await self.store.delete(item, self.token, project_id=self.project_id)
        except ApiError as e:
            logger.error(f"Failed to delete media {item.storage_id}: {e.message}")
            return self._fail(e.message)

        # the list may have been reordered while the delete was in flight
        current = self._index_of_stored(item.storage_id)
        if current is not None:
            self._remove_local(current)

        message = "Media deleted successfully"
        self.notifier.success(message)
        return OperationResult.ok(message=message)

    def _track_progress(self, on_progress: Optional[ProgressCallback]) -> ProgressCallback:
        def report(percent: int) -> None:
            self.upload_progress = percent
            if on_progress is not None:
                on_progress(percent)
        return report

    async def upload_files(
        self,
        images: Optional[Sequence[Any]] = None,
        videos: Optional[Sequence[Any]] = None,
        project_id: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Upload files and append the resulting items.

        Unsaved projects upload under the placeholder id so media can be added
        before the project record exists. Overlapping uploads share
        ``upload_progress``, which resets once the last one finishes.
        """
        images = list(images or [])
        videos = list(videos or [])
        if not images and not videos:
            return UploadResult(success=True)

        if not self.token:
            error = "You must be authenticated to upload files"
            self.notifier.error(error)
            return UploadResult(success=False, error=error)
        if self.store is None:
            error = "Media store is not configured"
            self.notifier.error(error)
            return UploadResult(success=False, error=error)

        upload_id = project_id or self.project_id or settings.placeholder_project_id
        if not self._active_uploads:
            self.upload_progress = 0
        self._active_uploads += 1
        try:
            uploaded = await self.store.upload(
                upload_id,
                images=images,
                videos=videos,
                token=self.token,
                on_progress=self._track_progress(on_progress),
            )
        except ApiError as e:
            logger.error(f"Upload for project {upload_id} failed: {e.message}")
            self.notifier.error(e.message)
            return UploadResult(success=False, error=e.message)
        finally:
            self._active_uploads -= 1
            if not self._active_uploads:
                self.upload_progress = 0

        start = len(self._items)
        self.add_items(uploaded)
        added = self._items[start:]

        count = len(added)
        self.notifier.success(f"{count} file{'s' if count != 1 else ''} uploaded")
        return UploadResult(success=True, media_items=added)
