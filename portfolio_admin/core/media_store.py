"""Remote media store: project uploads and deletes proxied to Cloudinary by the API"""

import logging
from typing import Any, AsyncIterator, Callable, List, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from portfolio_admin.config import settings
from portfolio_admin.core.api_client import (
    ApiError,
    BaseApiClient,
    MediaIntegrityError,
    auth_headers,
    parse_json,
)
from portfolio_admin.models.media import MediaItem

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

UPLOAD_ERROR = "Failed to upload media files"
DELETE_ERROR = "Failed to delete media file"


def _progress_stream(
    stream: httpx.AsyncByteStream,
    total: int,
    on_progress: Optional[ProgressCallback]
) -> AsyncIterator[bytes]:
    """Re-yield a request body, reporting the percentage of bytes handed to the transport"""

    async def monitored():
        sent = 0
        last = -1
        async for chunk in stream:
            sent += len(chunk)
            if on_progress and total:
                percent = min(100, round(sent * 100 / total))
                if percent != last:
                    last = percent
                    on_progress(percent)
            yield chunk

    return monitored()


class MediaStoreClient(BaseApiClient):
    """
    Client for ``/uploads/projects``.

    Upload returns fully formed media items (storage id and canonical URL are
    assigned server side). Delete needs the item's storage id.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        upload_timeout: Optional[float] = None
    ):
        super().__init__(client=client, base_url=base_url)
        self.upload_timeout = upload_timeout if upload_timeout is not None else settings.upload_timeout

    @staticmethod
    def _check_limits(images: Sequence[Any], videos: Sequence[Any]) -> None:
        if len(images) > settings.max_image_uploads:
            raise ApiError(f"Too many images: at most {settings.max_image_uploads} per upload")
        if len(videos) > settings.max_video_uploads:
            raise ApiError(f"Too many videos: at most {settings.max_video_uploads} per upload")

    async def upload(
        self,
        project_id: str,
        images: Sequence[Any] = (),
        videos: Sequence[Any] = (),
        token: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> List[MediaItem]:
        """
        Upload image and video files for a project.

        Args:
            project_id: Project id, or the placeholder id for unsaved projects
            images: httpx file values, e.g. ``("shot.png", data, "image/png")``
            videos: httpx file values for videos
            token: Admin bearer token
            on_progress: Called with the integer percentage of the body sent

        Returns:
            Media items created by the server

        Raises:
            AuthenticationError: token missing or expired (no request made)
            ApiError: limits exceeded, HTTP failure or malformed response
        """
        headers = auth_headers(token)
        self._check_limits(images, videos)

        files = [("image", f) for f in images] + [("video", f) for f in videos]
        prepared = self._client.build_request(
            "POST",
            f"/uploads/projects/{quote(str(project_id), safe='')}",
            files=files,
            headers=headers,
            timeout=self.upload_timeout,
        )
        total = int(prepared.headers.get("Content-Length", 0))
        request = httpx.Request(
            "POST",
            prepared.url,
            headers=prepared.headers,
            content=_progress_stream(prepared.stream, total, on_progress),
            extensions=prepared.extensions,
        )

        logger.info(
            f"Uploading {len(images)} image(s) and {len(videos)} video(s) for project {project_id}"
        )
        response = await self._send(request, UPLOAD_ERROR)
        if on_progress and not total:
            on_progress(100)

        body = parse_json(response, UPLOAD_ERROR)
        try:
            items = [MediaItem.model_validate(raw) for raw in body.get("mediaItems") or []]
        except (AttributeError, ValidationError) as e:
            logger.error(f"Malformed upload response for project {project_id}: {str(e)}")
            raise ApiError(UPLOAD_ERROR, status_code=response.status_code) from e

        logger.info(f"Uploaded {len(items)} media item(s) for project {project_id}")
        return items

    async def delete(
        self,
        media_item: MediaItem,
        token: Optional[str] = None,
        project_id: Optional[str] = None
    ) -> bool:
        """
        Delete a stored asset by its storage id.

        The storage id already encodes the project folder, so ``project_id`` is
        only used for logging.

        Raises:
            MediaIntegrityError: the item has no storage id
            AuthenticationError: token missing or expired (no request made)
            ApiError: HTTP failure
        """
        if not media_item.storage_id:
            logger.error("Cannot delete media: missing publicId")
            raise MediaIntegrityError("Cannot delete media: missing identification")

        headers = auth_headers(token)
        await self._request(
            "DELETE",
            f"/uploads/projects/{quote(media_item.storage_id, safe='')}",
            DELETE_ERROR,
            headers=headers,
        )
        logger.info(f"Deleted media {media_item.storage_id} (project {project_id or 'unknown'})")
        return True
