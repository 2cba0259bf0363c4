"""Shared fixtures"""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import httpx
import pytest
from jose import jwt

from portfolio_admin.core.api_client import ApiError
from portfolio_admin.core.notifications import NotificationService
from portfolio_admin.models.media import MediaItem

API_URL = "http://api.test/api"
TEST_SECRET = "test-secret"


def make_token(expires_in: timedelta = timedelta(hours=1)) -> str:
    expire = datetime.now(timezone.utc) + expires_in
    return jwt.encode({"id": "admin", "exp": int(expire.timestamp())}, TEST_SECRET, algorithm="HS256")


@pytest.fixture
def token() -> str:
    return make_token()


@pytest.fixture
def expired_token() -> str:
    return make_token(timedelta(minutes=-5))


def image(url: str, storage_id: Optional[str] = None, **extra) -> MediaItem:
    return MediaItem(
        type="image",
        url=url,
        storage_id=storage_id if storage_id is not None else f"portfolio/projects/p/{url}",
        **extra,
    )


def external_image(url: str, **extra) -> MediaItem:
    return MediaItem(type="image", url=url, is_external=True, **extra)


class RecordingNotifier(NotificationService):
    """Notification service that keeps every toast"""

    def __init__(self, **kwargs):
        self.toasts: List[tuple] = []
        super().__init__(toast=lambda level, message: self.toasts.append((level, message)), **kwargs)

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message in self.toasts if lvl == level]


class FakeStore:
    """In-memory stand-in for MediaStoreClient"""

    def __init__(self, upload_items=None, fail_upload: Optional[str] = None, fail_delete: Optional[str] = None):
        self.upload_items = upload_items or []
        self.fail_upload = fail_upload
        self.fail_delete = fail_delete
        self.uploads: List[dict] = []
        self.deleted: List[MediaItem] = []
        self.before_delete_returns: Optional[Callable[[], None]] = None

    async def upload(self, project_id, images=(), videos=(), token=None, on_progress=None):
        self.uploads.append({"project_id": project_id, "images": list(images), "videos": list(videos), "token": token})
        if self.fail_upload:
            raise ApiError(self.fail_upload, status_code=500)
        if on_progress:
            on_progress(50)
            on_progress(100)
        return list(self.upload_items)

    async def delete(self, media_item, token=None, project_id=None):
        if self.before_delete_returns is not None:
            self.before_delete_returns()
        if self.fail_delete:
            raise ApiError(self.fail_delete, status_code=500)
        self.deleted.append(media_item)
        return True


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def mock_client():
    """Build an httpx.AsyncClient whose requests are answered by ``handler``"""

    def factory(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=API_URL, transport=httpx.MockTransport(handler))

    return factory
