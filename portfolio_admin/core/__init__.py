"""Core services of the admin client"""

from portfolio_admin.core.logging import setup_logging
from portfolio_admin.core.api_client import ApiError, AuthenticationError, MediaIntegrityError
from portfolio_admin.core.security import decode_token, is_token_expired, get_token_remaining_time
from portfolio_admin.core.notifications import NotificationService
from portfolio_admin.core.media_store import MediaStoreClient
from portfolio_admin.core.projects_client import ProjectsClient
from portfolio_admin.core.media_collection import MediaCollection
from portfolio_admin.core.project_form import ProjectForm

__all__ = [
    "setup_logging",
    "ApiError",
    "AuthenticationError",
    "MediaIntegrityError",
    "decode_token",
    "is_token_expired",
    "get_token_remaining_time",
    "NotificationService",
    "MediaStoreClient",
    "ProjectsClient",
    "MediaCollection",
    "ProjectForm",
]
