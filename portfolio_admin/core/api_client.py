"""Shared HTTP plumbing for the portfolio API clients"""

import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from portfolio_admin.config import settings
from portfolio_admin.core.security import is_token_expired
from portfolio_admin.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A call to the portfolio API failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ApiError):
    """Missing, expired or rejected bearer token"""


class MediaIntegrityError(ApiError):
    """A media record is missing the data needed to address it remotely"""


def extract_error_message(
    response: httpx.Response,
    default: str,
    status_messages: Optional[Dict[int, str]] = None
) -> str:
    """
    Pick the message to surface for a failed response.

    The server's own message wins, then a per-status message, then the default.
    """
    try:
        body = ErrorResponse.model_validate(response.json())
        if body.detail:
            return body.detail
    except (ValueError, ValidationError):
        pass

    if status_messages and response.status_code in status_messages:
        return status_messages[response.status_code]
    return default


def auth_headers(token: Optional[str]) -> Dict[str, str]:
    """
    Build the Authorization header, refusing missing or expired tokens.

    Raises:
        AuthenticationError: before any request is made
    """
    if not token:
        raise AuthenticationError("Authentication token is missing. Please log in again.")
    if is_token_expired(token):
        raise AuthenticationError("Authentication token expired. Please log in again.")
    return {"Authorization": f"Bearer {token}"}


def create_http_client(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """Create an async HTTP client pointed at the portfolio API"""
    return httpx.AsyncClient(
        base_url=base_url or settings.api_url,
        timeout=timeout if timeout is not None else settings.request_timeout,
        transport=transport,
    )


class BaseApiClient:
    """Owns an ``httpx.AsyncClient`` and turns HTTP failures into ``ApiError``"""

    default_headers: Dict[str, str] = {}

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self._owns_client = client is None
        self._client = client or create_http_client(base_url=base_url, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _send(
        self,
        request: httpx.Request,
        default_error: str,
        status_messages: Optional[Dict[int, str]] = None
    ) -> httpx.Response:
        """
        Send a prepared request.

        Raises:
            AuthenticationError: on HTTP 401
            ApiError: on any other non-2xx status or transport failure
        """
        logger.debug(f"API Request: {request.method} {request.url}")
        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling {request.method} {request.url}: {str(e)}")
            raise ApiError(f"{default_error}: request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Error calling {request.method} {request.url}: {str(e)}")
            raise ApiError(default_error) from e

        if response.is_success:
            return response

        message = extract_error_message(response, default_error, status_messages)
        logger.error(
            f"API error {response.status_code} on {request.method} {request.url}: {message}"
        )
        if response.status_code == 401:
            raise AuthenticationError(message, status_code=401)
        raise ApiError(message, status_code=response.status_code)

    async def _request(
        self,
        method: str,
        path: str,
        default_error: str,
        status_messages: Optional[Dict[int, str]] = None,
        **kwargs
    ) -> httpx.Response:
        headers = {**self.default_headers, **(kwargs.pop("headers", None) or {})}
        request = self._client.build_request(method, path, headers=headers, **kwargs)
        return await self._send(request, default_error, status_messages)


def parse_json(response: httpx.Response, default_error: str):
    """Decode a JSON body, mapping garbage to ``ApiError``"""
    try:
        return response.json()
    except ValueError as e:
        logger.error(f"Invalid JSON from {response.request.method} {response.request.url}")
        raise ApiError(default_error, status_code=response.status_code) from e
