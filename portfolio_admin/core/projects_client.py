"""Projects API client"""

import logging
from typing import List, Optional, Union

from pydantic import ValidationError

from portfolio_admin.core.api_client import ApiError, BaseApiClient, auth_headers, parse_json
from portfolio_admin.models.project import Project
from portfolio_admin.schemas.project import ProjectCreate, ProjectUpdate
from portfolio_admin.utils.validators import clean_object_id

logger = logging.getLogger(__name__)

PROJECT_STATUS_MESSAGES = {
    401: "Authentication error. Please log in again.",
    404: "Project not found or already deleted.",
    500: "Server error occurred. Please try again later.",
}


def _require_project_id(project_id) -> str:
    cleaned = clean_object_id(project_id)
    if cleaned is None:
        logger.error(f"Invalid project ID: {project_id!r}")
        raise ApiError("Invalid project ID format. Please try again or refresh the page.")
    return cleaned


def _parse_project(raw, default_error: str) -> Project:
    try:
        return Project.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Malformed project record: {str(e)}")
        raise ApiError(default_error) from e


class ProjectsClient(BaseApiClient):
    """CRUD access to ``/projects``"""

    default_headers = {
        "Cache-Control": "no-cache, no-store, must-revalidate",
        "Pragma": "no-cache",
        "Expires": "0",
    }

    async def check_health(self) -> bool:
        """Return True when the API answers its health endpoint"""
        try:
            await self._request("GET", "/health", "API is not reachable")
            return True
        except ApiError as e:
            logger.warning(f"Health check failed: {e.message}")
            return False

    async def list_projects(self, featured: bool = False) -> List[Project]:
        error = "Failed to fetch projects"
        path = "/projects/featured" if featured else "/projects"
        response = await self._request("GET", path, error)
        body = parse_json(response, error)
        if not isinstance(body, list):
            raise ApiError(error, status_code=response.status_code)
        return [_parse_project(raw, error) for raw in body]

    async def get_project(self, project_id: str) -> Project:
        error = "Failed to fetch project"
        project_id = _require_project_id(project_id)
        response = await self._request(
            "GET", f"/projects/{project_id}", error, status_messages=PROJECT_STATUS_MESSAGES
        )
        return _parse_project(parse_json(response, error), error)

    async def create_project(self, payload: ProjectCreate, token: Optional[str]) -> Project:
        error = "Failed to create project"
        headers = auth_headers(token)
        response = await self._request(
            "POST",
            "/projects",
            error,
            status_messages=PROJECT_STATUS_MESSAGES,
            json=payload.to_payload(),
            headers=headers,
        )
        project = _parse_project(parse_json(response, error), error)
        logger.info(f"Created project {project.id}")
        return project

    async def update_project(
        self,
        project_id: str,
        payload: Union[ProjectCreate, ProjectUpdate],
        token: Optional[str]
    ) -> Project:
        error = "Failed to update project"
        headers = auth_headers(token)
        project_id = _require_project_id(project_id)
        response = await self._request(
            "PUT",
            f"/projects/{project_id}",
            error,
            status_messages=PROJECT_STATUS_MESSAGES,
            json=payload.to_payload(),
            headers=headers,
        )
        project = _parse_project(parse_json(response, error), error)
        logger.info(f"Updated project {project_id}")
        return project

    async def delete_project(self, project_id: str, token: Optional[str]) -> str:
        """
        Delete a project.

        Returns:
            The server's confirmation message
        """
        error = "Failed to delete project"
        headers = auth_headers(token)
        project_id = _require_project_id(project_id)
        response = await self._request(
            "DELETE",
            f"/projects/{project_id}",
            error,
            status_messages=PROJECT_STATUS_MESSAGES,
            headers=headers,
        )
        body = parse_json(response, error)
        logger.info(f"Deleted project {project_id}")
        return body.get("msg", "Project removed") if isinstance(body, dict) else "Project removed"
