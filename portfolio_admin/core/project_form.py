"""Add/edit project session: form fields plus the media collection"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from portfolio_admin.core.api_client import ApiError
from portfolio_admin.core.logging import setup_logging
from portfolio_admin.core.media_collection import MediaCollection
from portfolio_admin.core.media_store import MediaStoreClient
from portfolio_admin.core.notifications import NotificationService
from portfolio_admin.core.projects_client import ProjectsClient
from portfolio_admin.models.project import Project
from portfolio_admin.schemas.common import OperationResult
from portfolio_admin.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)

FORM_FIELDS = (
    "title",
    "description",
    "technologies",
    "timeline",
    "image_url",
    "repo_link",
    "demo_link",
    "tags",
)


def _initial_fields(project: Optional[Project]) -> Dict[str, Any]:
    if project is None:
        return {
            "title": "",
            "description": "",
            "technologies": [],
            "timeline": {"start": "", "end": None},
            "image_url": "",
            "repo_link": "",
            "demo_link": "",
            "tags": [],
        }
    return {
        "title": project.title,
        "description": project.description,
        "technologies": list(project.technologies),
        "timeline": project.timeline.model_dump(),
        "image_url": project.image_url or "",
        "repo_link": project.repo_link or "",
        "demo_link": project.demo_link or "",
        "tags": list(project.tags),
    }


def _validation_message(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        field = ".".join(str(loc) for loc in detail["loc"])
        parts.append(f"{field}: {detail['msg']}")
    return "; ".join(parts)


class ProjectForm:
    """
    One open add/edit project form.

    The media collection is the source of truth for ``media``; it is serialized
    into the payload on submit. Closing the form without submitting just drops
    this object.
    """

    def __init__(
        self,
        projects: ProjectsClient,
        store: Optional[MediaStoreClient] = None,
        token: Optional[str] = None,
        project: Optional[Project] = None,
        notifier: Optional[NotificationService] = None
    ):
        setup_logging()
        self.projects = projects
        self.token = token
        self.project = project
        self.notifier = notifier or NotificationService()
        self.fields = _initial_fields(project)
        self.media = MediaCollection.from_project(
            project,
            store=store,
            token=token,
            notifier=self.notifier,
        )

    @property
    def is_editing(self) -> bool:
        return self.project is not None

    def update(self, **changes: Any) -> None:
        """Set form fields by name"""
        unknown = set(changes) - set(FORM_FIELDS)
        if unknown:
            raise KeyError(f"Unknown project form field(s): {', '.join(sorted(unknown))}")
        self.fields.update(changes)

    def build_payload(self) -> ProjectCreate:
        """
        Validate the form into a request payload.

        Raises:
            ValidationError: required fields are missing or malformed
        """
        data = dict(self.fields)
        for optional in ("image_url", "repo_link", "demo_link"):
            if not data.get(optional):
                data[optional] = None
        timeline = dict(data.get("timeline") or {})
        if not timeline.get("end"):
            timeline["end"] = None
        data["timeline"] = timeline
        data["media"] = self.media.items
        return ProjectCreate.model_validate(data)

    def build_update(self) -> ProjectUpdate:
        """
        Validate the form and keep only the fields that differ from the saved
        project. Media is always sent since its order is edited in place.
        """
        full = self.build_payload()
        changes = {}
        for name in ProjectUpdate.model_fields:
            value = getattr(full, name)
            if name == "media" or value != getattr(self.project, name):
                changes[name] = value
        return ProjectUpdate(**changes)

    async def submit(self) -> OperationResult:
        """
        Create or update the project.

        Returns:
            Result whose ``data`` is the saved ``Project`` on success
        """
        action = "update" if self.is_editing else "create"

        if not self.token:
            error = "Authentication token is missing. Please log in again."
            self.notifier.error(error)
            return OperationResult.fail(error)

        try:
            payload = self.build_update() if self.is_editing else self.build_payload()
        except ValidationError as e:
            error = f"Failed to {action} project: {_validation_message(e)}"
            logger.warning(error)
            self.notifier.error(error)
            return OperationResult.fail(error)

        try:
            if self.is_editing:
                saved = await self.projects.update_project(self.project.id, payload, self.token)
            else:
                saved = await self.projects.create_project(payload, self.token)
        except ApiError as e:
            error = f"Failed to {action} project: {e.message}"
            logger.error(error)
            self.notifier.error(error)
            return OperationResult.fail(error)

        self.project = saved
        self.media.project_id = saved.id
        message = f"Project {action}d successfully"
        self.notifier.success(message)
        return OperationResult.ok(data=saved, message=message)
