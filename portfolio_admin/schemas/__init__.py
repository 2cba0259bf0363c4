"""Pydantic schemas for request payloads and operation results"""

from portfolio_admin.schemas.common import OperationResult, UploadResult, ErrorResponse
from portfolio_admin.schemas.project import ProjectCreate, ProjectUpdate

__all__ = [
    "OperationResult",
    "UploadResult",
    "ErrorResponse",
    "ProjectCreate",
    "ProjectUpdate",
]
