"""Common result schemas"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from portfolio_admin.models.media import MediaItem


class OperationResult(BaseModel):
    """Outcome of an operation that reports failures instead of raising"""
    success: bool = True
    error: Optional[str] = None
    message: Optional[str] = None
    data: Optional[Any] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "OperationResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str) -> "OperationResult":
        return cls(success=False, error=error)


class UploadResult(OperationResult):
    """Outcome of a media upload"""
    media_items: List[MediaItem] = Field(default_factory=list, alias="mediaItems")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Error body returned by the portfolio API"""
    success: bool = False
    error: Optional[str] = None
    message: Optional[str] = None
    msg: Optional[str] = None
    errors: Optional[List[dict]] = None

    @property
    def detail(self) -> Optional[str]:
        """The most specific message the server sent"""
        if self.message or self.msg:
            return self.message or self.msg
        if self.errors:
            # express-validator style: [{"msg": "...", "param": "..."}]
            messages = [str(e["msg"]) for e in self.errors if isinstance(e, dict) and e.get("msg")]
            if messages:
                return "; ".join(messages)
        return self.error
