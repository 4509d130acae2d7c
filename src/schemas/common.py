"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{success, data?, message?}`` wrapper around a payload."""

    success: bool = True
    data: T | None = None
    message: str | None = None


class MessageResponse(BaseModel):
    """Envelope for operations that only report an outcome."""

    success: bool = True
    message: str
