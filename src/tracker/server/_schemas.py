"""Response models of the file server."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    status: str
    timestamp: str


class WriteResponse(BaseModel):
    """Acknowledgement of a successful write."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    error: str
