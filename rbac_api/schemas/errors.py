"""Error body shared by every failing endpoint."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Bad Request"])
    message: str = Field(..., examples=["userId is required"])
