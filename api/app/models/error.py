"""Generic error body for unhandled server errors."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """500 body: single top-level string field ``detail``."""

    detail: str
