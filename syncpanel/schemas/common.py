"""Common schemas."""
from pydantic import BaseModel


class PaginatedResponse(BaseModel):
    """Paginated list response."""

    data: list
    total: int
    limit: int
    offset: int


class ErrorDetail(BaseModel):
    errorType: str
    message: str


class ErrorResponse(BaseModel):
    """Error response: {"errors": [{"errorType", "message"}]}."""

    errors: list[ErrorDetail]
