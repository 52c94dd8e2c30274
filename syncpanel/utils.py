"""Utility functions."""
import uuid

from fastapi.responses import JSONResponse

from syncpanel.schemas.common import ErrorDetail, ErrorResponse


def generate_id() -> str:
    """Generate a UUID4 string for entity IDs."""
    return str(uuid.uuid4())


def error_response(status_code: int, error_type: str, message: str) -> JSONResponse:
    """JSON error body in the shape the admin client expects."""
    body = ErrorResponse(errors=[ErrorDetail(errorType=error_type, message=message)])
    return JSONResponse(status_code=status_code, content=body.model_dump())
