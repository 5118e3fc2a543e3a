from fastapi import status

from finly.app.errors import AppError, Conflict, NotFound, Unauthorized, ValidationError

STATUS_BY_ERROR = (
    (Unauthorized, status.HTTP_401_UNAUTHORIZED),
    (Conflict, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFound, status.HTTP_404_NOT_FOUND),
)


def status_code_for(error: AppError) -> int:
    """HTTP status for an application error; anything unmapped is a server error"""
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(code: str, message: str) -> dict:
    return {"success": False, "error": {"code": code, "message": message}}
