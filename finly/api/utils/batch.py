from fastapi import status
from fastapi.responses import JSONResponse

from finly.app.use_cases.batch import BatchResult


def build_status_code_for_batch(result: BatchResult) -> int:
    """200 when nothing failed, 400 when everything failed, 207 otherwise"""
    if not result.errors:
        return status.HTTP_200_OK
    if not result.succeeded:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_207_MULTI_STATUS


def batch_response(result: BatchResult, message: str) -> JSONResponse:
    status_code = build_status_code_for_batch(result)
    return JSONResponse(
        status_code=status_code,
        content={
            "success": status_code != status.HTTP_400_BAD_REQUEST,
            "message": message,
            "errors": result.errors,
        },
    )
