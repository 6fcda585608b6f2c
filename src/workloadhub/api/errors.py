"""
Mapping of workload engine errors to HTTP responses.
"""

from fastapi import HTTPException, status

from workloadhub.engine.errors import (
    NotFoundError,
    SourceTimeout,
    SourceUnavailable,
    ValidationError,
    WorkloadError,
)


def to_http_exception(error: WorkloadError) -> HTTPException:
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, SourceTimeout):
        return HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(error))
    if isinstance(error, SourceUnavailable):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
