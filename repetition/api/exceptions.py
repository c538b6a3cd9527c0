from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from ..domain.errors import (
    AlreadyScheduled,
    InvalidReviewInput,
    NotSchedulable,
    SchedulerError,
    TransientStoreError,
)

STATUS_BY_ERROR = {
    InvalidReviewInput: status.HTTP_400_BAD_REQUEST,
    NotSchedulable: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AlreadyScheduled: status.HTTP_409_CONFLICT,
    TransientStoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def scheduler_exception_handler(exc, context):
    """Render scheduler errors as tagged responses; defer everything else to DRF."""
    if isinstance(exc, SchedulerError):
        status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        response = Response({"error": exc.code, "detail": str(exc)}, status=status_code)
        if isinstance(exc, TransientStoreError):
            response["Retry-After"] = "1"
        return response
    return exception_handler(exc, context)
