from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .errors import (
    AIServiceError,
    CollaboratorError,
    ConflictError,
    FieldValidationError,
    LogiTrackError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND = (
    (FieldValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AIServiceError, status.HTTP_502_BAD_GATEWAY),
    (CollaboratorError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: LogiTrackError) -> int:
    for kind, code in STATUS_BY_KIND:
        if isinstance(exc, kind):
            return code
    return status.HTTP_400_BAD_REQUEST


def logitrack_exception_handler(exc, context):
    """
    Render application errors with the API's consistent error shape
    {'detail': ..., 'code': ..., 'field': ...}; everything else goes through
    DRF's default handler.
    """
    if isinstance(exc, LogiTrackError):
        code = status_for(exc)
        if code >= 500:
            logger.warning("%s in %s: %s", type(exc).__name__, context.get("view"), exc)
        return Response(exc.as_dict(), status=code)
    return exception_handler(exc, context)
