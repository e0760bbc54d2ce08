"""Map domain and framework errors onto the JSON error envelope.

Installed as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Every failure body has
``success: false`` and a ``message``; domain error details are merged in.
"""

import logging
from typing import Any

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from marketplace.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.REFERENCE_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DEPENDENTS_EXIST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def domain_error_response(exc: DomainError) -> Response:
    code = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
    if code >= 500:
        logger.error("Request failed: %s", exc)
    body: dict[str, Any] = {"success": False, "message": exc.message, **exc.details}
    return Response(body, status=code)


def _framework_message(exc: exceptions.APIException) -> tuple[str, Any]:
    detail = exc.detail
    if isinstance(exc, exceptions.ValidationError):
        return "Invalid request", detail
    if isinstance(detail, (list, dict)):
        return str(exc.default_detail), detail
    return str(detail), None


def marketplace_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    if isinstance(exc, DomainError):
        return domain_error_response(exc)

    response = exception_handler(exc, context)
    if response is not None:
        message, errors = _framework_message(exc)
        body: dict[str, Any] = {"success": False, "message": message}
        if errors is not None:
            body["errors"] = errors
        response.data = body
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", type(view).__name__ if view else "request")
    return Response(
        {"success": False, "message": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
