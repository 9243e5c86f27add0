"""
API exception handlers.

Every error leaves the API as ``{"error": {"code", "message"}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ConflictError,
    DomainException,
    InvalidCredentialsError,
    NotFoundError,
    PermissionDeniedError,
)
from core.metrics import errors_total
from core.middleware.observability import current_trace_ids

logger = logging.getLogger(__name__)


def error_body(code: str, message: str, **extra: Any) -> Dict[str, Any]:
    body = {"code": code, "message": message}
    body.update(extra)
    return {"error": body}


def status_for(exc: DomainException) -> int:
    """HTTP status of a domain exception."""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, InvalidCredentialsError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, PermissionDeniedError):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_400_BAD_REQUEST


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, DRFValidationError):
        response = Response(
            error_body("VALIDATION_ERROR", _first_message(exc.detail), details=exc.detail),
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = error_body(code, str(response.data.get("detail", exc.default_detail)))
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"), status=status.HTTP_404_NOT_FOUND
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    trace_id, _ = current_trace_ids()
    if trace_id:
        return trace_id
    request = context.get("request")
    return getattr(request, "correlation_id", None) if request else None


def _first_message(detail: Any) -> str:
    """First human readable message of a DRF error structure."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail) or "Invalid input"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    status_code = status_for(exc)
    logger.warning(
        "Domain exception: %s - %s",
        exc.code,
        exc.message,
        extra={"trace_id": trace_id, "error_code": exc.code, "status_code": status_code},
    )
    extra = {}
    if getattr(exc, "skipped", None):
        extra["skipped"] = exc.skipped
    return Response(error_body(exc.code, exc.message, **extra), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    request = context.get("request")
    endpoint = request.path if request else "unknown"
    errors_total.labels(error_type=type(exc).__name__, endpoint=endpoint).inc()
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
