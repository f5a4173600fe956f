"""Exception handlers for the API."""

import typing as t
from copy import deepcopy

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.http import HttpRequest
from ninja.responses import Response

from events.exceptions import BookingError
from geo.service import GeocodingError

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = {"password", "password1", "password2", "token", "x-api-key", "authorization", "authentication"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    logger.exception(
        "internal_server_error",
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        query=obfuscate(request.GET.dict()),
        user=str(request.user) if getattr(request, "user", None) else None,
    )
    data: dict[str, t.Any] = {"detail": "Internal Server Error."}
    if settings.DEBUG:  # pragma: no cover
        data["error"] = repr(exc)
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error raised by ``full_clean`` or a service.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.warning("validation_error", path=request.path)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": exc.messages}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": error_dict})


def handle_integrity_error(request: HttpRequest, exc: IntegrityError | t.Type[IntegrityError]) -> Response:
    """Handle a constraint violation that slipped past validation."""
    logger.warning("integrity_error", path=request.path, error=str(exc))
    return Response(status=400, data={"detail": "This conflicts with existing data."})


def handle_booking_error(request: HttpRequest, exc: BookingError | t.Type[BookingError]) -> Response:
    """Handle a booking failure: the message is user-facing, the code names the reason."""
    logger.info("booking_rejected", path=request.path, code=exc.code, detail=exc.message)  # type: ignore[union-attr]
    return Response(status=exc.status_code, data={"detail": exc.message, "code": exc.code})  # type: ignore[union-attr]


def handle_geocoding_error(request: HttpRequest, exc: GeocodingError | t.Type[GeocodingError]) -> Response:
    """Handle an unreachable or misbehaving geocoding backend."""
    return Response(status=502, data={"detail": "Location lookup is unavailable right now."})
