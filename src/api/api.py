from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.account import AccountController
from accounts.controllers.admin import UserAdminController
from accounts.controllers.auth import AuthController
from common.controllers.site_content import SiteContentController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers import EVENT_CONTROLLERS
from events.exceptions import BookingError
from geo.controllers import GeocodingController
from geo.service import GeocodingError

from .exception_handlers import (
    handle_booking_error,
    handle_django_validation_error,
    handle_general_exception,
    handle_geocoding_error,
    handle_integrity_error,
)

api = NinjaExtraAPI(
    title="Encore API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Encore API {settings.VERSION}",
    app_name=f"encore-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    # Auth/Account controllers
    AuthController,
    AccountController,
    UserAdminController,
    # Event controllers
    *EVENT_CONTROLLERS,
    # Geo controllers
    GeocodingController,
    # Site content
    SiteContentController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    IntegrityError: handle_integrity_error,
    BookingError: handle_booking_error,
    GeocodingError: handle_geocoding_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
