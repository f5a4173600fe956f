"""This module contains the controllers for the authentication app."""

from ninja_extra import api_controller
from ninja_jwt.controller import TokenObtainPairController

from common.throttling import AuthThrottle


@api_controller("/auth", tags=["Auth"], throttle=AuthThrottle())
class AuthController(TokenObtainPairController):
    """Obtain and refresh JWT token pairs with email and password.

    Routes: POST /auth/pair, POST /auth/refresh.
    """
