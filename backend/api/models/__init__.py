"""API models package."""

from .errors import ErrorResponse
from .views import (
    Notification,
    LandingView,
    SignupView,
    VerifyEmailView,
    DashboardView,
    LoadingView,
)

__all__ = [
    "ErrorResponse",
    "Notification",
    "LandingView",
    "SignupView",
    "VerifyEmailView",
    "DashboardView",
    "LoadingView",
]
