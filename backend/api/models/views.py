"""
View models.

What each route of the funnel returns. Rendering is up to the client;
``notification`` carries what the client shows as a toast.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from modules.onboarding.models import PollerState


class Notification(BaseModel):
    """A user-visible message."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"

    @classmethod
    def error(cls, description: str) -> "Notification":
        return cls(title="Error", description=description, variant="destructive")


class LandingView(BaseModel):
    view: Literal["landing"] = "landing"
    signup_url: str = "/signup"


class SignupView(BaseModel):
    """
    Signup form state.

    ``values`` never contains the password fields.
    """

    view: Literal["signup"] = "signup"
    values: dict[str, str] = Field(default_factory=dict)
    field_errors: dict[str, str] = Field(default_factory=dict)
    notification: Optional[Notification] = None


class VerifyEmailView(BaseModel):
    view: Literal["verify-email"] = "verify-email"
    email: Optional[str] = None
    state: PollerState
    notification: Optional[Notification] = None


class DashboardView(BaseModel):
    view: Literal["dashboard"] = "dashboard"
    email: Optional[str] = None
    getting_started: list[str] = Field(
        default_factory=lambda: [
            "Explore our payment solutions",
            "Set up your payment preferences",
            "Connect your bank account",
            "Start making secure transactions",
        ]
    )


class LoadingView(BaseModel):
    """Neutral placeholder while the session is resolving."""

    view: Literal["loading"] = "loading"
