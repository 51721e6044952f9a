"""Navigation data models."""

from enum import Enum


class Route(str, Enum):
    """Views of the signup funnel."""

    LANDING = "/"
    SIGNUP = "/signup"
    VERIFY_EMAIL = "/verify-email"
    DASHBOARD = "/dashboard"

    @property
    def is_public(self) -> bool:
        return self in (Route.LANDING, Route.SIGNUP)
