"""
Public landing and protected dashboard views.
"""

from fastapi import APIRouter, Depends

from modules.navigation.models import Route
from modules.navigation.service import Navigator
from shared.models import Identity

from ..dependencies import get_navigator
from ..middleware.auth import RequireSession
from ..models.views import DashboardView, LandingView

router = APIRouter()


@router.get(Route.LANDING.value, response_model=LandingView)
async def landing(navigator: Navigator = Depends(get_navigator)) -> LandingView:
    """Marketing landing view. Public."""
    navigator.navigate(Route.LANDING)
    return LandingView(signup_url=Route.SIGNUP.value)


@router.get(Route.DASHBOARD.value, response_model=DashboardView)
async def dashboard(
    identity: Identity = RequireSession,
    navigator: Navigator = Depends(get_navigator),
) -> DashboardView:
    """
    Protected dashboard.

    Admits any current session; without one the guard redirects to /signup.
    """
    navigator.navigate(Route.DASHBOARD)
    return DashboardView(email=identity.email)
