"""
Email-verification view endpoints.

Visiting /verify-email mounts the verification poller; leaving the view
(any other navigation) unmounts it.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from api.dependencies import get_navigator, get_session_store, get_verification_poller
from api.middleware.auth import RequireSession
from api.models.views import Notification, VerifyEmailView
from modules.auth.exceptions import IdentityProviderError
from modules.auth.interfaces import ISessionStore
from modules.navigation.models import Route
from modules.navigation.service import Navigator
from shared.models import Identity

from .poller import VerificationPoller

logger = logging.getLogger(__name__)

router = APIRouter()


def _view(identity: Identity, poller: VerificationPoller) -> VerifyEmailView:
    notification = None
    if poller.last_error is not None:
        notification = Notification.error(poller.last_error.message)
    return VerifyEmailView(email=identity.email, state=poller.state, notification=notification)


@router.get(Route.VERIFY_EMAIL.value, response_model=VerifyEmailView)
async def verify_email_view(
    identity: Identity = RequireSession,
    navigator: Navigator = Depends(get_navigator),
    poller: VerificationPoller = Depends(get_verification_poller),
):
    """
    Verification-pending view.

    Requires a session (redirects to /signup otherwise). Once the poller
    has finished onboarding the session is on the dashboard and this
    view redirects there.
    """
    if navigator.current is Route.DASHBOARD and identity.email_verified:
        return RedirectResponse(Route.DASHBOARD.value, status_code=status.HTTP_303_SEE_OTHER)

    navigator.navigate(Route.VERIFY_EMAIL)
    return _view(identity, poller)


@router.post(Route.VERIFY_EMAIL.value + "/resend")
async def resend_verification_email(
    identity: Identity = RequireSession,
    store: ISessionStore = Depends(get_session_store),
):
    """Send the verification email again."""
    try:
        await store.send_verification_email()
    except IdentityProviderError as e:
        logger.warning("Resending verification email for %s failed: %s", identity.id, e.message)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "notification": Notification.error("Failed to send verification email.").model_dump()
            },
        )

    notification = Notification(
        title="Verification email sent!",
        description="Please check your inbox.",
    )
    return {"notification": notification.model_dump()}


@router.post(Route.VERIFY_EMAIL.value + "/retry")
async def retry_registration(
    identity: Identity = RequireSession,
    poller: VerificationPoller = Depends(get_verification_poller),
):
    """Retry onboarding after a failed attempt."""
    if await poller.retry():
        return RedirectResponse(Route.DASHBOARD.value, status_code=status.HTTP_303_SEE_OTHER)

    status_code = (
        status.HTTP_502_BAD_GATEWAY
        if poller.last_error is not None
        else status.HTTP_409_CONFLICT
    )
    return JSONResponse(
        status_code=status_code,
        content=_view(identity, poller).model_dump(mode="json"),
    )
