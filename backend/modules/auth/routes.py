"""
Signup, sign-in and sign-out endpoints.

Successful form posts answer with a 303 redirect to the next view.
Failed ones answer with the signup view: field errors inline, provider
errors as a notification, and the entered email kept (never passwords).
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from api.dependencies import get_navigator, get_session_store, get_signup_service
from api.models.views import Notification, SignupView
from modules.navigation.models import Route
from modules.navigation.service import Navigator

from .exceptions import (
    IdentityProviderError,
    SignInFailedError,
    SignupFailedError,
    SignupValidationError,
)
from .interfaces import ISessionStore
from .models import ProviderErrorCode
from .signup import SignupService

logger = logging.getLogger(__name__)

router = APIRouter()


class SignupForm(BaseModel):
    """Raw signup form; validated by SignupService, not here."""

    email: str = ""
    password: str = ""
    confirm_password: str = ""


class SignInForm(BaseModel):
    """Raw sign-in form."""

    email: str = ""
    password: str = ""


def _form_response(status_code: int, email: str, **view) -> JSONResponse:
    body = SignupView(values={"email": email}, **view)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.get(Route.SIGNUP.value, response_model=SignupView)
async def signup_view(navigator: Navigator = Depends(get_navigator)) -> SignupView:
    """Empty signup form. Public."""
    navigator.navigate(Route.SIGNUP)
    return SignupView()


@router.post(Route.SIGNUP.value)
async def submit_signup(
    form: SignupForm,
    service: SignupService = Depends(get_signup_service),
    navigator: Navigator = Depends(get_navigator),
):
    """
    Create an account.

    On success the verification email is on its way and the session
    moves to /verify-email.
    """
    try:
        await service.submit(form.email, form.password, form.confirm_password)
    except SignupValidationError as e:
        return _form_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            form.email,
            field_errors=e.field_errors,
        )
    except SignupFailedError as e:
        status_code = (
            status.HTTP_409_CONFLICT
            if e.category is ProviderErrorCode.EMAIL_IN_USE
            else status.HTTP_400_BAD_REQUEST
        )
        return _form_response(status_code, form.email, notification=Notification.error(e.message))

    navigator.navigate(Route.VERIFY_EMAIL)
    return RedirectResponse(Route.VERIFY_EMAIL.value, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/login")
async def submit_sign_in(
    form: SignInForm,
    service: SignupService = Depends(get_signup_service),
    navigator: Navigator = Depends(get_navigator),
):
    """Sign in an existing account and go to the dashboard."""
    try:
        await service.sign_in(form.email, form.password)
    except SignupValidationError as e:
        return _form_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            form.email,
            field_errors=e.field_errors,
        )
    except SignInFailedError as e:
        return _form_response(
            status.HTTP_401_UNAUTHORIZED,
            form.email,
            notification=Notification.error(e.message),
        )

    navigator.navigate(Route.DASHBOARD)
    return RedirectResponse(Route.DASHBOARD.value, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/logout")
async def logout(
    store: ISessionStore = Depends(get_session_store),
    navigator: Navigator = Depends(get_navigator),
):
    """Sign out and go back to the landing view."""
    try:
        await store.sign_out()
    except IdentityProviderError as e:
        logger.error("Failed to log out: %s", e.message)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"notification": Notification.error("Failed to log out.").model_dump()},
        )

    navigator.navigate(Route.LANDING)
    return RedirectResponse(Route.LANDING.value, status_code=status.HTTP_303_SEE_OTHER)
