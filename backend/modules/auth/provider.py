"""
Supabase identity provider.

Adapts Supabase Auth to IIdentityProvider. Supabase error codes are
translated here, once, into ProviderErrorCode so nothing upstream ever
matches on provider-specific strings.
"""

import logging
from typing import Any, Optional

from supabase import AsyncClient, AuthError

from shared.models import Identity

from .exceptions import IdentityProviderError
from .interfaces import IIdentityProvider
from .models import ProviderErrorCode

logger = logging.getLogger(__name__)

# Supabase Auth error codes -> closed error categories
SUPABASE_ERROR_CODES: dict[str, ProviderErrorCode] = {
    "user_already_exists": ProviderErrorCode.EMAIL_IN_USE,
    "email_exists": ProviderErrorCode.EMAIL_IN_USE,
    "email_address_invalid": ProviderErrorCode.INVALID_EMAIL,
    "validation_failed": ProviderErrorCode.INVALID_EMAIL,
    "signup_disabled": ProviderErrorCode.OPERATION_NOT_ALLOWED,
    "email_provider_disabled": ProviderErrorCode.OPERATION_NOT_ALLOWED,
    "weak_password": ProviderErrorCode.WEAK_PASSWORD,
    "invalid_credentials": ProviderErrorCode.INVALID_CREDENTIALS,
    "email_not_confirmed": ProviderErrorCode.EMAIL_NOT_CONFIRMED,
}


def translate_auth_error(error: AuthError) -> IdentityProviderError:
    """Map a Supabase auth error onto the closed provider error taxonomy."""
    raw_code = getattr(error, "code", None)
    provider_code = SUPABASE_ERROR_CODES.get(raw_code or "", ProviderErrorCode.UNKNOWN)
    return IdentityProviderError(provider_code, raw_code=raw_code, message=str(error))


def to_identity(user: Any) -> Identity:
    """Build an Identity from a Supabase user object."""
    return Identity(
        id=str(user.id),
        email=user.email,
        email_verified=user.email_confirmed_at is not None,
    )


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    Sign-up, sign-in and sign-out run on the public (anon key) client,
    which holds the visitor's session. Refresh goes through the admin API
    on the service-role client, since an unconfirmed account has no session
    to re-read.
    """

    def __init__(
        self,
        public_client: AsyncClient,
        admin_client: AsyncClient,
        email_redirect_to: Optional[str] = None,
    ):
        self._public = public_client
        self._admin = admin_client
        self._email_redirect_to = email_redirect_to

    def _email_options(self) -> dict[str, str]:
        if not self._email_redirect_to:
            return {}
        return {"email_redirect_to": self._email_redirect_to}

    async def create_account(self, email: str, password: str) -> Identity:
        """
        Create the account; Supabase sends the confirmation email itself.
        """
        try:
            response = await self._public.auth.sign_up(
                {"email": email, "password": password, "options": self._email_options()}
            )
        except AuthError as e:
            raise translate_auth_error(e) from e

        user = response.user
        if user is None:
            raise IdentityProviderError(ProviderErrorCode.UNKNOWN, message="Sign-up returned no user")

        # With email confirmation on, an existing address comes back as an
        # obfuscated user that has no identities attached.
        if user.identities is not None and len(user.identities) == 0:
            raise IdentityProviderError(
                ProviderErrorCode.EMAIL_IN_USE,
                raw_code="user_already_exists",
                message="User already registered",
            )

        return to_identity(user)

    async def sign_in(self, email: str, password: str) -> Identity:
        try:
            response = await self._public.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            raise translate_auth_error(e) from e

        if response.user is None:
            raise IdentityProviderError(ProviderErrorCode.UNKNOWN, message="Sign-in returned no user")
        return to_identity(response.user)

    async def sign_out(self) -> None:
        try:
            await self._public.auth.sign_out()
        except AuthError as e:
            raise translate_auth_error(e) from e

    async def send_verification_email(self, identity: Identity) -> None:
        if not identity.email:
            raise IdentityProviderError(
                ProviderErrorCode.INVALID_EMAIL,
                message="Identity has no email to verify",
            )
        try:
            await self._public.auth.resend(
                {"type": "signup", "email": identity.email, "options": self._email_options()}
            )
        except AuthError as e:
            raise translate_auth_error(e) from e

    async def refresh(self, identity: Identity) -> Identity:
        try:
            response = await self._admin.auth.admin.get_user_by_id(identity.id)
        except AuthError as e:
            raise translate_auth_error(e) from e
        return to_identity(response.user)

    async def restore_session(self) -> Optional[Identity]:
        try:
            session = await self._public.auth.get_session()
        except AuthError as e:
            raise translate_auth_error(e) from e

        if session is None or session.user is None:
            return None
        logger.debug("Restored persisted session for %s", session.user.id)
        return to_identity(session.user)
