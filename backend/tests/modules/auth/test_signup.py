import pytest

from modules.auth.exceptions import SignInFailedError, SignupFailedError, SignupValidationError
from modules.auth.models import ProviderErrorCode
from modules.auth.signup import (
    SIGNUP_ERROR_MESSAGES,
    SIGNUP_FAILED_MESSAGE,
    SignupService,
)


@pytest.fixture
def service(session_store):
    return SignupService(session_store)


class TestValidate:
    def test_valid(self):
        """Should return the parsed request."""
        request = SignupService.validate("a@example.com", "secret1", "secret1")
        assert request.email == "a@example.com"

    def test_field_messages(self):
        """Should report one message per field."""
        with pytest.raises(SignupValidationError) as exc_info:
            SignupService.validate("nope", "123", "123")

        assert exc_info.value.field_errors == {
            "email": "Invalid email address",
            "password": "Password must be at least 6 characters",
        }

    def test_mismatch_on_confirm_password(self):
        """Should put a mismatch on confirm_password."""
        with pytest.raises(SignupValidationError) as exc_info:
            SignupService.validate("a@example.com", "secret1", "secret2")

        assert exc_info.value.field_errors == {"confirm_password": "Passwords don't match"}

    def test_mismatch_reported_with_short_password(self):
        """Should still report a mismatch when the password is too short."""
        with pytest.raises(SignupValidationError) as exc_info:
            SignupService.validate("a@example.com", "abc", "abd")

        assert exc_info.value.field_errors == {
            "password": "Password must be at least 6 characters",
            "confirm_password": "Passwords don't match",
        }

    def test_short_matching_passwords(self):
        """Should not report a mismatch when both entries agree."""
        with pytest.raises(SignupValidationError) as exc_info:
            SignupService.validate("a@example.com", "abc", "abc")

        assert "confirm_password" not in exc_info.value.field_errors


class TestSubmit:
    @pytest.mark.asyncio
    async def test_valid_input_calls_provider_once(self, service, session_store, identity_provider):
        """Should create the account and make it current."""
        identity = await service.submit("a@example.com", "secret1", "secret1")

        assert identity_provider.calls == ["create_account"]
        assert session_store.get_current() == identity
        assert identity.email_verified is False

    @pytest.mark.asyncio
    async def test_invalid_input_never_calls_provider(self, service, identity_provider):
        """Local validation failures should not reach the provider."""
        with pytest.raises(SignupValidationError):
            await service.submit("a@example.com", "secret1", "different")

        assert identity_provider.calls == []

    @pytest.mark.asyncio
    async def test_email_in_use(self, service):
        """A duplicate address should map to its message."""
        await service.submit("a@example.com", "secret1", "secret1")

        with pytest.raises(SignupFailedError) as exc_info:
            await service.submit("a@example.com", "secret1", "secret1")

        assert exc_info.value.category is ProviderErrorCode.EMAIL_IN_USE
        assert exc_info.value.message == "This email is already registered."

    @pytest.mark.parametrize("code", [
        ProviderErrorCode.INVALID_EMAIL,
        ProviderErrorCode.OPERATION_NOT_ALLOWED,
        ProviderErrorCode.WEAK_PASSWORD,
    ])
    @pytest.mark.asyncio
    async def test_known_categories(self, service, identity_provider, code):
        identity_provider.fail("create_account", code)

        with pytest.raises(SignupFailedError) as exc_info:
            await service.submit("a@example.com", "secret1", "secret1")

        assert exc_info.value.message == SIGNUP_ERROR_MESSAGES[code]

    @pytest.mark.asyncio
    async def test_unknown_code_gets_generic_message(self, service, identity_provider):
        """Unrecognized provider errors should get the generic message."""
        identity_provider.fail("create_account", ProviderErrorCode.UNKNOWN, raw_code="over_email_send_rate_limit")

        with pytest.raises(SignupFailedError) as exc_info:
            await service.submit("a@example.com", "secret1", "secret1")

        assert exc_info.value.category is ProviderErrorCode.UNKNOWN
        assert exc_info.value.message == SIGNUP_FAILED_MESSAGE


class TestSignIn:
    @pytest.mark.asyncio
    async def test_sign_in(self, service, session_store):
        await service.submit("a@example.com", "secret1", "secret1")
        await session_store.sign_out()

        identity = await service.sign_in("a@example.com", "secret1")

        assert session_store.get_current() == identity

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        await service.submit("a@example.com", "secret1", "secret1")

        with pytest.raises(SignInFailedError) as exc_info:
            await service.sign_in("a@example.com", "wrong-password")

        assert exc_info.value.message == "Invalid email or password."

    @pytest.mark.asyncio
    async def test_missing_password(self, service, identity_provider):
        with pytest.raises(SignupValidationError) as exc_info:
            await service.sign_in("a@example.com", "")

        assert exc_info.value.field_errors == {"password": "Password is required"}
        assert identity_provider.calls == []
