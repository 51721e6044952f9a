"""
Authentication module.

Owns the session lifecycle: the identity provider adapter, the
process-wide session store, the signup flow and the route guard.

Public API:
- IIdentityProvider / ISessionStore: Interfaces for identity operations
- SessionStore: The single owner of the current Identity
- SignupService: Form validation and account creation
- evaluate_access / guard: Route guard decisions
- Auth exceptions: IdentityProviderError, SignupValidationError, etc.
"""

from .interfaces import IIdentityProvider, ISessionStore
from .models import ProviderErrorCode, SessionState, SignupRequest, SignInRequest
from .service import SessionStore
from .signup import SignupService
from .guard import GuardDecision, evaluate_access, guard
from .exceptions import (
    IdentityProviderError,
    SignupValidationError,
    SignupFailedError,
    SignInFailedError,
    SessionRequiredError,
    SessionPendingError,
)

__all__ = [
    # Interfaces
    "IIdentityProvider",
    "ISessionStore",
    # Models
    "ProviderErrorCode",
    "SessionState",
    "SignupRequest",
    "SignInRequest",
    # Services
    "SessionStore",
    "SignupService",
    # Guard
    "GuardDecision",
    "evaluate_access",
    "guard",
    # Exceptions
    "IdentityProviderError",
    "SignupValidationError",
    "SignupFailedError",
    "SignInFailedError",
    "SessionRequiredError",
    "SessionPendingError",
]
