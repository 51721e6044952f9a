"""
Route guard.

The decision is a pure function of the session state: it only asks
"is there a session". Whether the session is usable (verified and
provisioned) is the onboarding flow's concern.
"""

from enum import Enum

from modules.navigation.models import Route
from shared.models import Identity

from .exceptions import SessionPendingError, SessionRequiredError
from .interfaces import ISessionStore
from .models import SessionState

SIGNUP_ROUTE = Route.SIGNUP


class GuardDecision(str, Enum):
    PENDING = "pending"
    DENY = "deny"
    ADMIT = "admit"


def evaluate_access(state: SessionState) -> GuardDecision:
    """Decide access to a protected view from a session snapshot."""
    if state.loading:
        return GuardDecision.PENDING
    if state.identity is None:
        return GuardDecision.DENY
    return GuardDecision.ADMIT


def guard(store: ISessionStore) -> Identity:
    """
    Admit the current identity or raise.

    Raises:
        SessionPendingError: Session still loading, no decision yet
        SessionRequiredError: No session; redirect to the signup view
    """
    state = store.state
    decision = evaluate_access(state)
    if decision is GuardDecision.PENDING:
        raise SessionPendingError()
    if decision is GuardDecision.DENY:
        raise SessionRequiredError(redirect_to=SIGNUP_ROUTE.value)
    return state.identity
