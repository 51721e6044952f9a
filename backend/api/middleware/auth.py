"""
Route guard dependency.

Protected views declare ``Depends(require_session)``; the decision
itself lives in modules.auth.guard.
"""

from fastapi import Depends

from modules.auth.guard import guard
from modules.auth.interfaces import ISessionStore
from shared.models import Identity

from ..dependencies import get_session_store


async def require_session(
    store: ISessionStore = Depends(get_session_store),
) -> Identity:
    """
    Dependency that requires a current session.

    Raises SessionPendingError while the session is loading and
    SessionRequiredError when there is none; the app's exception
    handlers turn those into a placeholder and a redirect to /signup.

    Usage:
        @router.get("/dashboard")
        async def dashboard(identity: Identity = RequireSession):
            return {"email": identity.email}
    """
    return guard(store)


# Type alias for cleaner route definitions
RequireSession = Depends(require_session)
