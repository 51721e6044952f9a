"""
Navigation module.

Tracks which view the session is on and runs per-view mount/unmount hooks.

Public API:
- Route: The views exposed to the outside world
- Navigator: Current-route cursor with lifecycle hooks
"""

from .models import Route
from .service import Navigator

__all__ = [
    "Route",
    "Navigator",
]
