"""
Navigator implementation.

A view that owns background work (the verification poller) registers
mount/unmount hooks here, so leaving the view tears the work down.
"""

import logging
from collections import defaultdict
from typing import Callable, Union

from .models import Route

logger = logging.getLogger(__name__)

Hook = Callable[[], None]


class Navigator:
    """Process-wide current-route cursor."""

    def __init__(self, initial: Route = Route.LANDING):
        self._current = initial
        self._history: list[Route] = [initial]
        self._mount_hooks: dict[Route, list[Hook]] = defaultdict(list)
        self._unmount_hooks: dict[Route, list[Hook]] = defaultdict(list)

    @property
    def current(self) -> Route:
        return self._current

    @property
    def history(self) -> tuple[Route, ...]:
        return tuple(self._history)

    def on_mount(self, route: Route, hook: Hook) -> None:
        self._mount_hooks[route].append(hook)

    def on_unmount(self, route: Route, hook: Hook) -> None:
        self._unmount_hooks[route].append(hook)

    def navigate(self, route: Union[Route, str]) -> Route:
        """
        Move to a route.

        Runs the unmount hooks of the route being left, then the mount
        hooks of the new one. Navigating to the current route does nothing.
        """
        target = Route(route)
        if target is self._current:
            return target

        previous = self._current
        # set before hooks run so a hook that reads current sees the target
        self._current = target
        self._history.append(target)
        logger.info("Navigating %s -> %s", previous.value, target.value)

        for hook in list(self._unmount_hooks[previous]):
            hook()
        for hook in list(self._mount_hooks[target]):
            hook()
        return target
