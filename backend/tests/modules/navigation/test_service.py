from modules.navigation.models import Route
from modules.navigation.service import Navigator


class TestRoute:
    def test_public_routes(self):
        assert Route.LANDING.is_public
        assert Route.SIGNUP.is_public
        assert not Route.VERIFY_EMAIL.is_public
        assert not Route.DASHBOARD.is_public


class TestNavigator:
    def test_starts_on_landing(self):
        navigator = Navigator()
        assert navigator.current is Route.LANDING
        assert navigator.history == (Route.LANDING,)

    def test_navigate_accepts_paths(self):
        navigator = Navigator()
        assert navigator.navigate("/signup") is Route.SIGNUP
        assert navigator.current is Route.SIGNUP

    def test_runs_unmount_then_mount(self):
        """Leaving a view should run its unmount hooks before the next mount."""
        navigator = Navigator()
        events = []
        navigator.on_mount(Route.VERIFY_EMAIL, lambda: events.append("mount"))
        navigator.on_unmount(Route.VERIFY_EMAIL, lambda: events.append("unmount"))
        navigator.on_mount(Route.DASHBOARD, lambda: events.append("dashboard"))

        navigator.navigate(Route.VERIFY_EMAIL)
        navigator.navigate(Route.DASHBOARD)

        assert events == ["mount", "unmount", "dashboard"]

    def test_same_route_is_noop(self):
        """Navigating to the current route should not remount it."""
        navigator = Navigator()
        mounts = []
        navigator.on_mount(Route.SIGNUP, lambda: mounts.append(1))

        navigator.navigate(Route.SIGNUP)
        navigator.navigate(Route.SIGNUP)

        assert mounts == [1]
        assert navigator.history == (Route.LANDING, Route.SIGNUP)

    def test_hooks_see_target_route(self):
        navigator = Navigator()
        seen = []
        navigator.on_unmount(Route.LANDING, lambda: seen.append(navigator.current))

        navigator.navigate(Route.SIGNUP)

        assert seen == [Route.SIGNUP]
