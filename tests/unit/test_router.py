"""
Router: public views follow the session once it resolves.
"""

from unittest.mock import MagicMock, Mock

from linkhub.adapters.http.errors import AuthorizationError
from linkhub.app_shell.router import Router
from linkhub.components.session import SessionStore
from linkhub.domain.entities import User

USER = User(id=3, name="Reader", username="reader", email="reader@example.com")


def make_router(*me_results):
    api = Mock()
    api.me.side_effect = list(me_results)
    api.refresh.side_effect = AuthorizationError("Refresh token invalid", 401)
    store = SessionStore(api)
    page = MagicMock()
    return Router(page, store), store


def test_public_view_rebuilt_when_session_resolves():
    router, store = make_router(USER)
    seen = []
    router.register("/", lambda page: seen.append(store.status) or Mock(), protected=False)

    router.show("/")
    store.check_auth_status()

    assert seen == ["unknown", "authenticated"]


def test_public_view_rebuilt_after_sign_out():
    router, store = make_router(USER)
    seen = []
    router.register("/", lambda page: seen.append(store.status) or Mock(), protected=False)
    store.check_auth_status()
    router.show("/")

    store.sign_out()

    assert seen == ["authenticated", "unauthenticated"]


def test_public_view_not_rebuilt_without_status_change():
    router, store = make_router(AuthorizationError("Not authenticated", 401))
    store.check_auth_status()
    builds = []
    router.register("/", lambda page: builds.append(1) or Mock(), protected=False)
    router.show("/")

    # unauthenticated -> unauthenticated
    store.sign_out()

    assert builds == [1]


def test_guarded_view_is_left_to_its_guard():
    router, store = make_router(USER)
    builds = []
    router.register("/pages", lambda page: builds.append(store.status) or Mock())

    router.show("/pages")
    store.check_auth_status()

    # loading first, then exactly one render through the guard
    assert builds == ["authenticated"]
