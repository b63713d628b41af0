import pytest

pytest.importorskip("customtkinter")

import main
from models import User


class FakeSession:
    def __init__(self):
        self.current_user = None

    @property
    def is_logged_in(self):
        return self.current_user is not None


def fake_windows(monkeypatch, session, login_results, dashboard_results):
    """Windows whose mainloop just applies the next scripted outcome to the session."""
    opened = []
    logins = iter(login_results)
    dashboards = iter(dashboard_results)

    class Login:
        def __init__(self, sess):
            assert sess is session

        def mainloop(self):
            opened.append("login")
            session.current_user = next(logins)

    class Dash:
        def __init__(self, sess, config):
            assert sess is session

        def mainloop(self):
            opened.append("dashboard")
            if next(dashboards) == "logout":
                session.current_user = None

    monkeypatch.setattr(main, "LoginWindow", Login)
    monkeypatch.setattr(main, "Dashboard", Dash)
    return opened


def test_login_closed_without_user_ends_app(monkeypatch):
    session = FakeSession()
    opened = fake_windows(monkeypatch, session, [None], [])
    main.run_windows(session, {})
    assert opened == ["login"]


def test_logout_returns_to_login_without_nesting(monkeypatch):
    session = FakeSession()
    user = User(username="admin")
    opened = fake_windows(monkeypatch, session, [user, user, None], ["logout", "logout"])
    main.run_windows(session, {})
    assert opened == ["login", "dashboard", "login", "dashboard", "login"]


def test_closing_dashboard_while_logged_in_ends_app(monkeypatch):
    session = FakeSession()
    opened = fake_windows(monkeypatch, session, [User(username="admin")], ["close"])
    main.run_windows(session, {})
    assert opened == ["login", "dashboard"]
