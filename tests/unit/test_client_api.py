import json
from unittest.mock import MagicMock

import pytest
import requests

from expensync.client.api import ApiClient, ApiError, Notifier, SessionExpiredError, error_message
from expensync.client.session import LoadingIndicator, TokenStore

BASE = "http://api.test/api/v1"


def make_response(status=200, body=None, text=None):
    r = requests.Response()
    r.status_code = status
    if body is not None:
        r._content = json.dumps(body).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    else:
        r._content = (text or "").encode("utf-8")
    return r


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.headers = {}
    return s


@pytest.fixture
def notifier():
    return MagicMock(spec=Notifier)


@pytest.fixture
def tokens():
    store = TokenStore()
    store.set_tokens("access-1", "es_rt_abc_secret")
    return store


@pytest.fixture
def api(session, notifier, tokens):
    events = []
    loader = LoadingIndicator(on_change=events.append)
    logout = MagicMock()
    c = ApiClient(BASE, tokens=tokens, loader=loader, notifier=notifier, session=session, on_logout=logout)
    c.loader_events = events
    return c


def _sent_headers(call):
    return call.kwargs["headers"]


def test_attaches_bearer_and_toggles_loader(api, session):
    session.request.return_value = make_response(body=[])
    assert api.fetch_budgets() == []

    call = session.request.call_args
    assert call.args == ("GET", f"{BASE}/budgets")
    assert _sent_headers(call)["Authorization"] == "Bearer access-1"
    assert api.loader_events == [True, False]
    assert not api.loader.is_loading


def test_login_and_signup_do_not_send_bearer(api, session, tokens):
    session.request.return_value = make_response(
        body={"accessToken": "access-2", "refreshToken": "es_rt_new_secret", "user": {}}
    )
    api.login_user("a@example.com", "secret123")
    assert "Authorization" not in _sent_headers(session.request.call_args)
    assert tokens.access_token == "access-2"
    assert tokens.refresh_token == "es_rt_new_secret"

    session.request.return_value = make_response(201, body={"message": "ok"})
    api.signup_user("A", "a@example.com", "secret123")
    assert "Authorization" not in _sent_headers(session.request.call_args)


def test_goal_and_reminder_calls_skip_loader(api, session):
    session.request.return_value = make_response(body={"categoryGoals": []})
    api.fetch_category_goals()
    session.request.return_value = make_response(body=[])
    api.fetch_reminders()
    assert api.loader_events == []


def test_loader_stops_when_transport_fails(api, session, notifier):
    session.request.side_effect = requests.ConnectionError("boom")
    with pytest.raises(ApiError) as exc:
        api.fetch_debts()
    assert exc.value.status is None
    assert api.loader_events == [True, False]
    notifier.error.assert_called_once_with("Failed to fetch debts")


def test_401_refreshes_once_and_retries(api, session, tokens):
    session.request.side_effect = [make_response(401, body={"detail": "Token expired"}), make_response(body=[])]
    session.post.return_value = make_response(body={"accessToken": "access-fresh"})

    assert api.fetch_debts() == []

    session.post.assert_called_once()
    assert session.post.call_args.args == (f"{BASE}/auth/refresh-token",)
    assert session.post.call_args.kwargs["json"] == {"refreshToken": "es_rt_abc_secret"}
    assert tokens.access_token == "access-fresh"
    retried = session.request.call_args_list[1]
    assert _sent_headers(retried)["Authorization"] == "Bearer access-fresh"


def test_second_401_is_not_refreshed_again(api, session):
    session.request.side_effect = [make_response(401, body={}), make_response(401, body={"msg": "still no"})]
    session.post.return_value = make_response(body={"accessToken": "access-fresh"})

    with pytest.raises(ApiError) as exc:
        api.fetch_debts()
    assert not isinstance(exc.value, SessionExpiredError)
    assert exc.value.status == 401
    assert session.post.call_count == 1


def test_failed_refresh_expires_session(api, session, tokens, notifier):
    session.request.return_value = make_response(401, body={"detail": "Token expired"})
    session.post.return_value = make_response(401, body={"detail": "Invalid or expired refresh token"})

    with pytest.raises(SessionExpiredError):
        api.fetch_budget_summary()

    assert tokens.access_token is None
    assert tokens.refresh_token is None
    notifier.info.assert_called_once_with("Session expired. Please login again.")
    notifier.error.assert_not_called()
    api.on_logout.assert_called_once()


def test_missing_refresh_token_expires_session(api, session, tokens):
    tokens.clear()
    tokens.set_access_token("access-only")
    session.request.return_value = make_response(401, body={})

    with pytest.raises(SessionExpiredError):
        api.fetch_debts()
    session.post.assert_not_called()


def test_auth_calls_are_never_refreshed(api, session):
    session.request.return_value = make_response(401, body={"detail": "nope"})
    with pytest.raises(ApiError):
        api.request("GET", "/auth/me")
    session.post.assert_not_called()


def test_error_helpers_notify(api, session, notifier):
    session.request.return_value = make_response(400, body={"detail": "Invalid credentials"})
    with pytest.raises(ApiError) as exc:
        api.login_user("a@example.com", "bad")
    assert exc.value.message == "Invalid credentials"
    notifier.error.assert_called_once_with("Invalid credentials")

    notifier.reset_mock()
    session.request.return_value = make_response(500, text="")
    with pytest.raises(ApiError):
        api.add_budget({"category": "Food", "amount": 1})
    notifier.error.assert_called_once_with("Failed to add budget")


def test_writes_notify_success(api, session, notifier):
    session.request.return_value = make_response(201, body={"id": "1"})
    api.add_reminder({"title": "Rent", "dueDate": "2024-01-01"})
    notifier.success.assert_called_once_with("Reminder added successfully!")


def test_get_transactions_sends_query(api, session):
    session.request.return_value = make_response(body={"transactions": [], "hasMore": False})
    api.get_transactions(page=2, limit=5, search="pizza", filter="Food")
    assert session.request.call_args.kwargs["params"] == {"page": 2, "limit": 5, "search": "pizza", "filter": "Food"}


def test_set_category_goals_payload(api, session):
    session.request.return_value = make_response(body={"message": "ok"})
    api.set_category_goals([{"category": "Food", "goal": 10}])
    assert session.request.call_args.kwargs["json"] == {"categoryGoals": [{"category": "Food", "goal": 10}]}


def test_check_backend_returns_text(api, session):
    session.request.return_value = make_response(text="Backend is running!")
    assert api.check_backend() == "Backend is running!"
    assert session.request.call_args.args == ("GET", BASE)


def test_logout_revokes_then_clears(api, session, tokens, notifier):
    api.logout_user()
    session.post.assert_called_once()
    assert session.post.call_args.kwargs["json"] == {"refreshToken": "es_rt_abc_secret"}
    assert tokens.access_token is None
    notifier.info.assert_called_once_with("Logged out successfully.")
    api.on_logout.assert_called_once()


def test_logout_clears_even_when_server_unreachable(api, session, tokens):
    session.post.side_effect = requests.ConnectionError("offline")
    api.logout_user()
    assert tokens.refresh_token is None


def test_base_url_from_env(monkeypatch, session):
    monkeypatch.setenv("EXPENSYNC_API_URL", "https://prod.example/api/v1/")
    c = ApiClient(session=session, tokens=TokenStore())
    assert c.base_url == "https://prod.example/api/v1"


@pytest.mark.parametrize(
    "body,expected",
    [
        ({"msg": "from msg"}, "from msg"),
        ({"message": "from message"}, "from message"),
        ({"detail": "from detail"}, "from detail"),
        ({"detail": [{"msg": "field required"}]}, "field required"),
        ({}, "Something went wrong"),
    ],
)
def test_error_message_extraction(body, expected):
    assert error_message(make_response(400, body=body)) == expected


@pytest.mark.parametrize("refresh_body", [["access-fresh"], "access-fresh", None])
def test_malformed_refresh_body_expires_session(api, session, tokens, refresh_body):
    session.request.return_value = make_response(401, body={"detail": "Token expired"})
    if refresh_body is None:
        session.post.return_value = make_response(200, text="not json")
    else:
        session.post.return_value = make_response(200, body=refresh_body)

    with pytest.raises(SessionExpiredError):
        api.fetch_debts()

    assert tokens.access_token is None
    api.on_logout.assert_called_once()
