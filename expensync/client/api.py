"""
HTTP client for the Expensync API.

Wraps a `requests.Session` the way the web frontend wraps its HTTP client:
- attaches the stored bearer token (except on login/signup)
- drives a loading indicator unless a call opts out with `skip_loader`
- on a 401, refreshes the access token once and re-issues the request;
  when the refresh fails the session is cleared and `SessionExpiredError`
  is raised
"""
from __future__ import annotations

import functools
import logging
import os
from typing import Any, Callable, Dict, List, Optional

import requests

from expensync.client.session import LoadingIndicator, TokenStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api/v1"
_DEFAULT_TIMEOUT = (3, 30)

# Paths that never carry a bearer token and never trigger a refresh
_PUBLIC_AUTH_PATHS = ("/auth/login", "/auth/signup")


class ApiError(Exception):
    """An API call failed; `status` is None for transport errors."""

    def __init__(self, status: Optional[int], message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.payload = payload


class SessionExpiredError(ApiError):
    """The access token was rejected and could not be refreshed."""


class Notifier:
    """Receives user-facing notifications (toasts in the web frontend)."""

    def success(self, message: str) -> None:
        logger.info("notify_success: %s", message)

    def error(self, message: str) -> None:
        logger.warning("notify_error: %s", message)

    def info(self, message: str) -> None:
        logger.info("notify_info: %s", message)


def error_message(response: requests.Response, default: str = "Something went wrong") -> str:
    """Pick the server's message out of an error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or default
    if isinstance(data, dict):
        for key in ("msg", "message", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
            if key == "detail" and isinstance(value, list) and value:
                first = value[0]
                if isinstance(first, dict) and first.get("msg"):
                    return str(first["msg"])
    return default


def _api_call(failure: str, success: Optional[str] = None, use_server_message: bool = False):
    """Notify on the outcome of an endpoint helper and re-raise failures."""

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(self: "ApiClient", *args, **kwargs):
            logger.debug("calling: %s", fn.__name__)
            try:
                result = fn(self, *args, **kwargs)
            except ApiError as exc:
                if not isinstance(exc, SessionExpiredError):
                    self.notifier.error(exc.message if use_server_message and exc.status else failure)
                raise
            if success:
                self.notifier.success(success)
            return result

        return wrapper

    return decorator


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        tokens: Optional[TokenStore] = None,
        loader: Optional[LoadingIndicator] = None,
        notifier: Optional[Notifier] = None,
        session: Optional[requests.Session] = None,
        on_logout: Optional[Callable[[], None]] = None,
        timeout=_DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = (base_url or os.getenv("EXPENSYNC_API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.tokens = tokens or TokenStore()
        self.loader = loader or LoadingIndicator()
        self.notifier = notifier or Notifier()
        self.session = session or requests.Session()
        self.session.headers.setdefault("Content-Type", "application/json")
        self.on_logout = on_logout
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}" if path else self.base_url

    @staticmethod
    def _is_public_auth(path: str) -> bool:
        return any(p in path for p in _PUBLIC_AUTH_PATHS)

    @staticmethod
    def _is_auth(path: str) -> bool:
        return "/auth/" in path or path.startswith("auth/")

    # Core request pipeline

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        skip_loader: bool = False,
        _retry: bool = False,
    ) -> Any:
        headers: Dict[str, str] = {}
        token = self.tokens.access_token
        if token and not self._is_public_auth(path):
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("request: %s %s params=%s skip_loader=%s", method.upper(), path, params, skip_loader)
        if not skip_loader:
            self.loader.start()
        try:
            response = self.session.request(
                method.upper(),
                self._url(path),
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("request_failed: %s %s error=%s", method.upper(), path, exc)
            raise ApiError(None, str(exc) or "Network error") from exc
        finally:
            if not skip_loader:
                self.loader.stop()

        if response.status_code == 401 and not _retry and not self._is_auth(path):
            try:
                self._refresh_access_token()
            except (ApiError, requests.RequestException) as exc:
                logger.info("refresh_failed: %s", exc)
                self.expire_session()
                raise SessionExpiredError(401, "Session expired. Please login again.") from exc
            return self.request(method, path, params=params, json=json, skip_loader=skip_loader, _retry=True)

        if not response.ok:
            message = error_message(response)
            logger.error("response_error: %s %s status=%s message=%s", method.upper(), path, response.status_code, message)
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            raise ApiError(response.status_code, message, payload)

        logger.debug("response: %s %s status=%s", method.upper(), path, response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _refresh_access_token(self) -> str:
        refresh = self.tokens.refresh_token
        if not refresh:
            raise ApiError(401, "No refresh token available")
        logger.info("refreshing_access_token")
        # Sent outside the wrapper: no bearer header, no loader, no retry
        response = self.session.post(
            self._url("/auth/refresh-token"),
            json={"refreshToken": refresh},
            timeout=self.timeout,
        )
        if not response.ok:
            raise ApiError(response.status_code, error_message(response, "Refresh failed"))
        try:
            data = response.json()
        except ValueError:
            data = None
        access = data.get("accessToken") if isinstance(data, dict) else None
        if not access:
            raise ApiError(response.status_code, "Refresh response did not include an access token")
        self.tokens.set_access_token(access)
        return access

    def expire_session(self) -> None:
        self.tokens.clear()
        self.notifier.info("Session expired. Please login again.")
        if self.on_logout:
            self.on_logout()

    # Backend check

    def check_backend(self) -> Any:
        return self.request("GET", "")

    # Auth

    @_api_call("Login Failed", success="Login Successful!", use_server_message=True)
    def login_user(self, email: str, password: str) -> Dict[str, Any]:
        data = self.request("POST", "/auth/login", json={"email": email, "password": password})
        self.tokens.set_tokens(data["accessToken"], data["refreshToken"])
        return data

    @_api_call("Signup Failed", success="Signup Successful! Please login.", use_server_message=True)
    def signup_user(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self.request("POST", "/auth/signup", json={"name": name, "email": email, "password": password})

    def logout_user(self) -> None:
        refresh = self.tokens.refresh_token
        if refresh:
            try:
                self.session.post(self._url("/auth/logout"), json={"refreshToken": refresh}, timeout=self.timeout)
            except requests.RequestException as exc:
                logger.warning("remote_logout_failed: %s", exc)
        self.tokens.clear()
        self.notifier.info("Logged out successfully.")
        if self.on_logout:
            self.on_logout()

    # Transactions

    @_api_call("Failed to fetch transactions")
    def get_transactions(self, page: int = 1, limit: int = 10, search: str = "", filter: str = "") -> Dict[str, Any]:
        return self.request(
            "GET",
            "/transactions",
            params={"page": page, "limit": limit, "search": search, "filter": filter},
        )

    @_api_call("Failed to add transaction", success="Transaction added successfully!")
    def create_transaction(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("POST", "/transactions/create", json=data)

    @_api_call("Failed to delete transaction", success="Transaction deleted!")
    def delete_transaction(self, transaction_id: str) -> Dict[str, Any]:
        return self.request("DELETE", f"/transactions/{transaction_id}")

    # Budgets

    @_api_call("Failed to fetch budgets")
    def fetch_budgets(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/budgets")

    @_api_call("Failed to add budget", success="Budget added successfully!")
    def add_budget(self, budget: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("POST", "/budgets", json=budget)

    # Debts

    @_api_call("Failed to fetch debts")
    def fetch_debts(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/debts")

    @_api_call("Failed to add debt", success="Debt added successfully!")
    def add_debt(self, debt: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("POST", "/debts/create", json=debt)

    @_api_call("Failed to delete debt", success="Debt deleted!")
    def delete_debt(self, debt_id: str) -> Dict[str, Any]:
        return self.request("DELETE", f"/debts/{debt_id}")

    # Budget summary

    @_api_call("Failed to fetch budget summary")
    def fetch_budget_summary(self) -> Dict[str, Any]:
        return self.request("GET", "/summary")

    # Category goals and reminders skip the loader

    @_api_call("Failed to fetch category goals")
    def fetch_category_goals(self) -> Dict[str, Any]:
        return self.request("GET", "/category-goals", skip_loader=True)

    @_api_call("Failed to set category goals", success="Category goals updated!")
    def set_category_goals(self, category_goals: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self.request("POST", "/category-goals/set", json={"categoryGoals": category_goals}, skip_loader=True)

    @_api_call("Failed to fetch reminders")
    def fetch_reminders(self) -> List[Dict[str, Any]]:
        return self.request("GET", "/reminders", skip_loader=True)

    @_api_call("Failed to add reminder", success="Reminder added successfully!")
    def add_reminder(self, reminder: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("POST", "/reminders/create", json=reminder, skip_loader=True)

    @_api_call("Failed to delete reminder", success="Reminder deleted!", use_server_message=True)
    def delete_reminder(self, reminder_id: str) -> Dict[str, Any]:
        return self.request("DELETE", f"/reminders/{reminder_id}", skip_loader=True)
