"""Python client for the Expensync API."""

from .api import ApiClient, ApiError, Notifier, SessionExpiredError
from .dashboard import DashboardOverview, GoalProgress, load_dashboard
from .feed import TransactionFeed
from .session import LoadingIndicator, TokenStore

__all__ = [
    "ApiClient",
    "ApiError",
    "Notifier",
    "SessionExpiredError",
    "DashboardOverview",
    "GoalProgress",
    "load_dashboard",
    "TransactionFeed",
    "LoadingIndicator",
    "TokenStore",
]
