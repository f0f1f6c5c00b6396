"""
Transaction feed state: paginated list with search, category filter,
infinite scroll and a confirm-then-delete flow.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from expensync.client.api import ApiClient, ApiError

logger = logging.getLogger(__name__)

SCROLL_THRESHOLD_PX = 50


class TransactionFeed:
    def __init__(self, client: ApiClient, page_size: int = 10) -> None:
        self.client = client
        self.page_size = page_size
        self.transactions: List[Dict[str, Any]] = []
        self.page = 1
        self.has_more = True
        self.loading = False
        self.search = ""
        self.filter = ""
        self.error: Optional[str] = None
        self.pending_delete_id: Optional[str] = None

    @property
    def modal_open(self) -> bool:
        return self.pending_delete_id is not None

    def fetch(self, page: int = 1, reset: bool = False) -> None:
        self.loading = True
        self.error = None
        try:
            data = self.client.get_transactions(
                page=page, limit=self.page_size, search=self.search, filter=self.filter
            )
        except ApiError as exc:
            logger.warning("feed_fetch_failed: page=%s error=%s", page, exc.message)
            self.error = "Failed to load transactions"
            return
        finally:
            self.loading = False

        rows = list((data or {}).get("transactions") or [])
        self.transactions = rows if reset else self.transactions + rows
        self.page = page
        self.has_more = bool((data or {}).get("hasMore"))

    def refresh(self) -> None:
        self.fetch(page=1, reset=True)

    def load_more(self) -> bool:
        if not self.has_more or self.loading:
            return False
        self.fetch(page=self.page + 1)
        return True

    def set_search(self, search: str) -> None:
        self.search = search or ""
        self.refresh()

    def set_filter(self, category: str) -> None:
        self.filter = category or ""
        self.refresh()

    def should_load_more(
        self,
        scroll_top: float,
        client_height: float,
        scroll_height: float,
        threshold: float = SCROLL_THRESHOLD_PX,
    ) -> bool:
        near_bottom = scroll_top + client_height >= scroll_height - threshold
        return near_bottom and self.has_more and not self.loading

    def on_scroll(self, scroll_top: float, client_height: float, scroll_height: float) -> bool:
        if self.should_load_more(scroll_top, client_height, scroll_height):
            return self.load_more()
        return False

    # Delete flow

    def request_delete(self, transaction_id: str) -> None:
        self.pending_delete_id = transaction_id

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self) -> bool:
        """Remove the pending row optimistically; put it back if the API refuses."""
        target = self.pending_delete_id
        if target is None:
            return False
        index = next((i for i, t in enumerate(self.transactions) if t.get("id") == target), None)
        removed = self.transactions.pop(index) if index is not None else None
        try:
            self.client.delete_transaction(target)
        except ApiError as exc:
            logger.warning("feed_delete_failed: id=%s error=%s", target, exc.message)
            if removed is not None:
                self.transactions.insert(index, removed)
            self.error = "Failed to delete transaction"
            return False
        finally:
            self.pending_delete_id = None
        return True

    # Totals over loaded rows

    @property
    def total_spent(self) -> float:
        return sum(float(t.get("amount") or 0) for t in self.transactions if float(t.get("amount") or 0) < 0)

    @property
    def total_income(self) -> float:
        return sum(float(t.get("amount") or 0) for t in self.transactions if float(t.get("amount") or 0) > 0)

    @property
    def net(self) -> float:
        return self.total_income + self.total_spent
