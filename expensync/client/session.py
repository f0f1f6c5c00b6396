"""
Client-side session state: stored tokens and the loading indicator.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Callable, Dict, Optional, Union

logger = logging.getLogger(__name__)

ACCESS_KEY = "token"
REFRESH_KEY = "refreshToken"


class TokenStore:
    """Holds the access/refresh token pair, optionally persisted to a JSON file.

    The file plays the role of browser local storage: it survives restarts
    and is removed on logout.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path).expanduser() if path else None
        self._values: Dict[str, str] = {}
        if self.path and self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("token_store_unreadable: path=%s error=%s", self.path, exc)
            return
        if isinstance(data, dict):
            self._values = {k: v for k, v in data.items() if k in (ACCESS_KEY, REFRESH_KEY) and isinstance(v, str)}

    def _save(self) -> None:
        if not self.path:
            return
        if not self._values:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values), encoding="utf-8")
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.debug("token_store_chmod_failed: path=%s", self.path)

    @property
    def access_token(self) -> Optional[str]:
        return self._values.get(ACCESS_KEY)

    @property
    def refresh_token(self) -> Optional[str]:
        return self._values.get(REFRESH_KEY)

    def set_tokens(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        self._values[ACCESS_KEY] = access_token
        if refresh_token is not None:
            self._values[REFRESH_KEY] = refresh_token
        self._save()

    def set_access_token(self, access_token: str) -> None:
        self.set_tokens(access_token)

    def clear(self) -> None:
        self._values = {}
        self._save()


class LoadingIndicator:
    """Tracks in-flight requests; `on_change(True/False)` fires on the edges."""

    def __init__(self, on_change: Optional[Callable[[bool], None]] = None) -> None:
        self._on_change = on_change
        self._active = 0
        self._lock = threading.Lock()

    @property
    def is_loading(self) -> bool:
        return self._active > 0

    def start(self) -> None:
        with self._lock:
            self._active += 1
            edge = self._active == 1
        if edge and self._on_change:
            self._on_change(True)

    def stop(self) -> None:
        with self._lock:
            if self._active == 0:
                return
            self._active -= 1
            edge = self._active == 0
        if edge and self._on_change:
            self._on_change(False)
