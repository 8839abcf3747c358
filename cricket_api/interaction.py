# cricket_api/interaction.py
from __future__ import annotations

import time
from typing import Callable, Dict, Optional

from cricket_api.config import DIALOG_FLAG_TTL_SECONDS


class InteractionStore:
    """
    Per-client "user is mid-interaction" flags (a scoring dialog is open).

    While a client's flag is set, realtime refreshes for that client should
    be held back so the form under the user's cursor is not re-rendered.
    Flags expire after a TTL so a client that disappears with a dialog open
    does not block refreshes forever.

    One instance is owned by the app (app.state.interactions); tests build
    their own with a fake clock.
    """

    def __init__(
        self,
        ttl_seconds: int = DIALOG_FLAG_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._clock = clock
        # client_id -> expires_at_epoch
        self._open: Dict[str, float] = {}

    def _purge_expired(self, now: float) -> None:
        # Flags of clients that went away with a dialog open
        for k in [k for k, exp in self._open.items() if now > exp]:
            del self._open[k]

    @staticmethod
    def _key(client_id: str) -> str:
        key = (client_id or "").strip()
        if not key:
            raise ValueError("client_id must be non-empty")
        return key

    def set_dialog_open(self, client_id: str, is_open: bool, ttl_seconds: Optional[int] = None) -> None:
        key = self._key(client_id)
        self._purge_expired(self._clock())
        if not is_open:
            self._open.pop(key, None)
            return

        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            # Do not store a flag that is already expired
            self._open.pop(key, None)
            return
        self._open[key] = self._clock() + ttl

    def is_dialog_open(self, client_id: str) -> bool:
        key = self._key(client_id)
        expires_at = self._open.get(key)
        if expires_at is None:
            return False

        if self._clock() > expires_at:
            self._open.pop(key, None)
            return False

        return True

    def should_refresh(self, client_id: str) -> bool:
        return not self.is_dialog_open(client_id)

    def clear(self) -> None:
        self._open.clear()

    def snapshot(self) -> Dict[str, float]:
        """
        Open flags with remaining TTL (seconds). Useful for debugging.
        """
        now = self._clock()
        self._purge_expired(now)
        return {k: max(0.0, exp - now) for k, exp in self._open.items()}

    def __len__(self) -> int:
        return len(self.snapshot())
