"""
Memory Token Store - In-memory token cache and blacklist.
"""

import threading
import time
from typing import Optional, List, Dict, Tuple, Callable
from admin_auth.ports.token_store_port import TokenStorePort
from admin_auth.domain.admin import SysAdmin


class MemoryTokenStore(TokenStorePort):
    """
    In-memory token storage.

    WARNING: Single-process only.
    Entries are lost on restart and not shared between workers.

    Safe to share between request threads. Expired entries are swept on
    writes at most once per sweep_interval, so the maps stay bounded by
    the tokens live within one TTL.
    """

    def __init__(self, clock: Callable[[], float] = time.time, sweep_interval: float = 60.0):
        """
        Initialize in-memory storage.

        Args:
            clock: Seconds-since-epoch source, injectable for expiry tests
            sweep_interval: Minimum seconds between expiry sweeps
        """
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._lock = threading.RLock()
        # Format: {token: (admin_dict, expires_at)}
        self._entries: Dict[str, Tuple[dict, float]] = {}
        # Format: {admin_id: [token, ...]}
        self._admin_tokens: Dict[int, List[str]] = {}
        # Format: {token: expires_at}
        self._blacklist: Dict[str, float] = {}

    def save(self, token: str, admin: SysAdmin, ttl: int) -> None:
        """Cache an admin under a token."""
        with self._lock:
            self._maybe_sweep()
            self._entries[token] = (admin.to_dict(), self._clock() + ttl)

            tokens = self._admin_tokens.setdefault(admin.id, [])
            if token not in tokens:
                tokens.append(token)

    def load(self, token: str) -> Optional[SysAdmin]:
        """Get the cached admin, dropping the entry if expired."""
        with self._lock:
            entry = self._entries.get(token)
            if not entry:
                return None

            data, expires_at = entry
            if self._clock() >= expires_at:
                self._drop(token)
                return None

            return SysAdmin.from_dict(data)

    def replace(self, token: str, admin: SysAdmin) -> bool:
        """Overwrite the cached admin, keeping its expiry."""
        with self._lock:
            if self.load(token) is None:
                return False

            _, expires_at = self._entries[token]
            self._entries[token] = (admin.to_dict(), expires_at)
            return True

    def delete(self, token: str) -> bool:
        """Remove the cached admin for a token."""
        with self._lock:
            return self._drop(token)

    def tokens_for_admin(self, admin_id: int) -> List[str]:
        """List live tokens for an admin."""
        with self._lock:
            return [
                token for token in list(self._admin_tokens.get(admin_id, []))
                if self.load(token) is not None
            ]

    def blacklist(self, token: str, ttl: int) -> bool:
        """Revoke a token for ttl seconds."""
        with self._lock:
            self._maybe_sweep()
            if self.is_blacklisted(token):
                return False

            self._blacklist[token] = self._clock() + ttl
            return True

    def is_blacklisted(self, token: str) -> bool:
        """Check revocation, forgetting entries past their TTL."""
        with self._lock:
            expires_at = self._blacklist.get(token)
            if expires_at is None:
                return False

            if self._clock() >= expires_at:
                del self._blacklist[token]
                return False

            return True

    def cleanup_expired(self) -> int:
        """
        Drop expired cache and blacklist entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired_tokens = [t for t, (_, exp) in self._entries.items() if now >= exp]
            for token in expired_tokens:
                self._drop(token)

            expired_blacklist = [t for t, exp in self._blacklist.items() if now >= exp]
            for token in expired_blacklist:
                del self._blacklist[token]

            self._next_sweep = now + self._sweep_interval
            return len(expired_tokens) + len(expired_blacklist)

    def _maybe_sweep(self) -> None:
        if self._clock() >= self._next_sweep:
            self.cleanup_expired()

    def _drop(self, token: str) -> bool:
        """Remove an entry and its admin index slot. Caller holds the lock."""
        entry = self._entries.pop(token, None)
        if not entry:
            return False

        admin_id = entry[0]["id"]
        tokens = self._admin_tokens.get(admin_id)
        if tokens and token in tokens:
            tokens.remove(token)
            if not tokens:
                del self._admin_tokens[admin_id]

        return True
