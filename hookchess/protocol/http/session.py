from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...engine.game import Match


class InMemoryMatchStore:
    """Thread-safe in-memory match store.

    Each match owns its BoardState; the store only maps ``match_id`` to the
    match and serializes access to the mapping.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._matches: Dict[str, Match] = {}

    def create(self, match: Optional[Match] = None) -> str:
        """Store a match (a fresh one by default) and return its ``match_id``."""
        mid = str(uuid.uuid4())
        if match is None:
            match = Match.new()
        with self._lock:
            self._matches[mid] = match
        return mid

    def get(self, match_id: str) -> Optional[Match]:
        with self._lock:
            return self._matches.get(match_id)

    def set(self, match_id: str, match: Match) -> None:
        with self._lock:
            if match_id not in self._matches:
                raise KeyError(match_id)
            self._matches[match_id] = match

    def delete(self, match_id: str) -> bool:
        with self._lock:
            return self._matches.pop(match_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._matches)
