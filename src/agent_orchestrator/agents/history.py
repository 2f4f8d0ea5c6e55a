"""Append-only history store for agents and pipelines.

Each agent owns one History instance. The same agent may be executed by
several concurrent callers, so appends are serialized with a lock.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from agent_orchestrator.agents.types import HistoryEntry, HistoryKind

logger = logging.getLogger(__name__)


class History:
    """Lock-guarded, append-only record of past interactions.

    Attributes:
        kind: What the store is used for (conversation, semantic, working)
        created_at: When the store was created (UTC)
    """

    def __init__(self, kind: HistoryKind = HistoryKind.CONVERSATION) -> None:
        self.kind = HistoryKind(kind)
        self.created_at = datetime.now(timezone.utc)
        self._entries: list[HistoryEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: HistoryEntry) -> None:
        """Append an entry to the store.

        Args:
            entry: The entry to record
        """
        with self._lock:
            self._entries.append(entry)

    def read(
        self,
        limit: int | None = None,
        predicate: Callable[[HistoryEntry], bool] | None = None,
    ) -> list[HistoryEntry]:
        """Read entries, oldest first.

        Entries are filtered by ``predicate`` first, then truncated to the
        last ``limit`` entries.

        Args:
            limit: Maximum number of entries to return (default: all)
            predicate: Filter applied to each entry (default: accept all)

        Returns:
            A copy of the matching entries in append order

        Raises:
            ValueError: If limit is negative
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        with self._lock:
            entries = list(self._entries)

        if predicate is not None:
            entries = [entry for entry in entries if predicate(entry)]
        if limit is not None:
            entries = entries[-limit:] if limit else []
        return entries

    def clear(self) -> None:
        """Remove every entry from the store."""
        with self._lock:
            count = len(self._entries)
            self._entries = []
        logger.debug(f"Cleared {count} {self.kind.value} history entries")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
