"""
In-memory key-value adapter - Implements KeyValueStore protocol.

Process-local dictionary for development (KV_BACKEND=memory) and tests.
Contents are lost when the process exits.
"""

import threading


class InMemoryKeyValueStore:
    """
    Implements KeyValueStore protocol with a lock-guarded dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, namespace: str = "USERS") -> None:
        self.namespace = namespace
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._entries[key] = value

    def put_if_absent(self, key: str, value: str) -> bool:
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = value
            return True

    def check_connection(self) -> None:
        # Nothing to connect to
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
