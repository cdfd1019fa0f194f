"""Caché en memoria con TTL para respuestas GraphQL."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class _Entry:
    data: Any
    timestamp: float


class TTLCache:
    """Diccionario con expiración por entrada.

    Las entradas vencidas se eliminan al leerlas; no hay barrido en segundo plano.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] | None = None) -> None:
        self._ttl = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.timestamp < self._ttl:
            return entry.data
        self._entries.pop(key, None)
        return None

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = _Entry(data=data, timestamp=self._clock())

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self.delete(key)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
