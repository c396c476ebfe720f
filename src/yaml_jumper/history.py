import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class HistoryKind(StrEnum):
    PATH = "path"
    VALUE = "value"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    kind: HistoryKind
    value: str
    timestamp: float


class HistoryLedger:
    """Bounded jump history, most recent last.

    Only consecutive repeats are suppressed; consumers reverse the entries for
    most-recent-first display.
    """

    def __init__(
        self,
        *,
        max_size: int = 100,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._max_size = max_size
        self._clock = clock
        self._entries: list[HistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def max_size(self) -> int:
        return self._max_size

    def set_max_size(self, max_size: int) -> None:
        self._max_size = max_size
        self._trim()

    def add(self, kind: HistoryKind | str, value: str | None) -> None:
        if not value:
            return

        kind = HistoryKind(kind)
        if self._entries and self._entries[-1].kind == kind and self._entries[-1].value == value:
            return

        self._entries.append(HistoryEntry(kind=kind, value=value, timestamp=self._clock()))
        self._trim()

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        self._entries.clear()

    def _trim(self) -> None:
        overflow = len(self._entries) - self._max_size
        if overflow > 0:
            del self._entries[:overflow]
