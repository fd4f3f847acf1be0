"""Simulator event log.

Every interesting thing the translator does (a page fault, a frame
eviction, a TLB entry being pushed out or invalidated) is recorded as
a structured entry.  The log is a diagnostic trail only: nothing in the
translation path ever reads it back.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single immutable record (level, message, source).
- **Logger** — an append-only buffer with filtering and clearing.

Sources used by the simulator:
    - ``"pager"`` — page faults and frame evictions.
    - ``"tlb"`` — translation cache evictions and invalidations.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "pager").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering.

    Entries below ``min_level`` are dropped at record time, so a run
    over a long address stream does not have to keep every DEBUG line.
    """

    def __init__(self, *, min_level: LogLevel = LogLevel.DEBUG) -> None:
        """Create an empty logger.

        Args:
            min_level: Entries below this severity are discarded.

        """
        self._min_level = min_level
        self._entries: list[LogEntry] = []

    @property
    def min_level(self) -> LogLevel:
        """Return the lowest severity that is recorded."""
        return self._min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all recorded entries in chronological order."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry unless it falls below the minimum level."""
        if level < self._min_level:
            return
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def debug(self, message: str, *, source: str) -> None:
        """Shorthand for ``log(LogLevel.DEBUG, ...)``."""
        self.log(LogLevel.DEBUG, message, source=source)

    def info(self, message: str, *, source: str) -> None:
        """Shorthand for ``log(LogLevel.INFO, ...)``."""
        self.log(LogLevel.INFO, message, source=source)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A new list of matching entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        return len(self._entries)
