"""Tests for the simulator event log.

The log records page faults, frame evictions, and TLB activity as
structured entries that can be filtered by level and source.
"""

from vmsim.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry should store level, message, and source."""
        entry = LogEntry(level=LogLevel.INFO, message="page fault", source="pager")
        assert entry.level is LogLevel.INFO
        assert entry.message == "page fault"
        assert entry.source == "pager"

    def test_entry_str(self) -> None:
        """String form is ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.DEBUG, message="invalidated page 3", source="tlb")
        assert str(entry) == "[DEBUG] tlb: invalidated page 3"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable in order."""
        logger = Logger()
        logger.info("first", source="pager")
        logger.debug("second", source="tlb")
        assert [e.message for e in logger.entries] == ["first", "second"]
        assert len(logger) == len(logger.entries)

    def test_min_level_drops_entries(self) -> None:
        """Entries below the minimum level are never stored."""
        logger = Logger(min_level=LogLevel.INFO)
        logger.debug("noise", source="tlb")
        logger.info("fault", source="pager")
        assert [e.message for e in logger.entries] == ["fault"]
        assert logger.min_level is LogLevel.INFO

    def test_filter_by_level(self) -> None:
        """Filtering by level returns entries at or above it."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "d", source="tlb")
        logger.log(LogLevel.ERROR, "e", source="pager")
        result = logger.filter(min_level=LogLevel.WARNING)
        assert [e.message for e in result] == ["e"]

    def test_filter_by_source(self) -> None:
        """Filtering by source returns only that component's entries."""
        logger = Logger()
        logger.info("a", source="pager")
        logger.debug("b", source="tlb")
        assert [e.message for e in logger.filter(source="tlb")] == ["b"]

    def test_filter_returns_copy(self) -> None:
        """Mutating a filter result does not touch the log."""
        logger = Logger()
        logger.info("a", source="pager")
        logger.filter().clear()
        assert len(logger) == 1

    def test_clear(self) -> None:
        """Clear removes all entries."""
        logger = Logger()
        logger.info("a", source="pager")
        logger.clear()
        assert logger.entries == []
