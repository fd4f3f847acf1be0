"""Translation lookaside buffer — a small FIFO cache of page → frame.

The TLB short-circuits the page table for recently translated pages.
It has a fixed capacity; inserting into a full TLB first drops the
entry that was inserted longest ago.  Lookups do not reorder entries:
replacement is FIFO, not LRU.

An ``OrderedDict`` gives O(1) lookup and keeps insertion order, so the
first key is always the next entry to go.
"""

from collections import OrderedDict


class TranslationCache:
    """Fixed-capacity FIFO mapping of page number to frame number."""

    def __init__(self, *, capacity: int) -> None:
        """Create an empty TLB.

        Args:
            capacity: Maximum number of entries held at once.

        """
        if capacity <= 0:
            msg = f"TLB capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._entries: OrderedDict[int, int] = OrderedDict()

    @property
    def capacity(self) -> int:
        """Return the maximum number of entries."""
        return self._capacity

    def lookup(self, page: int) -> int | None:
        """Return the cached frame for a page, or None on a miss."""
        return self._entries.get(page)

    def insert(self, page: int, frame: int) -> int | None:
        """Cache a page → frame mapping.

        If the page is already cached its frame is replaced in place.
        Otherwise, when the TLB is full, the oldest entry is evicted first.

        Returns:
            The page number that was evicted to make room, or None.

        """
        if page in self._entries:
            self._entries[page] = frame
            return None
        evicted: int | None = None
        if len(self._entries) >= self._capacity:
            evicted, _ = self._entries.popitem(last=False)
        self._entries[page] = frame
        return evicted

    def invalidate(self, page: int) -> bool:
        """Drop a page's entry if present.

        Returns:
            True if an entry was removed.

        """
        return self._entries.pop(page, None) is not None

    def entries(self) -> dict[int, int]:
        """Return cached mappings from oldest to newest."""
        return dict(self._entries)

    def __contains__(self, page: object) -> bool:
        """Return True if the page is cached."""
        return page in self._entries

    def __len__(self) -> int:
        """Return the number of cached entries."""
        return len(self._entries)
