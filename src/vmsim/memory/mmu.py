"""MMU — keeps the page table and the TLB coherent.

The TLB is a cache of the page table, and a stale cache entry is the
classic way a paging simulator goes wrong: evict page 5 from frame 0,
load page 12 into frame 0, and a leftover TLB entry ``5 → 0`` now
silently returns page 12's bytes for page 5.

To rule that out structurally, nothing outside this class touches the
two structures directly.  Every state change goes through one of:

    - ``resolve`` — TLB, then page table (filling the TLB on a table hit).
    - ``install`` — make a page resident and cache it.
    - ``evict``   — make a page absent *and* drop its TLB entry.
    - ``invalidate`` — drop a TLB entry only.
"""

from dataclasses import dataclass

from vmsim.logging import Logger
from vmsim.memory.tlb import TranslationCache
from vmsim.memory.virtual import PageTable


class CoherenceError(Exception):
    """Raised when the TLB disagrees with the page table."""


@dataclass(frozen=True)
class Lookup:
    """Outcome of resolving a resident page.

    Attributes:
        frame: The frame holding the page.
        tlb_hit: True if the TLB answered, False if the page table did.

    """

    frame: int
    tlb_hit: bool


class MMU:
    """Owner of the page table and translation cache."""

    def __init__(
        self,
        *,
        num_pages: int,
        tlb_capacity: int,
        logger: Logger | None = None,
    ) -> None:
        """Create an MMU with an empty page table and TLB.

        Args:
            num_pages: Entries in the page table.
            tlb_capacity: Maximum TLB entries.
            logger: Optional event log for TLB activity.

        """
        self._page_table = PageTable(num_pages=num_pages)
        self._tlb = TranslationCache(capacity=tlb_capacity)
        self._logger = logger

    @property
    def page_table(self) -> PageTable:
        """Return the page table (read-only use expected)."""
        return self._page_table

    @property
    def tlb(self) -> TranslationCache:
        """Return the TLB (read-only use expected)."""
        return self._tlb

    def _cache(self, page: int, frame: int) -> None:
        evicted = self._tlb.insert(page, frame)
        if evicted is not None and self._logger is not None:
            self._logger.debug(f"evicted page {evicted} to cache page {page}", source="tlb")

    def resolve(self, page: int) -> Lookup | None:
        """Find the frame for a page without faulting.

        A page-table hit is copied into the TLB.

        Returns:
            The lookup result, or None if the page is not resident.

        """
        frame = self._tlb.lookup(page)
        if frame is not None:
            return Lookup(frame=frame, tlb_hit=True)
        frame = self._page_table.lookup(page)
        if frame is None:
            return None
        self._cache(page, frame)
        return Lookup(frame=frame, tlb_hit=False)

    def install(self, *, page: int, frame: int) -> None:
        """Mark a page resident in a frame and cache the mapping."""
        self._page_table.map(page=page, frame=frame)
        self._cache(page, frame)

    def invalidate(self, page: int) -> None:
        """Drop a page's TLB entry (no-op if it has none)."""
        if self._tlb.invalidate(page) and self._logger is not None:
            self._logger.debug(f"invalidated page {page}", source="tlb")

    def evict(self, page: int) -> None:
        """Make a page absent in both the page table and the TLB."""
        self._page_table.unmap(page=page)
        self.invalidate(page)

    def check_coherence(self) -> None:
        """Verify every TLB entry matches the page table.

        Raises:
            CoherenceError: If a cached page is absent or maps elsewhere.

        """
        for page, frame in self._tlb.entries().items():
            actual = self._page_table.lookup(page)
            if actual != frame:
                msg = f"TLB maps page {page} to frame {frame}, page table says {actual}"
                raise CoherenceError(msg)
