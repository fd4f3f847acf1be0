"""Page table — the single source of truth for page residency.

A virtual address is split into a **page number** (high bits) and an
**offset** (low bits).  The page table holds one entry per page number
in the virtual address space; each entry is either absent or names the
physical frame currently holding that page::

    virtual address  →  (page number, offset)
    page_table[page] →  frame number
    physical address →  frame * page_size + offset

Unlike a sparse per-process table, this one is a fixed-size list: the
whole 16-bit address space has exactly ``num_pages`` pages, all of them
legal, and any of them can fault.
"""

from vmsim.config import NUM_PAGES


class PageFaultError(Exception):
    """Raised when a page table lookup hits a page that is not resident."""


class PageTable:
    """Map page numbers to frame numbers, or to None when absent."""

    def __init__(self, *, num_pages: int = NUM_PAGES) -> None:
        """Create a page table with every page absent."""
        self._frames: list[int | None] = [None] * num_pages

    @property
    def num_pages(self) -> int:
        """Return the number of entries in the table."""
        return len(self._frames)

    def _check_page(self, page: int) -> None:
        if not 0 <= page < len(self._frames):
            msg = f"Page {page} out of range (0..{len(self._frames) - 1})"
            raise IndexError(msg)

    def map(self, *, page: int, frame: int) -> None:
        """Mark a page resident in a frame."""
        self._check_page(page)
        self._frames[page] = frame

    def unmap(self, *, page: int) -> None:
        """Mark a page absent (no-op if it already is)."""
        self._check_page(page)
        self._frames[page] = None

    def lookup(self, page: int) -> int | None:
        """Return the frame holding a page, or None if it is absent."""
        self._check_page(page)
        return self._frames[page]

    def translate(self, page: int) -> int:
        """Return the frame holding a page.

        Raises:
            PageFaultError: If the page is not resident.

        """
        frame = self.lookup(page)
        if frame is None:
            msg = f"Page {page} is not resident"
            raise PageFaultError(msg)
        return frame

    def is_resident(self, page: int) -> bool:
        """Return True if the page currently has a frame."""
        return self.lookup(page) is not None

    def mappings(self) -> dict[int, int]:
        """Return all resident page → frame pairs."""
        return {page: frame for page, frame in enumerate(self._frames) if frame is not None}

    def __len__(self) -> int:
        """Return the number of resident pages."""
        return sum(1 for frame in self._frames if frame is not None)
