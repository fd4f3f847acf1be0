"""Backing store — the on-disk image of every virtual page.

The backing store plays the role of the swap device in a demand-paged
system, except that it is read-only: it holds the initial contents of
all ``num_pages`` pages, and a page fault copies one page-sized slice
out of it into a physical frame.

The image must cover the whole virtual address space.  A short image
is a configuration error, not something to pad with zeros or wrap
around: the simulator refuses to start rather than guess.
"""

from pathlib import Path

from vmsim.config import NUM_PAGES, PAGE_SIZE


class BackingStoreError(Exception):
    """Raised when the backing store is missing, truncated, or out of range."""


class BackingStore:
    """Read-only page source addressed by page number.

    Page ``n`` lives at byte offset ``n * page_size``.
    """

    def __init__(
        self,
        data: bytes,
        *,
        page_size: int = PAGE_SIZE,
        num_pages: int = NUM_PAGES,
    ) -> None:
        """Wrap an in-memory backing store image.

        Args:
            data: The raw image, exactly ``page_size * num_pages`` bytes.
            page_size: Bytes per page.
            num_pages: Number of pages the image must supply.

        Raises:
            BackingStoreError: If the image is not exactly the right size.

        """
        expected = page_size * num_pages
        if len(data) != expected:
            msg = f"Backing store holds {len(data)} bytes, expected {expected}"
            raise BackingStoreError(msg)
        self._data = bytes(data)
        self._page_size = page_size
        self._num_pages = num_pages

    @classmethod
    def from_path(
        cls,
        path: Path,
        *,
        page_size: int = PAGE_SIZE,
        num_pages: int = NUM_PAGES,
    ) -> "BackingStore":
        """Load a backing store image from a file.

        Raises:
            BackingStoreError: If the file cannot be read or has the wrong size.

        """
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            msg = f"Cannot read backing store {path}: {exc.strerror or exc}"
            raise BackingStoreError(msg) from exc
        return cls(data, page_size=page_size, num_pages=num_pages)

    @property
    def page_size(self) -> int:
        """Return the page size in bytes."""
        return self._page_size

    @property
    def num_pages(self) -> int:
        """Return the number of pages in the image."""
        return self._num_pages

    def read_page(self, page: int) -> bytes:
        """Return the ``page_size`` bytes of a page.

        Raises:
            BackingStoreError: If the page number is outside the image.

        """
        if not 0 <= page < self._num_pages:
            msg = f"Page {page} outside backing store (0..{self._num_pages - 1})"
            raise BackingStoreError(msg)
        start = page * self._page_size
        return self._data[start : start + self._page_size]

    def __len__(self) -> int:
        """Return the image size in bytes."""
        return len(self._data)
