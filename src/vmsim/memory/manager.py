"""Frame allocator — hands out physical frames in FIFO order.

Physical memory starts with every frame on the **free list**.  Each
page fault takes one frame:

    - While free frames remain, the lowest-numbered one is used.
    - Once all frames are occupied, the frame that was filled longest
      ago (the head of the **fill-order queue**) is reclaimed.

Before a reclaimed frame changes hands, the allocator tells its owner
which page is being thrown out through an eviction handler.  The new
occupant is only recorded after that handler returns, so a frame can
never be reported as holding two pages at once.

Both queues are deques of small integers, with one occupancy slot
per frame recording which page lives there.
"""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

# Called as handler(victim_page, frame) before a reclaimed frame is reused.
EvictionHandler = Callable[[int, int], None]


@dataclass(frozen=True)
class Allocation:
    """Result of allocating a frame for a page.

    Attributes:
        frame: The frame the page should be loaded into.
        evicted_page: The page that previously occupied the frame, or
            None if the frame came from the free list.

    """

    frame: int
    evicted_page: int | None = None


class FrameAllocator:
    """Track frame occupancy and choose FIFO victims."""

    def __init__(self, *, total_frames: int) -> None:
        """Create an allocator with every frame free.

        Args:
            total_frames: Number of physical frames to manage.

        """
        if total_frames <= 0:
            msg = f"Frame allocator needs at least one frame, got {total_frames}"
            raise ValueError(msg)
        self._total_frames = total_frames
        self._free: deque[int] = deque(range(total_frames))
        self._fill_order: deque[int] = deque()
        self._occupants: list[int | None] = [None] * total_frames
        self._used_frames = 0

    @property
    def total_frames(self) -> int:
        """Return the total number of physical frames."""
        return self._total_frames

    @property
    def free_frames(self) -> int:
        """Return the number of frames never yet filled."""
        return len(self._free)

    @property
    def used_frames(self) -> int:
        """Return how many distinct frames have ever been filled."""
        return self._used_frames

    def occupant(self, frame: int) -> int | None:
        """Return the page currently held by a frame, or None."""
        return self._occupants[frame]

    def fill_order(self) -> list[int]:
        """Return occupied frames from next victim to most recently filled."""
        return list(self._fill_order)

    def next_victim(self) -> int | None:
        """Return the frame the next allocation would reclaim.

        None while free frames remain.
        """
        if self._free:
            return None
        return self._fill_order[0]

    def allocate(self, page: int, *, on_evict: EvictionHandler) -> Allocation:
        """Pick a frame for ``page`` and record it as the new occupant.

        Args:
            page: The page about to be loaded.
            on_evict: Invoked with ``(victim_page, frame)`` when an occupied
                frame is reclaimed, before its occupancy changes.

        Returns:
            The chosen frame and the page it displaced, if any.

        """
        evicted: int | None = None
        if self._free:
            frame = self._free.popleft()
            self._used_frames += 1
        else:
            frame = self._fill_order.popleft()
            evicted = self._occupants[frame]
            if evicted is not None:
                on_evict(evicted, frame)
        self._occupants[frame] = page
        self._fill_order.append(frame)
        return Allocation(frame=frame, evicted_page=evicted)
