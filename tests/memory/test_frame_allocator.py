"""Tests for the FIFO frame allocator.

Frames are handed out from the free list first.  Once memory is full,
the frame filled longest ago is reclaimed, and its previous occupant
is reported to the eviction handler before the frame changes hands.
"""

import pytest

from vmsim.memory.manager import Allocation, FrameAllocator

TOTAL_FRAMES = 3


class _Recorder:
    """Collect (page, frame) pairs passed to the eviction handler."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def __call__(self, page: int, frame: int) -> None:
        self.calls.append((page, frame))


class TestFrameAllocatorCreation:
    """Verify the initial state."""

    def test_all_frames_free(self) -> None:
        """Every frame should start on the free list."""
        alloc = FrameAllocator(total_frames=TOTAL_FRAMES)
        assert alloc.total_frames == TOTAL_FRAMES
        assert alloc.free_frames == TOTAL_FRAMES
        assert alloc.used_frames == 0
        assert alloc.fill_order() == []

    def test_no_victim_while_free(self) -> None:
        """There is no victim until memory is full."""
        alloc = FrameAllocator(total_frames=TOTAL_FRAMES)
        assert alloc.next_victim() is None

    def test_zero_frames_rejected(self) -> None:
        """An allocator needs at least one frame."""
        with pytest.raises(ValueError, match="at least one frame"):
            FrameAllocator(total_frames=0)


class TestFreeListAllocation:
    """Verify allocation while free frames remain."""

    def test_frames_fill_in_index_order(self) -> None:
        """Free frames are used lowest-first."""
        alloc = FrameAllocator(total_frames=TOTAL_FRAMES)
        recorder = _Recorder()
        frames = [alloc.allocate(page, on_evict=recorder).frame for page in (10, 20, 30)]
        assert frames == [0, 1, 2]
        assert recorder.calls == []

    def test_records_occupant(self) -> None:
        """Each allocated frame should remember its page."""
        alloc = FrameAllocator(total_frames=TOTAL_FRAMES)
        page = 42
        result = alloc.allocate(page, on_evict=_Recorder())
        assert result == Allocation(frame=0, evicted_page=None)
        assert alloc.occupant(0) == page
        assert alloc.occupant(1) is None

    def test_used_frames_counts_fills(self) -> None:
        """used_frames should count frames taken from the free list."""
        alloc = FrameAllocator(total_frames=TOTAL_FRAMES)
        alloc.allocate(1, on_evict=_Recorder())
        alloc.allocate(2, on_evict=_Recorder())
        expected_used = 2
        assert alloc.used_frames == expected_used
        assert alloc.free_frames == TOTAL_FRAMES - expected_used


class TestFIFOEviction:
    """Verify victim selection once memory is full."""

    def _full(self) -> FrameAllocator:
        alloc = FrameAllocator(total_frames=TOTAL_FRAMES)
        for page in (10, 20, 30):
            alloc.allocate(page, on_evict=_Recorder())
        return alloc

    def test_reclaims_first_filled_frame(self) -> None:
        """The (F+1)-th page should evict the first-filled frame."""
        alloc = self._full()
        recorder = _Recorder()
        result = alloc.allocate(40, on_evict=recorder)
        expected_evicted = 10
        assert result == Allocation(frame=0, evicted_page=expected_evicted)
        assert recorder.calls == [(expected_evicted, 0)]

    def test_victims_follow_fill_order(self) -> None:
        """Successive evictions walk the fill order."""
        alloc = self._full()
        recorder = _Recorder()
        for page in (40, 50, 60, 70):
            alloc.allocate(page, on_evict=recorder)
        assert recorder.calls == [(10, 0), (20, 1), (30, 2), (40, 0)]

    def test_reused_frame_moves_to_tail(self) -> None:
        """A refilled frame goes to the back of the queue."""
        alloc = self._full()
        alloc.allocate(40, on_evict=_Recorder())
        assert alloc.fill_order() == [1, 2, 0]
        assert alloc.next_victim() == 1

    def test_handler_sees_old_occupant(self) -> None:
        """The handler runs before the occupant record changes."""
        alloc = self._full()
        seen: list[int | None] = []

        def handler(_page: int, frame: int) -> None:
            seen.append(alloc.occupant(frame))

        alloc.allocate(40, on_evict=handler)
        expected_old = 10
        assert seen == [expected_old]
        expected_new = 40
        assert alloc.occupant(0) == expected_new

    def test_used_frames_stops_at_total(self) -> None:
        """Reclaiming frames does not count as new use."""
        alloc = self._full()
        alloc.allocate(40, on_evict=_Recorder())
        assert alloc.used_frames == TOTAL_FRAMES
        assert alloc.free_frames == 0
