"""Tests for physical memory.

Physical memory is one flat buffer carved into page-sized frames.
"""

import pytest

from vmsim.memory.physical import PhysicalMemory

PAGE_SIZE = 256
NUM_FRAMES = 4


class TestPhysicalMemory:
    """Verify frame loads and byte reads."""

    def test_starts_zeroed(self) -> None:
        """Fresh memory should read as zeros."""
        mem = PhysicalMemory(num_frames=NUM_FRAMES, page_size=PAGE_SIZE)
        assert len(mem) == NUM_FRAMES * PAGE_SIZE
        assert mem.frame(0) == bytes(PAGE_SIZE)

    def test_load_replaces_frame(self) -> None:
        """Loading a frame should replace its whole contents."""
        mem = PhysicalMemory(num_frames=NUM_FRAMES, page_size=PAGE_SIZE)
        mem.load(frame=2, data=bytes([7]) * PAGE_SIZE)
        mem.load(frame=2, data=bytes([9]) * PAGE_SIZE)
        assert mem.frame(2) == bytes([9]) * PAGE_SIZE

    def test_load_leaves_neighbours_alone(self) -> None:
        """Loading one frame should not touch the others."""
        mem = PhysicalMemory(num_frames=NUM_FRAMES, page_size=PAGE_SIZE)
        mem.load(frame=1, data=bytes([0xFF]) * PAGE_SIZE)
        assert mem.frame(0) == bytes(PAGE_SIZE)
        assert mem.frame(2) == bytes(PAGE_SIZE)

    def test_read_byte_uses_flat_address(self) -> None:
        """Physical address is frame * page_size + offset."""
        mem = PhysicalMemory(num_frames=NUM_FRAMES, page_size=PAGE_SIZE)
        mem.load(frame=3, data=bytes(range(PAGE_SIZE)))
        expected = 42
        assert mem.read_byte(3 * PAGE_SIZE + expected) == expected

    def test_wrong_size_load_raises(self) -> None:
        """A load must be exactly one page."""
        mem = PhysicalMemory(num_frames=NUM_FRAMES, page_size=PAGE_SIZE)
        with pytest.raises(ValueError, match="needs 256 bytes"):
            mem.load(frame=0, data=b"short")

    def test_bad_frame_raises(self) -> None:
        """Frames outside memory raise IndexError."""
        mem = PhysicalMemory(num_frames=NUM_FRAMES, page_size=PAGE_SIZE)
        with pytest.raises(IndexError):
            mem.load(frame=NUM_FRAMES, data=bytes(PAGE_SIZE))

    def test_bad_address_raises(self) -> None:
        """Reads past the end of memory raise IndexError."""
        mem = PhysicalMemory(num_frames=NUM_FRAMES, page_size=PAGE_SIZE)
        with pytest.raises(IndexError):
            mem.read_byte(NUM_FRAMES * PAGE_SIZE)
