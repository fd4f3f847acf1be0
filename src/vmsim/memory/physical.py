"""Physical memory — a flat array of page-sized frames.

Frame ``f`` occupies bytes ``f * page_size`` up to (but not including)
``(f + 1) * page_size`` of one contiguous bytearray, so a physical
address is simply an index into that buffer.
"""


class PhysicalMemory:
    """Simulated RAM divided into fixed-size frames."""

    def __init__(self, *, num_frames: int, page_size: int) -> None:
        """Create zero-filled physical memory.

        Args:
            num_frames: Number of frames.
            page_size: Bytes per frame.

        """
        self._num_frames = num_frames
        self._page_size = page_size
        self._data = bytearray(num_frames * page_size)

    @property
    def num_frames(self) -> int:
        """Return the number of frames."""
        return self._num_frames

    @property
    def page_size(self) -> int:
        """Return the frame size in bytes."""
        return self._page_size

    def _check_frame(self, frame: int) -> None:
        if not 0 <= frame < self._num_frames:
            msg = f"Frame {frame} out of range (0..{self._num_frames - 1})"
            raise IndexError(msg)

    def load(self, *, frame: int, data: bytes) -> None:
        """Replace the whole contents of a frame.

        Raises:
            IndexError: If the frame does not exist.
            ValueError: If ``data`` is not exactly one page long.

        """
        self._check_frame(frame)
        if len(data) != self._page_size:
            msg = f"Frame load needs {self._page_size} bytes, got {len(data)}"
            raise ValueError(msg)
        start = frame * self._page_size
        self._data[start : start + self._page_size] = data

    def frame(self, frame: int) -> bytes:
        """Return a copy of a frame's contents."""
        self._check_frame(frame)
        start = frame * self._page_size
        return bytes(self._data[start : start + self._page_size])

    def read_byte(self, physical_address: int) -> int:
        """Return the unsigned byte stored at a physical address."""
        if not 0 <= physical_address < len(self._data):
            msg = f"Physical address {physical_address} out of range"
            raise IndexError(msg)
        return self._data[physical_address]

    def __len__(self) -> int:
        """Return the size of physical memory in bytes."""
        return len(self._data)
