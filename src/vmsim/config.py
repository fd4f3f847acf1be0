"""Simulator configuration.

The geometry of the simulated machine is fixed for the whole run: once
a translator has been built from a ``SimulatorConfig`` nothing can
resize physical memory or the TLB underneath it.

Values come from three places, later ones winning:
    1. The defaults below (the canonical 16-bit machine).
    2. Environment variables (``VMSIM_FRAMES``, ``VMSIM_TLB_SIZE``,
       ``VMSIM_BACKING_STORE``).
    3. Explicit overrides, e.g. command-line flags.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

PAGE_SIZE = 256
NUM_PAGES = 256
NUM_FRAMES = 128
TLB_CAPACITY = 16
BACKING_STORE_PATH = Path("BACKING_STORE.bin")

ENV_FRAMES = "VMSIM_FRAMES"
ENV_TLB_SIZE = "VMSIM_TLB_SIZE"
ENV_BACKING_STORE = "VMSIM_BACKING_STORE"


class ConfigError(Exception):
    """Raised when a configuration value is missing or out of range."""


def _parse_positive(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigError(msg) from None
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        raise ConfigError(msg)
    return value


@dataclass(frozen=True)
class SimulatorConfig:
    """Geometry of the simulated machine.

    Attributes:
        num_frames: Physical frames available before FIFO eviction starts.
        tlb_capacity: Maximum number of entries in the translation cache.
        page_size: Bytes per page (and per frame).
        num_pages: Pages in the virtual address space.
        backing_store: Path of the backing store image.

    """

    num_frames: int = NUM_FRAMES
    tlb_capacity: int = TLB_CAPACITY
    page_size: int = PAGE_SIZE
    num_pages: int = NUM_PAGES
    backing_store: Path = BACKING_STORE_PATH

    @property
    def address_space(self) -> int:
        """Return the number of addressable virtual bytes."""
        return self.num_pages * self.page_size

    @property
    def memory_size(self) -> int:
        """Return the size of physical memory in bytes."""
        return self.num_frames * self.page_size

    def validate(self) -> "SimulatorConfig":
        """Check every field and return ``self`` for chaining.

        Raises:
            ConfigError: If any size is not a positive integer, or the frame
                count or TLB capacity exceeds the number of pages.

        """
        for name in ("num_frames", "tlb_capacity", "page_size", "num_pages"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                msg = f"{name} must be a positive integer, got {value!r}"
                raise ConfigError(msg)
        for name in ("num_frames", "tlb_capacity"):
            value = getattr(self, name)
            if value > self.num_pages:
                msg = f"{name} must be at most num_pages ({self.num_pages}), got {value}"
                raise ConfigError(msg)
        return self

    def with_overrides(
        self,
        *,
        num_frames: int | None = None,
        tlb_capacity: int | None = None,
        backing_store: Path | None = None,
    ) -> "SimulatorConfig":
        """Return a copy with any non-None override applied."""
        changes: dict[str, object] = {}
        if num_frames is not None:
            changes["num_frames"] = num_frames
        if tlb_capacity is not None:
            changes["tlb_capacity"] = tlb_capacity
        if backing_store is not None:
            changes["backing_store"] = backing_store
        return replace(self, **changes).validate()

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "SimulatorConfig":
        """Build a configuration from environment variables.

        Unset variables fall back to the defaults.

        Raises:
            ConfigError: If a variable is set but not a positive integer.

        """
        config = cls()
        frames = environ.get(ENV_FRAMES)
        tlb_size = environ.get(ENV_TLB_SIZE)
        store = environ.get(ENV_BACKING_STORE)
        return config.with_overrides(
            num_frames=_parse_positive(ENV_FRAMES, frames) if frames else None,
            tlb_capacity=_parse_positive(ENV_TLB_SIZE, tlb_size) if tlb_size else None,
            backing_store=Path(store) if store else None,
        )
