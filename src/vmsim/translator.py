"""Translator — resolves virtual addresses to physical bytes.

This is the one component with cross-cutting logic.  For each 16-bit
virtual address it:

    1. Splits the address into page number and offset.
    2. Asks the MMU to resolve the page (TLB first, then page table).
    3. On a page fault, reads the page from the backing store, obtains
       a frame from the FIFO allocator (evicting the oldest resident
       page through the MMU if memory is full), loads the frame and
       installs the new mapping.
    4. Fetches the byte at ``frame * page_size + offset`` and reports
       it as a signed 8-bit value.

All state (physical memory, allocator, MMU, counters) is owned by one
``Translator`` instance and lives for the whole run.  Two translators
built from the same configuration and backing store produce identical
results for identical input.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from vmsim.config import SimulatorConfig
from vmsim.logging import Logger
from vmsim.memory.backing_store import BackingStore, BackingStoreError
from vmsim.memory.manager import FrameAllocator
from vmsim.memory.mmu import MMU
from vmsim.memory.physical import PhysicalMemory

_SIGN_BIT = 0x80
_BYTE_RANGE = 0x100


class AddressError(Exception):
    """Raised for a virtual address outside the address space."""


def to_signed_byte(value: int) -> int:
    """Reinterpret an unsigned byte (0..255) as a signed one (-128..127)."""
    return value - _BYTE_RANGE if value & _SIGN_BIT else value


@dataclass(frozen=True)
class Translation:
    """Result of translating one virtual address."""

    virtual_address: int
    page: int
    offset: int
    frame: int
    physical_address: int
    value: int
    tlb_hit: bool
    page_fault: bool


@dataclass
class TranslationStats:
    """Counters accumulated over a run.

    Every translation bumps ``translated`` and exactly one of each pair
    {tlb hit, tlb miss} and {page fault, no fault}.
    """

    translated: int = 0
    page_faults: int = 0
    tlb_hits: int = 0

    @property
    def tlb_misses(self) -> int:
        """Return the number of lookups the TLB could not answer."""
        return self.translated - self.tlb_hits

    @property
    def page_fault_rate(self) -> float:
        """Return faults per translation (0.0 for an empty run)."""
        return self.page_faults / self.translated if self.translated else 0.0

    @property
    def tlb_hit_rate(self) -> float:
        """Return TLB hits per translation (0.0 for an empty run)."""
        return self.tlb_hits / self.translated if self.translated else 0.0

    def record(self, translation: Translation) -> None:
        """Count one finished translation."""
        self.translated += 1
        if translation.page_fault:
            self.page_faults += 1
        if translation.tlb_hit:
            self.tlb_hits += 1


class Translator:
    """Demand-paging address translator with a FIFO TLB and FIFO frames."""

    def __init__(
        self,
        backing_store: BackingStore,
        *,
        config: SimulatorConfig | None = None,
        logger: Logger | None = None,
        debug: bool = False,
    ) -> None:
        """Create a translator with empty memory and an empty TLB.

        Args:
            backing_store: Source of page contents on a fault.
            config: Machine geometry; defaults to the canonical machine.
            logger: Event log; a fresh one is created if omitted.
            debug: Verify TLB and page table coherence after every translation.

        Raises:
            BackingStoreError: If the store's geometry does not match.
            ConfigError: If the configuration is invalid.

        """
        self._config = (config or SimulatorConfig()).validate()
        if (
            backing_store.page_size != self._config.page_size
            or backing_store.num_pages != self._config.num_pages
        ):
            msg = (
                f"Backing store has {backing_store.num_pages} pages of "
                f"{backing_store.page_size} bytes, configuration needs "
                f"{self._config.num_pages} pages of {self._config.page_size} bytes"
            )
            raise BackingStoreError(msg)
        self._store = backing_store
        self._debug = debug
        self._logger = logger if logger is not None else Logger()
        self._memory = PhysicalMemory(
            num_frames=self._config.num_frames,
            page_size=self._config.page_size,
        )
        self._frames = FrameAllocator(total_frames=self._config.num_frames)
        self._mmu = MMU(
            num_pages=self._config.num_pages,
            tlb_capacity=self._config.tlb_capacity,
            logger=self._logger,
        )
        self._stats = TranslationStats()

    @property
    def config(self) -> SimulatorConfig:
        """Return the configuration this translator was built with."""
        return self._config

    @property
    def stats(self) -> TranslationStats:
        """Return the running counters."""
        return self._stats

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def mmu(self) -> MMU:
        """Return the MMU (page table and TLB)."""
        return self._mmu

    @property
    def frames(self) -> FrameAllocator:
        """Return the frame allocator."""
        return self._frames

    @property
    def memory(self) -> PhysicalMemory:
        """Return physical memory."""
        return self._memory

    def split(self, address: int) -> tuple[int, int]:
        """Split a virtual address into (page, offset).

        Raises:
            AddressError: If the address is not an int in the address space.

        """
        if not isinstance(address, int) or isinstance(address, bool):
            msg = f"Virtual address must be an integer, got {address!r}"
            raise AddressError(msg)
        if not 0 <= address < self._config.address_space:
            msg = f"Virtual address {address} outside 0..{self._config.address_space - 1}"
            raise AddressError(msg)
        return divmod(address, self._config.page_size)

    def _evict(self, page: int, frame: int) -> None:
        self._mmu.evict(page)
        self._logger.info(f"evicted page {page} from frame {frame}", source="pager")

    def _service_fault(self, page: int) -> int:
        """Load a page into a frame and return the frame number."""
        data = self._store.read_page(page)
        allocation = self._frames.allocate(page, on_evict=self._evict)
        self._memory.load(frame=allocation.frame, data=data)
        self._mmu.install(page=page, frame=allocation.frame)
        self._logger.info(f"page fault: page {page} -> frame {allocation.frame}", source="pager")
        return allocation.frame

    def translate(self, address: int) -> Translation:
        """Translate one virtual address and fetch its byte.

        Raises:
            AddressError: If the address is outside the address space.
            CoherenceError: In debug mode, if the TLB disagrees with the page table.

        """
        page, offset = self.split(address)
        lookup = self._mmu.resolve(page)
        if lookup is None:
            frame = self._service_fault(page)
            tlb_hit = False
            page_fault = True
        else:
            frame = lookup.frame
            tlb_hit = lookup.tlb_hit
            page_fault = False
        physical_address = frame * self._config.page_size + offset
        result = Translation(
            virtual_address=address,
            page=page,
            offset=offset,
            frame=frame,
            physical_address=physical_address,
            value=to_signed_byte(self._memory.read_byte(physical_address)),
            tlb_hit=tlb_hit,
            page_fault=page_fault,
        )
        self._stats.record(result)
        if self._debug:
            self._mmu.check_coherence()
        return result

    def run(self, addresses: Iterable[int]) -> list[Translation]:
        """Translate a stream of addresses in order."""
        return [self.translate(address) for address in addresses]

    def page_table_snapshot(self) -> dict[int, int]:
        """Return all resident page → frame mappings."""
        return self._mmu.page_table.mappings()

    def tlb_snapshot(self) -> dict[int, int]:
        """Return TLB contents from oldest to newest entry."""
        return self._mmu.tlb.entries()
