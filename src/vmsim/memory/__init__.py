"""Memory subsystem — backing store, frames, page table, and TLB.

Re-exports public symbols so callers can write::

    from vmsim.memory import BackingStore, MMU
"""

from vmsim.memory.backing_store import BackingStore, BackingStoreError
from vmsim.memory.manager import Allocation, FrameAllocator
from vmsim.memory.mmu import MMU, CoherenceError, Lookup
from vmsim.memory.physical import PhysicalMemory
from vmsim.memory.tlb import TranslationCache
from vmsim.memory.virtual import PageFaultError, PageTable

__all__ = [
    "MMU",
    "Allocation",
    "BackingStore",
    "BackingStoreError",
    "CoherenceError",
    "FrameAllocator",
    "Lookup",
    "PageFaultError",
    "PageTable",
    "PhysicalMemory",
    "TranslationCache",
]
