"""Command-line front end for the translator.

The translator itself never does I/O.  This module is the thin wrapper
that connects it to the outside world:

    1. **Read** — parse the address file (one decimal integer per line).
    2. **Translate** — run every address through a fresh translator.
    3. **Print** — one line per address, then a summary block.

The input file is parsed completely before any translation starts, and
output is only written once the whole run has succeeded, so a fatal
error never leaves partial results on stdout.

The helpers (``read_addresses``, ``format_translation``,
``format_summary``) are pure and testable; ``main()`` is the
``vmsim`` console entry point.
"""

import argparse
import os
import sys
from pathlib import Path

from vmsim.config import ConfigError, SimulatorConfig
from vmsim.logging import Logger, LogLevel
from vmsim.memory.backing_store import BackingStore, BackingStoreError
from vmsim.translator import AddressError, Translation, TranslationStats, Translator

_EXIT_OK = 0
_EXIT_FATAL = 1


def parse_addresses(lines: list[str], *, limit: int) -> list[int]:
    """Parse decimal addresses, one per line, skipping blank lines.

    Args:
        lines: Raw input lines.
        limit: Size of the address space; addresses must be below it.

    Raises:
        AddressError: On a non-integer or out-of-range line (1-based).

    """
    addresses: list[int] = []
    for lineno, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        if not (text.isascii() and text.isdigit()):
            msg = f"line {lineno}: {text!r} is not a decimal address"
            raise AddressError(msg)
        address = int(text)
        if not 0 <= address < limit:
            msg = f"line {lineno}: address {address} outside 0..{limit - 1}"
            raise AddressError(msg)
        addresses.append(address)
    return addresses


def read_addresses(path: Path, *, limit: int) -> list[int]:
    """Read and parse an address file.

    Raises:
        AddressError: If the file cannot be read or holds a bad line.

    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Address file {path} is not valid UTF-8: {exc.reason} at byte {exc.start}"
        raise AddressError(msg) from exc
    except OSError as exc:
        msg = f"Cannot read address file {path}: {exc.strerror or exc}"
        raise AddressError(msg) from exc
    return parse_addresses(text.splitlines(), limit=limit)


def format_translation(translation: Translation) -> str:
    """Format one translation as a single output line."""
    return (
        f"Virtual address: {translation.virtual_address} "
        f"Physical address: {translation.physical_address} "
        f"Value: {translation.value}"
    )


def format_summary(stats: TranslationStats) -> str:
    """Format the end-of-run statistics block."""
    return "\n".join(
        [
            f"Number of Translated Addresses = {stats.translated}",
            f"Page Faults = {stats.page_faults}",
            f"Page Fault Rate = {stats.page_fault_rate:.3f}",
            f"TLB Hits = {stats.tlb_hits}",
            f"TLB Hit Rate = {stats.tlb_hit_rate:.3f}",
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``vmsim`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="vmsim",
        description="Translate 16-bit virtual addresses through a TLB and page table.",
    )
    parser.add_argument("addresses", type=Path, help="file of decimal virtual addresses")
    parser.add_argument("--backing-store", type=Path, default=None, help="backing store image")
    parser.add_argument("--frames", type=int, default=None, help="number of physical frames")
    parser.add_argument("--tlb-size", type=int, default=None, help="TLB capacity")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="write the event log to stderr and check TLB coherence after each address",
    )
    return parser


def build_translator(config: SimulatorConfig, *, verbose: bool = False) -> Translator:
    """Load the configured backing store and return a fresh translator.

    Without ``verbose`` only ERROR entries are logged, so a long run does
    not accumulate per-fault log entries nobody will print.  With it, the
    full DEBUG log is kept and coherence is checked after every address.
    """
    store = BackingStore.from_path(
        config.backing_store,
        page_size=config.page_size,
        num_pages=config.num_pages,
    )
    logger = Logger(min_level=LogLevel.DEBUG if verbose else LogLevel.ERROR)
    return Translator(store, config=config, logger=logger, debug=verbose)


def main(argv: list[str] | None = None) -> int:
    """Run the simulator over an address file.

    Returns:
        The process exit status.

    """
    args = build_parser().parse_args(argv)
    try:
        config = SimulatorConfig.from_env(os.environ).with_overrides(
            num_frames=args.frames,
            tlb_capacity=args.tlb_size,
            backing_store=args.backing_store,
        )
        addresses = read_addresses(args.addresses, limit=config.address_space)
        translator = build_translator(config, verbose=args.verbose)
        results = translator.run(addresses)
    except (AddressError, BackingStoreError, ConfigError) as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return _EXIT_FATAL

    lines = [format_translation(t) for t in results]
    lines.append(format_summary(translator.stats))
    print("\n".join(lines))  # noqa: T201
    if args.verbose:
        for entry in translator.logger.entries:
            print(entry, file=sys.stderr)  # noqa: T201
    return _EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
