"""Headless terminal host for the CHIP-8 core."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .config import RunOptions
from .display import render_text
from .errors import Chip8Error
from .runner import run_rom

logger = logging.getLogger(__name__)


def _parse_keys(text: str) -> list[int]:
    """Parse a comma separated list of hex key names, e.g. "1,A,f"."""
    keys = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            key = int(part, 16)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not a hex key: {part!r}")
        if not 0 <= key <= 0xF:
            raise argparse.ArgumentTypeError(f"key out of range: {part!r}")
        keys.append(key)
    return keys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8-run",
        description="Run a CHIP-8 ROM headless and print the final screen",
    )
    parser.add_argument("rom", help="Raw ROM image, loaded at 0x200")
    parser.add_argument("--ticks", type=int, default=60, metavar="N",
                        help="Number of host ticks to run (default: 60)")
    parser.add_argument("--ipt", type=int, default=4, metavar="N",
                        help="Instructions per tick (default: 4)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the RND instruction")
    parser.add_argument("--keys", type=_parse_keys, default=[],
                        help="Hex keys held down for the whole run, e.g. 1,A")
    parser.add_argument("--trace", action="store_true",
                        help="Print executed instructions")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        options = RunOptions(
            instructions_per_tick=args.ipt,
            seed=args.seed,
            trace=args.trace,
        )
    except ValidationError as e:
        parser.error(str(e))

    if args.ticks < 0:
        parser.error(f"--ticks must be >= 0, got {args.ticks}")

    path = Path(args.rom)
    if not path.is_file():
        parser.error(f"ROM not found: {path}")

    logger.debug("Running %s for %d ticks", path, args.ticks)
    try:
        result = run_rom(path.read_bytes(), args.ticks, options=options, keys=args.keys)
    except Chip8Error as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if args.trace:
        for row in result.trace:
            print(f"{row['addr']:03X}: {row['opcode']:04X}")

    print(render_text(result.video))
    final = result.final_state
    regs = " ".join(f"{v:02X}" for v in final["registers"])
    print(
        f"PC={final['pc']:03X} I={final['index']:03X} SP={final['sp']:X} "
        f"DT={final['delay_timer']} ST={final['sound_timer']} V=[{regs}]"
    )

    if result.error:
        print(
            f"error: {result.error.type}: {result.error.message} "
            f"at 0x{result.error.addr:03X} (tick {result.error.tick})",
            file=sys.stderr,
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
