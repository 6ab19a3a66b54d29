# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from debug import log_file, trace_sink
from machine import Machine
from suites import SUITES
from utilities import MachineDescription, format_groups, load_config, read_config, setup_machine

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Config:
    """Runtime switches that influence how messages are processed."""

    verbose: bool = False           # per-character trace on stderr
    block: int = 5                  # output group size


# ────────────────────────────────────────────────────────────────────────
#  1. EnigmaSession – a machine plus the line protocol around it
# ────────────────────────────────────────────────────────────────────────


class EnigmaSession:
    """Feeds setup lines and message lines to one machine."""

    def __init__(self, desc: MachineDescription, cfg: Config) -> None:
        self.cfg = cfg
        self.machine: Machine = desc.build(trace_sink(cfg.verbose))
        self.configured = False

    @classmethod
    def from_path(
        cls, path: str | Path | None, cfg: Config, suite: str = "naval"
    ) -> "EnigmaSession":
        """Build from a config file, or the built-in SUITE catalog when
        *path* is None."""
        if path is None:
            if suite not in SUITES:
                raise ValueError(f"Unknown suite {suite!r}")
            return cls(read_config(SUITES[suite]["config"]), cfg)
        return cls(load_config(path), cfg)

    def feed(self, line: str) -> str | None:
        """Handle one input line; return the output line for messages,
        None for setup lines."""
        if line.startswith("*"):
            setup_machine(self.machine, line)
            self.configured = True
            return None
        if not self.configured:
            raise ValueError("no configuration line before message")
        return format_groups(self.machine.convert_message(line), self.cfg.block)

    def process(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            out = self.feed(line.rstrip("\r\n"))
            if out is not None:
                yield out


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with an Enigma machine")
    p.add_argument("config", nargs="?", help="Machine configuration (text, or .json). Default: the built-in --suite catalog.")
    p.add_argument("input", nargs="?", help="Messages to convert. Default: standard input.")
    p.add_argument("output", nargs="?", help="Where converted messages go. Default: standard output.")
    p.add_argument("--verbose", action="store_true", help="Trace every converted character on stderr.")
    p.add_argument("--block", type=int, default=5, help="Output group size. Default: 5")
    p.add_argument(
        "--suite",
        choices=sorted(SUITES),
        default="naval",
        help="Built-in catalog used when no config is given: "
        + ", ".join(f"{k} ({v['name']})" for k, v in sorted(SUITES.items()))
        + ". Default: naval",
    )
    p.add_argument("--log-file", help="Also write log records (and the --verbose trace) to this file.")
    return p.parse_args(argv)


def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> None:
    cfg = Config(verbose=args.verbose, block=args.block)
    if cfg.block < 1:
        raise ValueError("block size must be positive")
    session = EnigmaSession.from_path(args.config, cfg, args.suite)

    src = open(args.input, encoding="utf-8") if args.input else stdin
    try:
        with log_file(args.log_file):
            results = list(session.process(src))
    finally:
        if args.input:
            src.close()

    if args.output:
        Path(args.output).write_text("".join(r + "\n" for r in results), encoding="utf-8")
    else:
        for r in results:
            stdout.write(r + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        run(args, sys.stdin, sys.stdout)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
