# debug.py
from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Dict

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# every machine part that may emit trace records
COMPONENTS = (
    "plugboard",
    "rotor",
    "stepping",
    "encipher",
    "config",
)


class Debug:
    """Per-component switchboard in front of a named `logging` logger.

    The root handler is configured once per process, on the first
    instance; later instances only pick their logger and component map.
    """

    _root_configured: bool = False          # class-level guard

    def __init__(self, name: str = "ENIGMA") -> None:
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format=LOG_FORMAT,
                datefmt=DATE_FORMAT,
                handlers=[logging.StreamHandler(sys.stderr)],
            )
            Debug._root_configured = True

        self.logger = logging.getLogger(name)
        self.enabled = True        # global switch
        self.components: Dict[str, bool] = dict.fromkeys(COMPONENTS, False)

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def trace(self, component: str, message: str) -> None:
        """Emit *message* untagged; used for operator-facing traces."""
        if self.active(component):
            self.logger.debug("%s", message)

    def active(self, component: str) -> bool:
        return self.enabled and self.components.get(component, False)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> "Debug":
        for c in components:
            self._require(c)
            self.components[c] = True
        return self

    def disable(self, *components: str) -> "Debug":
        for c in components:
            self._require(c)
            self.components[c] = False
        return self

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug {self.logger.name} enabled={self.enabled} active={active}>"


@contextmanager
def log_file(path: str | Path | None) -> Iterator[None]:
    """Copy every record to *path* for the duration of the block.

    The handler sits on the root logger, next to the stderr handler
    installed by the first `Debug`; None leaves logging untouched.
    """
    if path is None:
        yield
        return

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        yield
    finally:
        root.removeHandler(handler)
        handler.close()


def trace_sink(verbose: bool) -> Debug:
    """Return a `Debug` for a machine, with the per-character trace on
    when *verbose* is set."""
    sink = Debug("ENIGMA.trace")
    if verbose:
        sink.enable("encipher")
    return sink
