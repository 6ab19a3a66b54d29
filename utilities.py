# utilities.py
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from alphabet import Alphabet
from debug import Debug
from machine import Machine
from permutation import Permutation
from rotors import Rotor, RotorKind

debug = Debug()
debug.disable("config")

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────

_cycle_re = re.compile(r"^\(.+\)$")
_FORBIDDEN_IN_ALPHABET = set("*()")


def is_cycle_token(token: str) -> bool:
    """True for tokens such as ``(AB)`` or ``(AB)(CD)``."""
    return bool(_cycle_re.match(token))


def format_groups(msg: str, block: int = 5) -> str:
    """Split MSG into groups of BLOCK symbols separated by one space."""
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))


# ────────────────────────────────────────────────────────────────────────
#  1. Machine description
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class RotorDescriptor:
    """One catalog entry: name, kind, wiring in cycle notation, notches."""

    name: str
    kind: RotorKind
    cycles: str = ""
    notches: str = ""

    def build(self, alphabet: Alphabet) -> Rotor:
        return Rotor(self.name, Permutation(self.cycles, alphabet), self.kind, self.notches)


@dataclass(slots=True)
class MachineDescription:
    alphabet: str
    num_rotors: int
    pawls: int
    rotors: List[RotorDescriptor] = field(default_factory=list)

    def build(self, trace: Debug | None = None) -> Machine:
        """Instantiate the alphabet, every catalog rotor and the machine."""
        alpha = Alphabet(self.alphabet)
        catalog = [r.build(alpha) for r in self.rotors]
        debug.log("config", f"built {len(catalog)} rotors over {alpha.size} symbols")
        return Machine(alpha, self.num_rotors, self.pawls, catalog, trace)


def _kind_from_type(name: str, type_token: str) -> Tuple[RotorKind, str]:
    """Split a type token like ``MQ`` into (kind, notches)."""
    try:
        kind = RotorKind(type_token[:1])
    except ValueError:
        raise ValueError(f"Wrong rotor type {type_token!r} for rotor {name}") from None
    notches = type_token[1:]
    if notches and kind is not RotorKind.MOVING:
        raise ValueError(f"Only moving rotors take notches: {name} {type_token}")
    return kind, notches


def _check_alphabet(alpha: str) -> None:
    if not alpha:
        raise ValueError("No characters in config")
    if set(alpha) & _FORBIDDEN_IN_ALPHABET:
        raise ValueError("Invalid characters in config alphabet")


def _as_count(token: str | int, what: str) -> int:
    if isinstance(token, bool):
        raise ValueError(f"Expected an integer for {what}, got {token!r}")
    try:
        return int(token)
    except (TypeError, ValueError):
        raise ValueError(f"Expected an integer for {what}, got {token!r}") from None


def _as_text(value: object, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Expected a string for {what}, got {value!r}")
    return value


# ────────────────────────────────────────────────────────────────────────
#  2. Configuration readers
# ────────────────────────────────────────────────────────────────────────


def read_config(text: str) -> MachineDescription:
    """Parse the whitespace-separated configuration format::

        ALPHABET
        NUM_ROTORS PAWLS
        NAME TYPE (CYCLE) (CYCLE) ...

    TYPE is ``M<notches>``, ``N`` or ``R``.
    """
    tokens = text.split()
    if len(tokens) < 3:
        raise ValueError("configuration file truncated")

    alpha = tokens[0]
    _check_alphabet(alpha)
    desc = MachineDescription(
        alpha,
        _as_count(tokens[1], "number of rotors"),
        _as_count(tokens[2], "number of pawls"),
    )

    pos = 3
    while pos < len(tokens):
        if pos + 1 >= len(tokens):
            raise ValueError(f"bad rotor description for {tokens[pos]!r}")
        name, type_token = tokens[pos], tokens[pos + 1]
        pos += 2

        cycles: List[str] = []
        while pos < len(tokens) and is_cycle_token(tokens[pos]):
            cycles.append(tokens[pos])
            pos += 1

        kind, notches = _kind_from_type(name, type_token)
        desc.rotors.append(RotorDescriptor(name, kind, " ".join(cycles), notches))
        debug.log("config", f"rotor {name} {kind.name} notches={notches!r}")

    return desc


def load_json_config(path: str | Path) -> MachineDescription:
    """Read the same description from JSON::

        {"alphabet": "...", "num_rotors": 5, "pawls": 3,
         "rotors": {"I": {"type": "M", "notches": "Q", "cycles": "(..)"}}}
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("JSON config must be an object")
    required = {"alphabet", "num_rotors", "pawls", "rotors"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")

    alpha = _as_text(data["alphabet"], "alphabet")
    _check_alphabet(alpha)
    desc = MachineDescription(
        alpha,
        _as_count(data["num_rotors"], "number of rotors"),
        _as_count(data["pawls"], "number of pawls"),
    )

    rotors: Dict[str, dict] = data["rotors"]
    if not isinstance(rotors, dict):
        raise ValueError("'rotors' must map rotor names to descriptions")
    for name, entry in rotors.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Description of rotor {name} must be an object")
        kind, notches = _kind_from_type(name, _as_text(entry.get("type", ""), f"type of {name}"))
        notches = notches or _as_text(entry.get("notches", ""), f"notches of {name}")
        cycles = _as_text(entry.get("cycles", ""), f"cycles of {name}")
        desc.rotors.append(RotorDescriptor(name, kind, cycles, notches))
    return desc


def load_config(path: str | Path) -> MachineDescription:
    """Pick the reader by file suffix (``.json`` or text)."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_json_config(path)
    return read_config(path.read_text(encoding="utf-8"))


# ────────────────────────────────────────────────────────────────────────
#  3. Setup lines
# ────────────────────────────────────────────────────────────────────────


def parse_setup(line: str, num_rotors: int) -> Tuple[List[str], str, str]:
    """Split ``* B Beta III IV I AXLE (HQ) (EX)`` into
    ``(rotor names, setting, plugboard cycles)``."""
    tokens = line.split()
    if not tokens or tokens[0] != "*":
        raise ValueError(f"Setup line must start with '*': {line!r}")

    tokens = tokens[1:]
    if len(tokens) < num_rotors + 1:
        raise ValueError("settings poorly formatted")

    names = tokens[:num_rotors]
    setting = tokens[num_rotors]
    plugs = tokens[num_rotors + 1 :]
    for tok in plugs:
        if not is_cycle_token(tok):
            raise ValueError(f"Unexpected token {tok!r} in settings")
    return names, setting, " ".join(plugs)


def setup_machine(machine: Machine, line: str) -> None:
    """Apply a ``*`` setup line to MACHINE."""
    names, setting, plugs = parse_setup(line, machine.num_rotors)
    machine.insert_rotors(names)
    machine.set_rotors(setting)
    machine.set_plugboard(Permutation(plugs, machine.alphabet))
    debug.log("config", f"slots={names} setting={setting} plugboard={plugs or '-'}")


__all__ = [
    "MachineDescription",
    "RotorDescriptor",
    "format_groups",
    "load_config",
    "read_config",
    "setup_machine",
]
