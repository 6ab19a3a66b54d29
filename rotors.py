# rotors.py
from __future__ import annotations

from enum import Enum

from alphabet import Alphabet
from debug import Debug
from permutation import Permutation

debug = Debug()
debug.disable("stepping", "rotor")


class RotorKind(Enum):
    MOVING = "M"
    FIXED = "N"
    REFLECTING = "R"


class Rotor:
    """A permutation mounted on a wheel with a rotational offset.

    One class covers every kind of wheel; behaviour that differs between
    moving rotors, fixed rotors and reflectors is selected on `kind`.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        if notches and kind is not RotorKind.MOVING:
            raise ValueError(f"Rotor {name}: only moving rotors have notches")
        if not set(notches) <= set(perm.alphabet.symbols):
            raise ValueError(f"Rotor {name}: notch characters must be in the alphabet")
        if kind is RotorKind.REFLECTING and not perm.derangement():
            raise ValueError(f"Reflector {name} must not map any symbol to itself")

        self.name = name
        self.permutation = perm
        self.kind = kind
        self.notches = notches
        self._notch_idx = frozenset(perm.alphabet.to_index(ch) for ch in notches)
        self.setting = 0

    # ── constructors per kind ─────────────────────────────────────
    @classmethod
    def moving(cls, name: str, perm: Permutation, notches: str) -> "Rotor":
        return cls(name, perm, RotorKind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.FIXED)

    @classmethod
    def reflector(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.REFLECTING)

    # ── properties ────────────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    @property
    def size(self) -> int:
        return self.permutation.size

    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTING

    def at_notch(self) -> bool:
        match self.kind:
            case RotorKind.MOVING:
                return self.setting in self._notch_idx
            case _:
                return False

    # ── position ──────────────────────────────────────────────────
    def set(self, posn: int | str) -> None:
        """Set the setting to POSN, an index or a symbol of the alphabet."""
        if isinstance(posn, str):
            posn = self.alphabet.to_index(posn)

        match self.kind:
            case RotorKind.REFLECTING:
                if posn != 0:
                    raise ValueError(f"Reflector {self.name} must always be at position 0")
            case _:
                if not (0 <= posn < self.size):
                    raise ValueError(
                        f"Rotor {self.name}: position {posn} out of range 0–{self.size - 1}"
                    )
        self.setting = posn
        debug.log("rotor", f"{self.name} set to {posn}")

    def advance(self) -> None:
        match self.kind:
            case RotorKind.MOVING:
                self.setting = self.permutation.wrap(self.setting + 1)
                debug.log("stepping", f"{self.name} -> {self.setting}")
            case _:
                pass

    # ── signal paths ──────────────────────────────────────────────
    def convert_forward(self, p: int) -> int:
        wrap = self.permutation.wrap
        return wrap(self.permutation.permute(wrap(p + self.setting)) - self.setting)

    def convert_backward(self, e: int) -> int:
        match self.kind:
            case RotorKind.REFLECTING:
                raise ValueError(f"Reflector {self.name} cannot convert backwards ({e})")
            case _:
                wrap = self.permutation.wrap
                return wrap(self.permutation.invert(wrap(e + self.setting)) - self.setting)

    def __repr__(self) -> str:
        extra = f" notches={self.notches!r}" if self.notches else ""
        return f"<Rotor {self.name} {self.kind.name} pos={self.setting}{extra}>"
