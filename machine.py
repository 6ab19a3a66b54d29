# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet import Alphabet
from debug import Debug
from permutation import Permutation
from rotors import Rotor


class Machine:
    """An Enigma with NUM_ROTORS slots and PAWLS pawls.

    Slot 0 holds the reflector and slot ``num_rotors - 1`` the fast
    rotor. ALL_ROTORS is the catalog the slots are filled from; it is
    kept as a list and slots refer to it by position.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
        debug: Debug | None = None,
    ) -> None:
        if num_rotors <= 1:
            raise ValueError(f"Machine needs more than one rotor slot, got {num_rotors}")
        if not (0 <= pawls < num_rotors):
            raise ValueError(f"Pawls must be in 0–{num_rotors - 1}, got {pawls}")

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self.debug = debug or Debug()

        self._all_rotors: list[Rotor] = list(all_rotors)
        self._ids: dict[str, int] = {}
        for rid, rotor in enumerate(self._all_rotors):
            if rotor.alphabet != alphabet:
                raise ValueError(f"Rotor {rotor.name} does not use the machine alphabet")
            if rotor.name in self._ids:
                raise ValueError(f"Duplicate rotor name {rotor.name!r} in catalog")
            self._ids[rotor.name] = rid

        self._slots: list[int] = []
        self._plugboard = Permutation("", alphabet)

    # ── accessors ───────────────────────────────────────────────

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._pawls

    @property
    def all_rotors(self) -> list[Rotor]:
        return list(self._all_rotors)

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def get_rotor(self, k: int) -> Rotor:
        """Rotor #K; #0 is the reflector, #(num_rotors-1) the fast rotor."""
        if not self._slots:
            raise ValueError("No rotors inserted")
        return self._all_rotors[self._slots[k]]

    def settings(self) -> str:
        """Window letters of slots 1..num_rotors-1."""
        return "".join(
            self.alphabet.to_symbol(self.get_rotor(k).setting)
            for k in range(1, self._num_rotors)
        )

    # ── configuration ───────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with the catalog rotors NAMES (NAMES[0] is the
        reflector). Every inserted rotor starts at setting 0."""
        if len(names) != self._num_rotors:
            raise ValueError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )

        ids: list[int] = []
        for name in names:
            try:
                ids.append(self._ids[name])
            except KeyError:
                raise ValueError(f"Bad rotor name {name!r}") from None

        if len(set(ids)) != len(ids):
            dup = next(n for n in names if names.count(n) > 1)
            raise ValueError(f"Duplicate rotor name {dup!r}")
        if not self._all_rotors[ids[0]].reflecting():
            raise ValueError(f"Reflector in wrong place: {names[0]!r} is not a reflector")

        self._slots = ids
        for rid in ids:
            self._all_rotors[rid].set(0)

    def set_rotors(self, setting: str) -> None:
        """Rotate slots 1.. to SETTING; its first letter is the leftmost
        rotor after the reflector."""
        if not self._slots:
            raise ValueError("No rotors inserted")
        if len(setting) != self._num_rotors - 1:
            raise ValueError(
                f"Setting {setting!r} must have {self._num_rotors - 1} characters"
            )
        for ch in setting:
            if ch not in self.alphabet:
                raise ValueError(f"Setting character {ch!r} not in alphabet")

        for k, ch in enumerate(setting, start=1):
            self.get_rotor(k).set(ch)

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self.alphabet:
            raise ValueError("Plugboard does not use the machine alphabet")
        self._plugboard = plugboard

    # ── stepping logic  ─────────────────────────────────────────

    def _advance_rotors(self) -> None:
        """Advance one key-press, double-stepping where pawls engage."""
        n = self._num_rotors
        rotors = [self.get_rotor(k) for k in range(n)]

        # decide which rotors step before moving any of them
        can_move = [False] * n
        for i in range(1, n):
            if rotors[i].rotates() and rotors[i].at_notch() and rotors[i - 1].rotates():
                can_move[i - 1] = can_move[i] = True
        can_move[n - 1] = True

        for i in range(1, n):
            if can_move[i]:
                rotors[i].advance()

        self.debug.log("stepping", f"positions {[r.setting for r in rotors]}")

    def _apply_rotors(self, c: int) -> int:
        n = self._num_rotors
        for k in range(n - 1, -1, -1):
            c = self.get_rotor(k).convert_forward(c)
        for k in range(1, n):
            c = self.get_rotor(k).convert_backward(c)
        return c

    # ── encipher ────────────────────────────────────────────────

    def convert(self, c: int) -> int:
        """Advance the machine, then return the encoding of index C."""
        self._advance_rotors()
        tracing = self.debug.active("encipher")
        if tracing:
            entry = self.alphabet.to_symbol(c)

        c = self._plugboard.permute(c)
        if tracing:
            plugged = self.alphabet.to_symbol(c)

        c = self._apply_rotors(c)
        out = self._plugboard.permute(c)
        self.debug.log("plugboard", f"{c}->{out}")
        c = out

        if tracing:
            self.debug.trace(
                "encipher",
                f"[{self.settings()}] {entry} -> {plugged} -> {self.alphabet.to_symbol(c)}",
            )
        return c

    def convert_message(self, msg: str) -> str:
        """Encode MSG, ignoring whitespace; rotor state carries over."""
        out: list[str] = []
        for ch in "".join(msg.split()):
            out.append(self.alphabet.to_symbol(self.convert(self.alphabet.to_index(ch))))
        return "".join(out)

    def __repr__(self) -> str:
        names = [self.get_rotor(k).name for k in range(self._num_rotors)] if self._slots else []
        return f"<Machine slots={names} pawls={self._pawls} plugboard={self._plugboard!r}>"
