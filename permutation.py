# permutation.py
from __future__ import annotations

import re

from alphabet import Alphabet


# one parenthesised group, surrounded by optional whitespace
_group_re = re.compile(r"\s*\(([^()\s]*)\)\s*")


def parse_cycles(text: str) -> list[str]:
    """Split cycle notation like ``"(ABCD) (EF)"`` into ``["ABCD", "EF"]``.

    Grammar: ``cycles := group*`` and ``group := '(' symbol+ ')'``, with
    whitespace allowed between groups.
    """
    cycles: list[str] = []
    pos = 0
    while pos < len(text):
        m = _group_re.match(text, pos)
        if m is None:
            if not text[pos:].strip():
                break
            raise ValueError(f"Malformed cycle text at {text[pos:]!r}")
        if not m.group(1):
            raise ValueError(f"Empty cycle in {text!r}")
        cycles.append(m.group(1))
        pos = m.end()
    return cycles


class Permutation:
    """A permutation of the indices of ALPHABET given in cycle notation.

    Symbols that appear in no cycle map to themselves. Whitespace between
    cycles is ignored.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        self.cycles: tuple[str, ...] = tuple(parse_cycles(cycles))

        size = alphabet.size
        self._fwd = list(range(size))
        self._rev = list(range(size))

        seen: set[str] = set()
        for cycle in self.cycles:
            for ch in cycle:
                if ch not in alphabet:
                    raise ValueError(f"Symbol {ch!r} in cycle ({cycle}) not in alphabet")
                if ch in seen:
                    raise ValueError(f"Symbol {ch!r} appears in more than one place")
                seen.add(ch)

            # c0 → c1 → … → cm → c0
            idx = [alphabet.to_index(ch) for ch in cycle]
            for a, b in zip(idx, idx[1:] + idx[:1]):
                self._fwd[a] = b
                self._rev[b] = a

    @property
    def size(self) -> int:
        return self.alphabet.size

    def wrap(self, p: int) -> int:
        """Return P modulo the size of this permutation."""
        return p % self.size

    # ── index space ───────────────────────────────────────────────
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── symbol space ──────────────────────────────────────────────
    def permute_symbol(self, p: str) -> str:
        return self.alphabet.to_symbol(self._fwd[self.alphabet.to_index(p)])

    def invert_symbol(self, c: str) -> str:
        return self.alphabet.to_symbol(self._rev[self.alphabet.to_index(c)])

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(self._fwd[i] != i for i in range(self.size))

    def __repr__(self) -> str:
        return f"<Permutation {' '.join(f'({c})' for c in self.cycles) or 'identity'}>"
