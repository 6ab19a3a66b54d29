# alphabet.py
from __future__ import annotations

from collections.abc import Iterator

ALPHA26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Alphabet:
    """Ordered set of distinct symbols; symbol K has index K."""

    def __init__(self, symbols: str = ALPHA26) -> None:
        if not symbols:
            raise ValueError("Alphabet must contain at least one symbol")

        self.symbols: str = symbols
        self.size: int = len(symbols)
        self._index: dict[str, int] = {}
        for i, ch in enumerate(symbols):
            if ch in self._index:
                raise ValueError(f"Duplicate symbol {ch!r} in alphabet")
            self._index[ch] = i

    # symbol → integer signal
    def to_index(self, symbol: str) -> int:
        try:
            return self._index[symbol]
        except KeyError:
            raise ValueError(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < self.size):
            raise ValueError(f"Index {index} out of range 0–{self.size - 1}")
        return self.symbols[index]

    def contains(self, symbol: str) -> bool:
        return symbol in self._index

    __contains__ = contains

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self.symbols!r}>"
