"""Player identities for two-player drop games."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Side(str, Enum):
    """Player side."""

    RED = "red"
    YELLOW = "yellow"

    def opponent(self) -> "Side":
        return Side.YELLOW if self is Side.RED else Side.RED

    @property
    def symbol(self) -> str:
        return SIDE_SYMBOL[self]

    @property
    def code(self) -> int:
        return SIDE_CODE[self]


SIDE_SYMBOL: Dict[Side, str] = {
    Side.RED: "X",
    Side.YELLOW: "O",
}

# Cell values stored in board grids. Zero marks an empty cell.
SIDE_CODE: Dict[Side, int] = {
    Side.RED: 1,
    Side.YELLOW: 2,
}

EMPTY = 0
EMPTY_SYMBOL = "."


def side_from_symbol(symbol: str) -> Side:
    """Return the side drawn with a given one-character symbol."""
    for side, side_symbol in SIDE_SYMBOL.items():
        if symbol.upper() == side_symbol:
            return side
    raise ValueError(f"Unknown side symbol: {symbol!r}")
