"""Base AI interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from engine.players import Side
from engine.protocol import Move, SearchBoard


class BaseAI(ABC):
    """Abstract move-selection contract for one side of the game."""

    def __init__(self, side: Side, name: Optional[str] = None) -> None:
        self.side = side
        self.name = name or side.value

    @abstractmethod
    def choose_move(self, board: SearchBoard) -> Optional[Move]:
        """Choose a legal move for the given board state, or None if there is none."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, side={self.side.value})"
