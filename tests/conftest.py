"""Shared boards and board proxies for search tests."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pytest

from engine.board import ConnectFourBoard
from engine.players import Side

TreeNode = Tuple[int, list]
TREE_BOUND = 1000


class TreeBoard:
    """
    Explicit game tree. Each node is ``(value, children)``; moves are child
    indices. ``value`` is the strength for the maximizing side and is used
    whenever the search scores that node, so childless interior nodes are
    scored directly. Only nodes listed in ``terminal_paths`` are terminal.
    """

    def __init__(self, root: TreeNode, max_side: Side = Side.RED, terminal_paths: Sequence[Tuple[int, ...]] = ()) -> None:
        self.root = root
        self.max_side = max_side
        self.terminal_paths = set(terminal_paths)
        self.path: List[int] = []

    def _node(self) -> TreeNode:
        node = self.root
        for idx in self.path:
            node = node[1][idx]
        return node

    def legal_moves(self, side: Side) -> List[int]:
        return list(range(len(self._node()[1])))

    def apply(self, move: int) -> bool:
        if not 0 <= move < len(self._node()[1]):
            return False
        self.path.append(move)
        return True

    def undo(self) -> None:
        self.path.pop()

    def is_terminal(self) -> bool:
        return tuple(self.path) in self.terminal_paths

    def evaluate(self, side: Side) -> int:
        value = self._node()[0]
        return value if side is self.max_side else -value

    def min_strength(self) -> int:
        return -TREE_BOUND

    def max_strength(self) -> int:
        return TREE_BOUND

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self.path)


def leaf(value: int) -> TreeNode:
    return (value, [])


def node(*children: Union[TreeNode, int], value: int = 0) -> TreeNode:
    return (value, [leaf(child) if isinstance(child, int) else child for child in children])


def random_tree(rng: np.random.Generator, height: int, max_branching: int = 4) -> TreeNode:
    """Random tree whose interior nodes may have no children."""
    value = int(rng.integers(-100, 101))
    if height == 0:
        return (value, [])
    branching = int(rng.integers(0, max_branching + 1))
    return (value, [random_tree(rng, height - 1, max_branching) for _ in range(branching)])


class InstrumentedBoard:
    """
    Board proxy that records how the search drives a wrapped board.

    ``reject`` makes ``apply`` fail for matching moves. ``on_root_return``
    runs whenever the board returns to its starting position after a root
    move is undone; ``on_evaluate`` runs on every evaluation.
    """

    def __init__(
        self,
        board,
        reject: Optional[Callable[[object], bool]] = None,
        on_root_return: Optional[Callable[[int], None]] = None,
        on_evaluate: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.board = board
        self.reject = reject
        self.on_root_return = on_root_return
        self.on_evaluate = on_evaluate
        self.ply = 0
        self.applies = 0
        self.root_applies = 0
        self.rejected = 0
        self.evaluations = 0
        self.max_eval_ply = 0
        self.root_returns = 0

    def legal_moves(self, side: Side):
        return self.board.legal_moves(side)

    def apply(self, move) -> bool:
        if self.reject is not None and self.reject(move):
            self.rejected += 1
            return False
        if not self.board.apply(move):
            return False
        if self.ply == 0:
            self.root_applies += 1
        self.ply += 1
        self.applies += 1
        return True

    def undo(self) -> None:
        self.board.undo()
        self.ply -= 1
        if self.ply == 0:
            self.root_returns += 1
            if self.on_root_return is not None:
                self.on_root_return(self.root_returns)

    def is_terminal(self) -> bool:
        return self.board.is_terminal()

    def evaluate(self, side: Side) -> int:
        self.evaluations += 1
        self.max_eval_ply = max(self.max_eval_ply, self.ply)
        if self.on_evaluate is not None:
            self.on_evaluate(self.evaluations)
        return self.board.evaluate(side)

    def min_strength(self) -> int:
        return self.board.min_strength()

    def max_strength(self) -> int:
        return self.board.max_strength()

    def snapshot(self):
        return self.board.snapshot()


def random_position(seed: int, plies: int, rows: int = 6, cols: int = 7) -> Tuple[ConnectFourBoard, Side]:
    """Play random legal moves from the empty board; return the board and the side to move."""
    rng = np.random.default_rng(seed)
    board = ConnectFourBoard(rows=rows, cols=cols)
    turn = Side.RED
    for _ in range(plies):
        moves = board.legal_moves(turn)
        if not moves or board.is_terminal():
            break
        board.apply(moves[int(rng.integers(len(moves)))])
        turn = turn.opponent()
    return board, turn


@pytest.fixture
def empty_board() -> ConnectFourBoard:
    return ConnectFourBoard()


@pytest.fixture
def textbook_tree() -> TreeBoard:
    """Classic three-by-three example; minimax value 3 via the first move."""
    return TreeBoard(node(node(3, 12, 8), node(2, 4, 6), node(14, 5, 2)))
