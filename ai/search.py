"""Depth-bounded minimax search with alpha-beta pruning over a mutable board."""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from engine.players import Side
from engine.protocol import Move, SearchBoard

LOGGER = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    """How a search ended."""

    OK = "ok"
    NO_LEGAL_MOVE = "no_legal_move"
    CANCELLED = "cancelled"
    INVALID_DEPTH = "invalid_depth"


@dataclass(frozen=True)
class SearchResult:
    """Outcome and statistics of one ``calculate_move`` call."""

    status: SearchStatus
    move: Optional[Move] = None
    score: Optional[int] = None
    move_index: Optional[int] = None
    nodes_expanded: int = 0
    elapsed: float = 0.0
    depth: int = 0

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.OK


class CancellationToken:
    """Thread-safe cancel flag polled by a running search."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class SearchCancelled(Exception):
    """Raised inside the recursion when a token is cancelled mid-subtree."""


class MinimaxCalculator:
    """
    Finds the minimax move for ``max_side`` against ``min_side``.

    A calculator mutates ``board`` in place with apply/undo pairs and always
    restores it before returning. Create a new calculator for every move;
    ``calculate_move`` may only be called once.
    """

    def __init__(
        self,
        board: SearchBoard,
        max_side: Side,
        min_side: Side,
        pruning: bool = True,
        poll_every_node: bool = False,
    ) -> None:
        self.board = board
        self.max_side = max_side
        self.min_side = min_side
        self.pruning = pruning
        self.poll_every_node = poll_every_node

        self.max_strength = board.max_strength()
        self.min_strength = board.min_strength()

        self.move_count = 0
        self.elapsed = 0.0
        self._token: Optional[CancellationToken] = None
        self._used = False

    def calculate_move(self, depth: int, cancel_token: Optional[CancellationToken] = None) -> SearchResult:
        """Search ``depth`` plies ahead and return the best root move."""
        if self._used:
            raise RuntimeError("MinimaxCalculator instances are single-use; create a new one per search.")
        self._used = True
        self._token = cancel_token
        start = time.perf_counter()

        if depth < 1:
            LOGGER.error("Invalid search depth %d for %s; depth must be at least 1.", depth, self.max_side.value)
            return self._finish(SearchStatus.INVALID_DEPTH, start, depth)

        moves = list(self.board.legal_moves(self.max_side))

        best_index = -1
        best_value: float = -math.inf
        alpha = self.min_strength
        beta = self.max_strength

        try:
            for index, move in enumerate(moves):
                if self._cancelled():
                    return self._cancel(start, depth)

                if not self.board.apply(move):
                    LOGGER.debug("Skipping illegal root move %s", move)
                    continue
                self.move_count += 1
                try:
                    value = self._expand_min(depth - 1, alpha, beta)
                finally:
                    self.board.undo()

                if value > best_value:
                    best_value = value
                    best_index = index
                    if self.pruning:
                        alpha = max(alpha, value)

                if self._cancelled():
                    return self._cancel(start, depth)
        except SearchCancelled:
            return self._cancel(start, depth)

        if best_index < 0:
            LOGGER.info("No legal move for %s after trying %d moves.", self.max_side.value, len(moves))
            return self._finish(SearchStatus.NO_LEGAL_MOVE, start, depth)

        result = self._finish(
            SearchStatus.OK,
            start,
            depth,
            move=moves[best_index],
            score=int(best_value),
            move_index=best_index,
        )
        LOGGER.info(
            "Searched depth %d: %d moves tried in %.1f ms, best=%s score=%d",
            depth,
            result.nodes_expanded,
            result.elapsed * 1000.0,
            result.move,
            result.score,
        )
        return result

    def _expand_max(self, depth: int, alpha: int, beta: int) -> int:
        """Score a node where the maximizing side moves."""
        self._poll()
        if depth <= 0 or self.board.is_terminal():
            return self.board.evaluate(self.max_side)

        max_value: Optional[int] = None
        for move in self.board.legal_moves(self.max_side):
            if not self.board.apply(move):
                continue
            self.move_count += 1
            try:
                value = self._expand_min(depth - 1, alpha, beta)
            finally:
                self.board.undo()

            if max_value is None or value > max_value:
                max_value = value
            if self.pruning:
                if max_value >= beta:
                    return max_value
                alpha = max(alpha, max_value)

        if max_value is None:
            # No playable move: score the position as a leaf.
            return self.board.evaluate(self.max_side)
        return max_value

    def _expand_min(self, depth: int, alpha: int, beta: int) -> int:
        """Score a node where the minimizing side moves."""
        self._poll()
        if depth <= 0 or self.board.is_terminal():
            return self.board.evaluate(self.max_side)

        min_value: Optional[int] = None
        for move in self.board.legal_moves(self.min_side):
            if not self.board.apply(move):
                continue
            self.move_count += 1
            try:
                value = self._expand_max(depth - 1, alpha, beta)
            finally:
                self.board.undo()

            if min_value is None or value < min_value:
                min_value = value
            if self.pruning:
                if min_value <= alpha:
                    return min_value
                beta = min(beta, min_value)

        if min_value is None:
            return self.board.evaluate(self.max_side)
        return min_value

    def _cancelled(self) -> bool:
        return self._token is not None and self._token.is_cancelled

    def _poll(self) -> None:
        if self.poll_every_node and self._cancelled():
            raise SearchCancelled()

    def _cancel(self, start: float, depth: int) -> SearchResult:
        result = self._finish(SearchStatus.CANCELLED, start, depth)
        LOGGER.info("Search cancelled after %d moves tried (%.1f ms).", result.nodes_expanded, result.elapsed * 1000.0)
        return result

    def _finish(
        self,
        status: SearchStatus,
        start: float,
        depth: int,
        move: Optional[Move] = None,
        score: Optional[int] = None,
        move_index: Optional[int] = None,
    ) -> SearchResult:
        self.elapsed = time.perf_counter() - start
        return SearchResult(
            status=status,
            move=move,
            score=score,
            move_index=move_index,
            nodes_expanded=self.move_count,
            elapsed=self.elapsed,
            depth=depth,
        )
