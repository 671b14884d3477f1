"""Match settings loaded from a JSON config file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from engine.rules import DEFAULT_COLS, DEFAULT_CONNECT, DEFAULT_ROWS


class AgentConfig:
    """Search settings for one minimax agent."""

    def __init__(self, payload: Dict[str, object]) -> None:
        self.depth = int(payload.get("depth", 4))
        self.pruning = bool(payload.get("pruning", True))
        self.poll_every_node = bool(payload.get("poll_every_node", False))


class MatchConfig:
    """Container for agent-vs-agent match settings loaded from config file."""

    def __init__(self, payload: Dict[str, object]) -> None:
        board = payload.get("board", {})
        self.rows = int(board.get("rows", DEFAULT_ROWS))
        self.cols = int(board.get("cols", DEFAULT_COLS))
        self.connect = int(board.get("connect", DEFAULT_CONNECT))

        match = payload.get("match", {})
        self.games = int(match.get("games", 2))
        self.alternate_first = bool(match.get("alternate_first", True))
        self.log_every = int(match.get("log_every", 1))

        self.red = AgentConfig(payload.get("red", {}))
        self.yellow = AgentConfig(payload.get("yellow", {}))

        if self.games < 1:
            raise ValueError(f"match.games must be at least 1, got {self.games}")

    @classmethod
    def from_json(cls, path: str | Path) -> "MatchConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)
