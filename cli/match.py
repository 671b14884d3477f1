"""CLI command to run a minimax-vs-minimax Connect Four series."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from ai.config import MatchConfig
from arena.match_runner import MatchReport, MatchRunner


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an AI-vs-AI Connect Four series.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/match_config.json",
        help="Path to match config JSON",
    )
    parser.add_argument("--games", type=int, default=None, help="Override number of games")
    parser.add_argument("--red-depth", type=int, default=None, help="Override red minimax depth")
    parser.add_argument("--yellow-depth", type=int, default=None, help="Override yellow minimax depth")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def format_report(report: MatchReport) -> str:
    lines = [f"Red wins: {report.red_wins}  Yellow wins: {report.yellow_wins}  Draws: {report.draws}"]
    if report.aborted:
        lines.append(f"Aborted: {report.aborted}")
    for side_name, stats in report.stats.items():
        lines.append(
            f"{side_name}: nodes={stats['total_nodes_expanded']} "
            f"time={stats['total_elapsed']:.3f}s searches={stats['total_calls']}"
        )
    return "\n".join(lines)


def main(argv: Optional[list[str]] = None) -> MatchReport:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = MatchConfig.from_json(args.config)
    if args.games is not None:
        config.games = args.games
    if args.red_depth is not None:
        config.red.depth = args.red_depth
    if args.yellow_depth is not None:
        config.yellow.depth = args.yellow_depth

    report = MatchRunner(config).run()
    print(format_report(report))
    return report


if __name__ == "__main__":
    main()
