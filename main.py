#!/usr/bin/env python3
"""
sweeper3d - Main entry point.

Usage:
    python main.py play [--preset NAME | --size W H D --mines N] [--seed S]
    python main.py evaluate [--agent {random,logic}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
from typing import List, Optional

from sweeper3d.agents import LogicAgent, RandomAgent
from sweeper3d.game import (
    PRESETS,
    BoardConfig,
    Coordinate,
    GameSession,
    MinesweeperError,
    RevealKind,
    SessionStatus,
)
from sweeper3d.game.environment import render_layers
from sweeper3d.training import Evaluator

HELP_TEXT = "Commands: r X Y Z (reveal), f X Y Z (flag), c X Y Z (chord), n (new round), q (quit)"


def board_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from --preset or --size/--mines."""
    if args.size:
        width, height, depth = args.size
        if args.mines is not None:
            return BoardConfig(width, height, depth, args.mines)
        room = BoardConfig(width, height, depth, 0).max_safe_mines
        return BoardConfig(width, height, depth, min(max(1, width * height * depth // 10), room))
    return PRESETS[args.preset]


def parse_coordinate(parts: List[str]) -> Optional[Coordinate]:
    if len(parts) != 3:
        return None
    try:
        return Coordinate(*(int(p) for p in parts))
    except ValueError:
        return None


def play(args: argparse.Namespace) -> None:
    """Play a game interactively in the terminal."""
    session = GameSession(board_config(args), seed=args.seed)
    print(f"{session!r} seed={session.seed}")
    print(HELP_TEXT)

    while True:
        counts = session.counts()
        print()
        print(render_layers(session.get_observation()))
        print(
            f"\nRevealed {counts.revealed_count}/{counts.total_cells - counts.mine_count} "
            f"| Flags {counts.flagged_count}/{counts.mine_count} | {session.status.name}"
        )
        if session.is_over:
            print("*** WIN! ***" if session.status == SessionStatus.WON else "*** LOST (hit mine) ***")

        try:
            line = input("> ").strip().split()
        except EOFError:
            return
        if not line:
            continue
        command, rest = line[0].lower(), line[1:]

        if command == "q":
            return
        if command == "n":
            session.reset()
            print(f"New round, seed={session.seed}")
            continue

        c = parse_coordinate(rest)
        if c is None or command not in ("r", "f", "c"):
            print(HELP_TEXT)
            continue

        try:
            if command == "f":
                state = session.toggle_flag(c)
                print(f"{tuple(c)} is now {state.name.lower()}")
            else:
                outcome = session.reveal(c) if command == "r" else session.chord(c)
                if outcome.kind == RevealKind.REVEALED:
                    print(f"Revealed {len(outcome.coordinates)} cells")
                elif outcome.kind != RevealKind.EXPLODED:
                    print(outcome.kind.name.replace("_", " ").lower())
        except MinesweeperError as exc:
            print(f"Error: {exc}")


def make_agent(name: str, config: BoardConfig, seed: Optional[int]):
    if name == "random":
        return RandomAgent(config.bounds, seed=seed)
    return LogicAgent(config.bounds, seed=seed)


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific agent."""
    config = board_config(args)
    agent = make_agent(args.agent, config, args.seed)
    evaluator = Evaluator(config, num_episodes=args.games, base_seed=args.seed or 0)

    print(f"\nEvaluating {args.agent} over {args.games} games...")
    results = evaluator.evaluate(agent)
    print(f"Results for {args.agent}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents."""
    config = board_config(args)
    agents = {name.capitalize(): make_agent(name, config, args.seed) for name in ("random", "logic")}

    evaluator = Evaluator(config, num_episodes=args.games, base_seed=args.seed or 0)
    results = evaluator.compare(agents)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10}")
    print("-" * 50)
    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f}"
        )


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="beginner", help="Difficulty preset"
    )
    parser.add_argument(
        "--size", type=int, nargs=3, metavar=("W", "H", "D"), help="Board size (overrides --preset)"
    )
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (with --size)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="sweeper3d - volumetric Minesweeper")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--agent", choices=["random", "logic"], default="logic", help="Agent to evaluate"
    )
    eval_parser.add_argument("--games", type=int, default=100, help="Number of games to play")

    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    add_board_arguments(compare_parser)
    compare_parser.add_argument("--games", type=int, default=100, help="Number of games per agent")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "evaluate":
            evaluate(args)
        elif args.command == "compare":
            compare(args)
        else:
            parser.print_help()
    except (MinesweeperError, ValueError) as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
