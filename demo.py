#!/usr/bin/env python3
"""Watch the Logic agent play volumetric Minesweeper."""
import os
import time

from sweeper3d.agents import LogicAgent
from sweeper3d.game import BoardConfig, MinesweeperEnv3D, MinesweeperError


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(config: BoardConfig, delay: float = 0.3, games: int = 5, seed: int = 0):
    """Run demo games with visualization."""
    env = MinesweeperEnv3D(config=config, render_mode="ansi")
    agent = LogicAgent(config.bounds, seed=seed)

    print(
        f"Board: {config.width}x{config.height}x{config.depth} with {config.mine_count} mines "
        f"({100*config.mine_count/config.total_cells:.1f}% density)"
    )
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, _ = env.reset(seed=seed + game)
        agent.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            x, y, z = env.action_to_position(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({x}, {y}, {z})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=5, help="Board size (NxNxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~8%% of cells)")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first game")
    args = parser.parse_args()
    if args.games < 1:
        parser.error("--games must be at least 1")

    try:
        config = BoardConfig.cube(args.size, args.mines)
        demo(config, delay=args.delay, games=args.games, seed=args.seed)
    except MinesweeperError as exc:
        parser.error(str(exc))
