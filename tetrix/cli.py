#!/usr/bin/env python3
"""
Tetrix command-line interface.
Plays headless games driven by random input and prints the result.
"""

import argparse
import logging
import random
import sys
import time

from .config import GameConfig
from .controller import PLAYER_ACTIONS, Action
from .exceptions import ConfigurationError
from .game import Game, GameMode
from .pieces import PieceFactory

# Milliseconds of game time between two simulated key presses.
INPUT_INTERVAL_MS = 250


def demo_game(seed=None, steps=500, next_pieces=5, show_every=0):
    """Run a demo game with random input. Returns the finished Game."""
    print("Tetrix Demo")
    print("=" * 50)

    rng = random.Random(seed)
    config = GameConfig(next_pieces_count=next_pieces)
    game = Game(config, PieceFactory(random.Random(seed)))
    game.on_lines_cleared = lambda rows: print(f"Cleared rows {rows}")
    game.start()

    start_time = time.time()
    step = 0
    while step < steps and game.mode is GameMode.PLAYING:
        step += 1
        # Lean on hard drops so the demo actually fills rows.
        if rng.random() < 0.2:
            game.submit(Action.HARD_DROP)
        else:
            game.submit(rng.choice(PLAYER_ACTIONS))
        game.update(INPUT_INTERVAL_MS)

        if show_every and step % show_every == 0:
            print(f"\nStep {step}")
            print(game.controller)

    elapsed = time.time() - start_time
    print()
    print(game.controller)
    print()
    if game.mode is GameMode.GAME_OVER:
        print(f"Game over after {step} steps")
    else:
        print(f"Stopped after {step} steps")
    print(f"Pieces locked: {game.controller.pieces_locked}")
    print(f"Time: {elapsed:.3f}s")
    return game


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Tetrix: a falling-block puzzle simulation")
    parser.add_argument('--verbose', '-v', action='store_true', help='Log simulation events')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    demo_parser = subparsers.add_parser('demo', help='Play a headless game with random input')
    demo_parser.add_argument('--seed', type=int, default=None, help='Random seed')
    demo_parser.add_argument('--steps', type=int, default=500, help='Maximum number of inputs')
    demo_parser.add_argument('--next-pieces', type=int, default=5, help='Length of the next queue (1-5)')
    demo_parser.add_argument('--show-every', type=int, default=0,
                             help='Print the board every N inputs (0 to disable)')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == 'demo':
        try:
            demo_game(args.seed, args.steps, args.next_pieces, args.show_every)
        except ConfigurationError as e:
            print(f"Invalid settings: {e}", file=sys.stderr)
            return 2
    else:
        parser.print_help()
        print("\nFor a quick demo, run: tetrix demo")
    return 0


if __name__ == "__main__":
    sys.exit(main())
