"""Entry point for playing Battle City."""

import argparse

from battle_city import run_pygame
from battle_city.logging_utils import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Battle City arcade tank game")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="print additional debug information to the console",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed the session RNG")
    parser.add_argument(
        "--enemies", type=int, default=None, help="number of enemy tanks per round"
    )
    parser.add_argument("--mute", action="store_true", help="start with sound muted")
    args = parser.parse_args()
    configure_logging("DEBUG" if args.debug else "INFO")
    run_pygame(seed=args.seed, enemies=args.enemies, mute=args.mute)


if __name__ == "__main__":
    main()
