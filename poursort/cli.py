"""
PourSort CLI - Command-line interface for the engine.

Usage:
    poursort generate --level N [--seed S] [--json]   Print a generated level
    poursort profiles                                 List difficulty profiles
    poursort play [--level N] [--seed S]              Play in the terminal
"""

import argparse
import logging
import random
import sys

from .config import get_settings


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="PourSort - Liquid Sorting Puzzle Engine",
        prog="poursort",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate a level")
    generate_parser.add_argument("--level", type=int, default=1, help="Level index")
    generate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    generate_parser.add_argument("--json", action="store_true", help="Print as JSON")

    # Profiles command
    subparsers.add_parser("profiles", help="List difficulty profiles")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--level", type=int, default=1, help="Starting level index")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or get_settings().log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "profiles":
        cmd_profiles(args)
    elif args.command == "play":
        cmd_play(args)
    else:
        parser.print_help()
        sys.exit(1)


def format_level(level) -> str:
    """One line per bottle, colors bottom-to-top."""
    lines = []
    for i, bottle in enumerate(level):
        units = " ".join(u.value for u in bottle.units) or "-"
        mark = " *" if bottle.is_completed else ""
        lines.append(f"[{i:>2}] {units}{mark}")
    return "\n".join(lines)


def cmd_generate(args):
    """Generate and print a level."""
    from .api.schemas import LevelSnapshot
    from .generation import LevelGenerator

    if args.level < 1:
        print("Error: --level must be >= 1")
        sys.exit(1)

    generator = LevelGenerator(settings=get_settings())
    level = generator.generate_for_level(args.level, random.Random(args.seed))

    if args.json:
        print(LevelSnapshot.from_level(level).model_dump_json(indent=2))
        return

    print(f"Level {level.level_index} ({level.profile.name}), {len(level.shuffle_log)} unit moves")
    print(format_level(level))


def cmd_profiles(args):
    """List the difficulty table."""
    from .generation import DEFAULT_PROFILES, shuffle_steps_for_level

    settings = get_settings()
    lower = 1
    for threshold, profile in DEFAULT_PROFILES:
        levels = f"{lower}-{threshold}" if threshold is not None else f"{lower}+"
        steps = shuffle_steps_for_level(profile, lower, settings.steps_per_level)
        print(
            f"{profile.name:<8} levels {levels:<7} bottles {profile.total_bottles:>2} "
            f"(empty {profile.empty_bottles}) shuffle {steps}+"
        )
        if threshold is not None:
            lower = threshold + 1


def cmd_play(args):
    """Interactive terminal session."""
    from .engine_core import GameStatus, InvalidPour
    from .session import SessionManager, InMemoryProgressStore

    if args.level < 1:
        print("Error: --level must be >= 1")
        sys.exit(1)

    manager = SessionManager(settings=get_settings())
    session = manager.create_session(
        seed=args.seed,
        progress=InMemoryProgressStore(args.level),
    )

    print("Commands: <from> <to> | hint | restart | next | quit")
    while True:
        print(f"\nLevel {session.level_index} - pours: {session.pour_count}")
        print(format_level(session.level))
        if session.status == GameStatus.WON:
            print("Solved! Type 'next' or 'restart'.")
        elif session.status == GameStatus.STUCK:
            print("No moves left. Type 'restart'.")

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break

        if line in {"quit", "q", "exit"}:
            break
        if line == "hint":
            move = session.hint()
            print(f"Try {move}" if move else "No moves available")
        elif line == "restart":
            session.restart()
        elif line == "next":
            if session.status != GameStatus.WON:
                print("Finish this level first")
            else:
                session.next_level()
        else:
            parts = line.split()
            if len(parts) != 2 or not all(p.isdigit() for p in parts):
                print("Enter two bottle numbers, e.g. '0 3'")
                continue
            if session.status != GameStatus.PLAYABLE:
                print("Level is over")
                continue
            try:
                result = session.pour(int(parts[0]), int(parts[1]))
            except InvalidPour as e:
                print(f"Can't pour: {e}")
                continue
            print(result.describe())

    manager.end_session(session.session_id)


if __name__ == "__main__":
    main()
