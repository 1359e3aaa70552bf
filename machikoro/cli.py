"""
Machikoro CLI - Command-line interface for the engine.

Usage:
    machikoro cards [--version N]       List the cards of a ruleset
    machikoro validate                  Check the card registry tables
    machikoro simulate [options]        Play a match with random legal moves
    machikoro serve [--host H] [--port P]  Run the HTTP API
"""

import argparse
import json
import logging
import random
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Machikoro - deterministic Machi Koro rules engine",
        prog="machikoro",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Cards command
    cards_parser = subparsers.add_parser("cards", help="List the cards of a ruleset")
    cards_parser.add_argument("--version", type=int, choices=[1, 2], default=1, dest="game_version")

    # Validate command
    subparsers.add_parser("validate", help="Check the card registry tables")

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Play a match with random legal moves")
    sim_parser.add_argument("--version", type=int, choices=[1, 2], default=1, dest="game_version")
    sim_parser.add_argument("--players", type=int, default=2, help="Number of players (2-5)")
    sim_parser.add_argument("--harbor", action="store_true", help="Add the Harbor expansion")
    sim_parser.add_argument(
        "--supply", choices=["Total", "Variable", "Hybrid"], default="Total", help="Supply variant"
    )
    sim_parser.add_argument("--coins", type=int, default=3, help="Starting coins")
    sim_parser.add_argument("--seed", type=int, default=0, help="Game seed")
    sim_parser.add_argument("--max-moves", type=int, default=5000, help="Stop after this many moves")
    sim_parser.add_argument("--events", action="store_true", help="Print every event as JSON")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "cards":
        cmd_cards(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_cards(args):
    """Print the card tables."""
    from .rules import Version, all_establishments, all_landmarks

    version = Version(args.game_version)
    print(f"Establishments (version {int(version)}):")
    for est in all_establishments(version):
        rolls = ",".join(str(r) for r in est.rolls)
        supply = est.initial if est.initial is not None else "n"
        print(
            f"  {est.id:>2}  {est.name:<20} {est.color.value:<6} cost {est.cost:<2} "
            f"rolls {rolls:<8} supply {supply:<2} [{est.expansion.value}]"
        )
    print(f"\nLandmarks (version {int(version)}):")
    for land in all_landmarks(version):
        cost = "/".join(str(c) for c in land.cost)
        print(f"  {land.id:>2}  {land.name:<20} cost {cost:<10} [{land.expansion.value}]")


def cmd_validate(args):
    """Check the registry tables."""
    from .rules import validate_registry

    result = validate_registry()
    if result.valid:
        print("Registry is valid")
    else:
        print(f"Registry has {len(result.errors)} error(s):")
        for error in result.errors:
            print(f"  - {error}")
        sys.exit(1)


def cmd_simulate(args):
    """Play random legal moves until someone wins."""
    from .engine_core import legal_actions
    from .rules import ConfigurationError, Expansion, SetupConfig, SupplyVariant, Version
    from .session import new_match

    expansions = (Expansion.BASE, Expansion.HARBOR) if args.harbor else (Expansion.BASE,)
    config = SetupConfig(
        version=Version(args.game_version),
        expansions=expansions,
        supply_variant=SupplyVariant(args.supply),
        start_coins=args.coins,
        num_players=args.players,
    )
    try:
        match = new_match(config, seed=args.seed)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    chooser = random.Random(args.seed)
    moves = 0
    while not match.state.is_game_over and moves < args.max_moves:
        action = chooser.choice(legal_actions(match.state))
        result = match.submit(action)
        moves += 1
        if args.events:
            for event in result.events:
                print(json.dumps(event.to_dict()))

    state = match.state
    if state.is_game_over:
        print(f"Player {state.winner} won on turn {state.turn_number} after {moves} moves")
    else:
        print(f"No winner after {moves} moves (turn {state.turn_number})")
    print(f"Coins: {state.money}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("machikoro.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
