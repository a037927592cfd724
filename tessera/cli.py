"""
Tessera CLI - Command-line interface for the engine.

Usage:
    tessera variants                          List rule variants
    tessera simulate [--variant V] [--players ai-easy ai-hard] [--seed N] [--games N]
    tessera serve [--host H] [--port P]       Run the HTTP API
"""

import argparse
import logging
import sys

logger = logging.getLogger("tessera.cli")

AI_TYPES = ("ai-easy", "ai-medium", "ai-hard")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tessera - Tile-Drafting Game Engine",
        prog="tessera",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Variants command
    subparsers.add_parser("variants", help="List rule variants")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play AI-vs-AI matches")
    simulate_parser.add_argument("--variant", default="classic", help="classic or summer")
    simulate_parser.add_argument(
        "--players",
        nargs="+",
        default=["ai-easy", "ai-medium"],
        choices=AI_TYPES,
        help="One AI tier per seat (2-4 seats)",
    )
    simulate_parser.add_argument("--seed", type=int, default=None, help="Seed of the first match")
    simulate_parser.add_argument("--games", type=int, default=1, help="Number of matches")
    simulate_parser.add_argument(
        "--time-limit-ms", type=int, default=2000, help="Hard tier search budget",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "variants":
        cmd_variants(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_variants(args):
    """List rule variants."""
    from .engine_core.variants import list_variants

    for info in list_variants():
        print(f"{info['id']:<10} {info['name']:<10} {info['min_players']}-{info['max_players']} players")
        print(f"           {info['description']}")


def cmd_simulate(args):
    """Play headless matches and print the standings."""
    from .bots import AIPlayer
    from .session import play_match

    wins = [0] * len(args.players)
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        try:
            result = play_match(
                variant=args.variant,
                player_types=args.players,
                seed=seed,
                ai=AIPlayer(seed=seed, time_limit_ms=args.time_limit_ms),
            )
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

        scores = ", ".join(
            f"{p.name}={p.score}" for p in result.final_state.players
        )
        status = "" if result.completed else " (unfinished)"
        print(f"Game {game + 1}: {scores}; winner(s) {list(result.winner.winners)}{status}")
        logger.info("Game %d took %d actions", game + 1, result.actions)
        for idx in result.winner.winners:
            wins[idx] += 1

    if args.games > 1:
        print("\nWins:")
        for i, player_type in enumerate(args.players):
            print(f"  seat {i} ({player_type}): {wins[i]}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    uvicorn.run("tessera.api.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
