"""CLI entry point for running one parameterized query.

Usage:
    python -m scripts.run_query --profile website "SELECT * FROM timezones WHERE id = ?" --param 77
    python -m scripts.run_query --profiles-file profiles.json --profile reports --mode count "SELECT * FROM blah"
"""

import argparse
import json
import logging
import sys

from dbconn import DatabaseError, connect, load_profiles

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def parse_literal(text: str) -> int | float | str:
    """Coerce a command-line value to int, then float, falling back to text."""
    for convert in (int, float):
        try:
            return convert(text)
        except ValueError:
            continue
    return text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run a parameterized query")
    parser.add_argument("sql", help="SQL text with ? placeholders")
    parser.add_argument("--profile", required=True, help="Connection profile name")
    parser.add_argument("--profiles-file", help="JSON file of connection profiles")
    parser.add_argument(
        "--mode",
        choices=["all", "row", "execute", "count"],
        default="all",
        help="What to return (default: all rows)",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        type=parse_literal,
        help="Positional parameter; repeat in placeholder order",
    )
    args = parser.parse_args(argv)

    try:
        profiles = load_profiles(args.profiles_file)
        with connect(args.profile, profiles) as db:
            if args.mode == "row":
                result = db.fetch_row(args.sql, args.param)
            elif args.mode == "execute":
                result = db.execute(args.sql, args.param)
            elif args.mode == "count":
                result = db.get_num_rows(args.sql, args.param)
            else:
                result = db.fetch_all(args.sql, args.param)
            logger.info("Ran: %s", db.get_last_query())
    except DatabaseError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    json.dump(result, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
