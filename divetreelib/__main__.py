"""Command line entry point: python -m divetreelib "git /path/to/divelog[:branch]"."""

import argparse
import sys

from .api import is_git_location, load_dives
from .config import LoaderConfig
from .errors import DiveLoadError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="divetreelib",
        description="Load a dive log stored in a git repository and summarize it.",
    )
    parser.add_argument("location",
                        help="'git <path>[:branch]', or a plain repository path")
    parser.add_argument("--branch", help="branch to load when the location names none")
    parser.add_argument("--git", default="git", help="git executable (default: %(default)s)")
    parser.add_argument("--strict", action="store_true", help="stop at the first error")
    parser.add_argument("--quiet", action="store_true", help="do not print per-entry warnings")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    where = args.location
    if not is_git_location(where):
        where = f"git {where}"

    config = LoaderConfig(
        git_executable=args.git,
        default_branch=args.branch,
        strict=args.strict,
        verbose=not args.quiet,
    )

    try:
        result = load_dives(where, config=config)
    except DiveLoadError as e:
        # Only a verbose, non-strict policy has already printed it
        if args.quiet or args.strict:
            print(f"ERROR: {e}", file=sys.stderr)
        return 1

    log = result.collection
    for trip in getattr(log, "trips", []):
        print(f"Trip {trip.when.date().isoformat()}: {len(trip.dives)} dives")
        for dive in trip.dives:
            print(f"  {_describe(dive)}")
    for dive in getattr(log, "dives", []):
        if dive.trip is None:
            print(_describe(dive))

    print(f"\nTotal: {result.trips_created} trips, {result.dives_created} dives, "
          f"{result.errors_reported} errors")
    return 0


def _describe(dive) -> str:
    number = f"#{dive.number} " if dive.number is not None else ""
    return f"Dive {number}{dive.when.isoformat(timespec='seconds')}"


if __name__ == "__main__":
    sys.exit(main())
