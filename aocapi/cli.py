import argparse
import datetime
import logging
from importlib.metadata import version

from .get import get_data
from .get import most_recent_year
from .models import default_session
from .types import Rejected
from .utils import AOC_TZ
from .utils import colored


def main():
    """Get your puzzle input data, caching it if necessary, and print it on stdout.
    With --submit, post an answer instead and print the server's response."""
    aoc_now = datetime.datetime.now(tz=AOC_TZ)
    days = range(1, 26)
    years = range(2015, aoc_now.year + int(aoc_now.month == 12))
    parser = argparse.ArgumentParser(
        description=f"Advent of Code API client v{version('aoc-api')}",
        usage=f"aocapi [day 1-25] [year 2015-{years[-1]}]",
    )
    parser.add_argument(
        "day",
        nargs="?",
        type=int,
        default=min(aoc_now.day, 25) if aoc_now.month == 12 else 1,
        help="1-25 (default: %(default)s)",
    )
    parser.add_argument(
        "year",
        nargs="?",
        type=int,
        default=most_recent_year(),
        help=f"2015-{years[-1]} (default: %(default)s)",
    )
    parser.add_argument(
        "-s",
        "--submit",
        metavar="ANSWER",
        help="submit an answer for this puzzle instead of getting the input",
    )
    parser.add_argument(
        "--no-save",
        dest="save",
        action="store_false",
        help="don't write the downloaded input into the cache directory",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s v{version('aoc-api')}",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="enable debug logging",
    )
    args = parser.parse_args()
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    if args.day in years and args.year in days:
        # be forgiving
        args.day, args.year = args.year, args.day
    if args.day not in days or args.year not in years:
        parser.print_usage()
        parser.exit(1)
    if args.submit is None:
        data = get_data(day=args.day, year=args.year, save=args.save)
        print(data)
        return
    puzzle = default_session().puzzle(year=args.year, day=args.day)
    result = puzzle.submit(args.submit)
    if isinstance(result, Rejected):
        print(colored(result.message, "red"))
        seconds = int(result.wait_time.total_seconds())
        print(colored(f"wait {seconds}s before trying again", "red"))
        parser.exit(2)
    print(colored(result.message, "green"))
