"""Command line entry point for the changeset discussion report."""

import argparse
import logging
import os
import sys
from datetime import date
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigError, OsmchaLogsError
from .report_builder import ReportBuilder
from .user_config import DEFAULT_USERNAMES_FILE, UsernameConfig


def setup_logging():
    """Configure logging (can be overridden by LOG_LEVEL environment variable)."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {number}")
    return number


def _int_from_env(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logging.warning(f"Invalid {name} value '{raw}', ignoring")
        return None
    if value < 1:
        logging.warning(f"Invalid {name} value '{raw}', ignoring")
        return None
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='create-logs',
        description='Report resolved and unresolved OSM changeset discussions per user using OSMCHA.'
    )
    parser.add_argument('--from-date', type=_iso_date,
                        help='Provide from date for querying changesets. Input format YYYY-MM-DD')
    parser.add_argument('--to-date', type=_iso_date,
                        help='Provide end date for querying changesets. Input format YYYY-MM-DD')
    parser.add_argument('--usernames-file',
                        help=f'JSON file with the usernames to report on (default: {DEFAULT_USERNAMES_FILE})')
    parser.add_argument('--max-pages', type=_positive_int,
                        help='Abort if the changeset listing has more pages than this')
    parser.add_argument('--max-concurrent-requests', type=_positive_int,
                        help='Limit on simultaneous comment requests (default: unlimited)')
    return parser


def main(argv: List[str] = None) -> int:
    """Main entry point for the script.

    Returns:
        Process exit code: 0 on full success, 1 if anything failed
    """
    # Load environment variables from .env file if it exists
    load_dotenv()
    setup_logging()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.from_date or not args.to_date:
        parser.print_help()
        return 0

    if args.from_date > args.to_date:
        logging.error(f"--from-date {args.from_date} is after --to-date {args.to_date}")
        return 1

    usernames_file = args.usernames_file or os.environ.get('USERNAMES_FILE', DEFAULT_USERNAMES_FILE)
    try:
        usernames = UsernameConfig(usernames_file).get_usernames()
    except ConfigError as e:
        logging.error(str(e))
        return 1

    if not usernames:
        logging.error(f"No usernames found in {usernames_file}")
        return 1

    max_pages = args.max_pages or _int_from_env('MAX_PAGES')
    max_concurrent_requests = args.max_concurrent_requests or _int_from_env('MAX_CONCURRENT_REQUESTS')

    logging.info(f"Reporting on {len(usernames)} user(s) from {args.from_date} to {args.to_date}")
    builder = ReportBuilder(max_pages=max_pages, max_concurrent_requests=max_concurrent_requests)

    try:
        result = builder.build_reports(usernames, args.from_date, args.to_date)
    except OsmchaLogsError as e:
        logging.error(f"Changeset report failed: {e}")
        return 1

    if result.failed:
        logging.error(f"{len(result.errors)} user report(s) failed")
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
