"""Command line entry point for the open PR report."""

import argparse
import logging
import os

from dotenv import load_dotenv

from .config import ReportConfig
from .errors import ConfigurationError, TransportError
from .output import ReportFormatter
from .report import OpenPRReport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='open-pr-report',
        description="Report open pull requests of a GitHub organization, grouped by base branch."
    )
    parser.add_argument('--org', help="Organisation name (default: GITHUB_ORG)")
    parser.add_argument('--token', help="GitHub token (default: GITHUB_TOKEN)")
    parser.add_argument('--workers', type=int, help="Repositories fetched concurrently (default: MAX_WORKERS or 1)")
    parser.add_argument('--max-pages', type=int,
                        help="Pages of PRs and reviews fetched per listing, 0 for all (default: MAX_PAGES or 0)")
    parser.add_argument('--aliases', help="JSON file of extra base label aliases (default: BASE_ALIASES_FILE)")
    return parser


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def main(argv=None) -> int:
    """Run the report. Returns the process exit code."""
    # Load environment variables from .env file if it exists
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(os.environ.get('LOG_LEVEL', 'INFO'))

    try:
        config = ReportConfig.from_env(
            org=args.org,
            token=args.token,
            max_workers=args.workers,
            max_pages=args.max_pages,
            aliases_file=args.aliases
        )
        report = OpenPRReport.from_config(config)
    except ConfigurationError as e:
        logging.error(str(e))
        parser.print_usage()
        return 1

    logging.info(f"Starting report for organization: {config.org}")

    try:
        print(f"user: {report.whoami()}")
        grouping = report.run(config.org)
    except TransportError as e:
        logging.error(f"Report aborted: {e}")
        return 1

    ReportFormatter().print_report(grouping)
    return 0
