from __future__ import annotations

import argparse
import logging
import sys

from reqline import DEFAULT_METHOD, METHODS
from reqline.cli._output import print_error, print_response
from reqline.errors import NetworkError, ReqlineError
from reqline.executor import execute
from reqline.options import resolve_options

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reqline",
        description="Send a single HTTP request and print the response",
    )
    parser.add_argument("url", metavar="URL", nargs="*", help="Absolute URL to call")
    parser.add_argument(
        "-M",
        "--method",
        default=DEFAULT_METHOD,
        choices=METHODS,
        type=str.upper,
        help=f"HTTP method for the request (default: {DEFAULT_METHOD})",
    )
    parser.add_argument(
        "-H",
        "--headers",
        action="extend",
        nargs="+",
        metavar="KEY:VALUE",
        help="Headers for the request, use as key1:value1 key2:value2 ...",
    )
    parser.add_argument(
        "-Q",
        "--queries",
        action="extend",
        nargs="+",
        metavar="KEY=VALUE",
        help="Query parameters for the request, use as key1=value1&key2=value2 ...",
    )
    parser.add_argument("-D", "--data", help="application/x-www-form-urlencoded request body")
    parser.add_argument("--json", help="application/json request body")
    parser.add_argument("--file", metavar="PATH", help="application/octet-stream request body read from a file")
    parser.add_argument("--timeout", metavar="SECONDS", help="Timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    return parser


def _configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logging.getLogger("reqline").addHandler(handler)
    logging.getLogger("reqline").setLevel(logging.DEBUG if verbose else logging.WARNING)


def run(parsed: argparse.Namespace) -> int:
    try:
        spec = resolve_options(parsed)
    except ReqlineError as e:
        print_error(e)
        return 1

    try:
        summary = execute(spec)
    except NetworkError as e:
        print_error(e)
        return 1

    print_response(summary)
    return 0


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)
    _configure_logging(verbose=parsed.verbose)

    try:
        return run(parsed)
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
