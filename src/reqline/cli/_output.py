from __future__ import annotations

import sys

from reqline import RESPONSE_BANNER
from reqline.models import ResponseSummary


def print_response(summary: ResponseSummary) -> None:
    print()
    print(RESPONSE_BANNER)
    print(f"METHOD: {summary.method}")
    print(f"STATUS: {summary.status_code} - {summary.reason}")
    print("HEADERS:")
    for key, value in summary.headers:
        print(f"\t{key}: {value}")
    print(f"BODY: {summary.body}")


def print_error(message: object) -> None:
    print(f"Error: {message}", file=sys.stderr)
