"""Send the request described by a RequestSpec and collect the response."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import requests

from reqline import __version__
from reqline.errors import NetworkError
from reqline.models import RequestSpec, ResponseSummary

logger = logging.getLogger(__name__)

_PY_VERSION = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"


def get_user_agent() -> str:
    """Return a User-Agent like "reqline/1.0.0 python/3.11.0 requests/2.31.0"."""
    return f"reqline/{__version__} python/{_PY_VERSION} requests/{requests.__version__}"


def build_headers(spec: RequestSpec) -> dict[str, str]:
    """Return the user headers plus content defaults for the active body source.

    ``content-length`` is only defaulted for methods other than GET.
    """
    headers = dict(spec.headers)
    if spec.body is None:
        return headers
    headers.setdefault("content-type", spec.body.content_type)
    if spec.method != "GET":
        headers.setdefault("content-length", str(len(spec.body.payload)))
    return headers


def build_request_path(spec: RequestSpec) -> str:
    path = spec.url.path or "/"
    if spec.queries:
        path += "?" + "&".join(f"{key}={value}" for key, value in spec.queries.items())
    return path


def build_request_url(spec: RequestSpec) -> str:
    # Drop any userinfo, keep host[:port]
    host = spec.url.netloc.rpartition("@")[2]
    return f"{spec.url.scheme.lower()}://{host}{build_request_path(spec)}"


def _timeout(spec: RequestSpec) -> Optional[float]:
    # A zero timeout means wait indefinitely
    return spec.timeout or None


def summarize(response: requests.Response) -> ResponseSummary:
    """Build a ResponseSummary from a fully received response.

    Header lines are taken from the raw response so repeated headers are kept
    as separate entries.
    """
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "iteritems"):
        header_lines = [(key.lower(), value) for key, value in raw_headers.iteritems()]
    else:
        header_lines = [(key.lower(), value) for key, value in response.headers.items()]

    return ResponseSummary(
        method=response.request.method,
        status_code=response.status_code,
        reason=response.reason or "",
        headers=header_lines,
        body=response.content.decode("utf-8", errors="replace"),
    )


def execute(spec: RequestSpec) -> ResponseSummary:
    """Perform the single request/response exchange.

    Raises:
        NetworkError: connecting, sending or receiving failed, or timed out
    """
    url = build_request_url(spec)
    headers = build_headers(spec)
    payload = spec.body.payload if spec.body is not None else None

    with requests.Session() as session:
        session.headers["User-Agent"] = get_user_agent()
        # Show the body and content-encoding exactly as the server sent them
        session.headers["Accept-Encoding"] = "identity"
        try:
            prepared = session.prepare_request(
                requests.Request(method=spec.method, url=url, headers=headers, data=payload)
            )
            if spec.method == "GET" and "content-length" not in spec.headers:
                # Sent with chunked framing instead
                prepared.headers.pop("Content-Length", None)

            logger.debug(f"Connecting to {spec.url.hostname}, sending {spec.method} {prepared.path_url}")
            response = session.send(prepared, timeout=_timeout(spec), allow_redirects=False)
        except requests.RequestException as e:
            logger.debug(f"Request to {spec.url.hostname} failed: {e}")
            raise NetworkError(str(e)) from e

    logger.debug(f"Received {len(response.content)} bytes with status {response.status_code}")
    return summarize(response)
