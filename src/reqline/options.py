"""Turn raw command line values into a validated RequestSpec.

Everything here runs before any network I/O. Fatal problems raise a
``ReqlineError``; malformed headers, queries and bodies are reported through
a warning callback and processing continues.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import re
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import SplitResult, urlsplit

from reqline import DEFAULT_METHOD
from reqline.errors import ConflictingOptions, FileAccessError, InvalidArgument, MalformedFieldWarning
from reqline.models import BodySource, FileBody, JsonBody, RequestSpec, UrlEncodedBody

logger = logging.getLogger(__name__)

HEADER_NAME_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

URLENCODED_PATTERN = re.compile(r"^([\w\-%]+=[\w\-%]*)(&[\w\-%]+=[\w\-%]*)*$")

SUPPORTED_SCHEMES = ("http", "https")

WarningCallback = Callable[[MalformedFieldWarning], None]


def log_warning(warning: MalformedFieldWarning) -> None:
    logger.warning(str(warning))


def _insert(mapping: dict, key: str, value: str, kind: str, warn: WarningCallback) -> None:
    """Set ``mapping[key]``, warning when an earlier value gets overwritten."""
    if key in mapping:
        warn(MalformedFieldWarning(f"Overwriting {kind} key for {key}"))
    mapping[key] = value


def parse_url(positionals: Optional[list[str]]) -> SplitResult:
    if not positionals or len(positionals) != 1:
        raise InvalidArgument("You must provide exactly one url")
    raw = positionals[0]
    try:
        parsed = urlsplit(raw)
        # Accessing .port validates it
        _ = parsed.port
    except ValueError as e:
        raise InvalidArgument(f"Invalid URL '{raw}': {e}") from e
    if not parsed.scheme or not parsed.hostname:
        raise InvalidArgument(f"Invalid URL '{raw}'. Expected an absolute URL like http://host/path.")
    if parsed.scheme.lower() not in SUPPORTED_SCHEMES:
        expected = ", ".join(SUPPORTED_SCHEMES)
        raise InvalidArgument(f"Unsupported URL scheme '{parsed.scheme}'. Expected one of {expected}.")
    return parsed


def parse_headers(raw: Optional[list[str]], warn: WarningCallback = log_warning) -> dict[str, str]:
    headers: dict[str, str] = {}
    for header in raw or []:
        key, sep, value = header.partition(":")
        key = key.strip().lower()
        if not sep or not HEADER_NAME_PATTERN.match(key):
            warn(MalformedFieldWarning(f"Invalid header {header}"))
            continue
        _insert(headers, key, value.strip(), "header", warn)
    return headers


def parse_queries(
    raw: Optional[list[str]],
    warn: WarningCallback = log_warning,
    initial: Optional[dict[str, str]] = None,
) -> dict[str, str]:
    queries: dict[str, str] = dict(initial or {})
    for query in raw or []:
        for pair in query.split("&"):
            key, sep, value = pair.partition("=")
            if not sep:
                warn(MalformedFieldWarning(f"Invalid query parameter {pair}"))
                continue
            _insert(queries, key, value, "query", warn)
    return queries


def _read_file(path: str) -> FileBody:
    resolved = Path(path).expanduser().resolve()
    try:
        with open(resolved, "rb") as f:
            content = f.read()
    except OSError as e:
        raise FileAccessError(f"Could not read file '{path}': {e.strerror or e}") from e
    logger.debug(f"Read {len(content)} bytes from {resolved}")
    return FileBody(path=str(resolved), content=content)


def resolve_body(
    data: Optional[str] = None,
    json_text: Optional[str] = None,
    file: Optional[str] = None,
    warn: WarningCallback = log_warning,
) -> Optional[BodySource]:
    """Pick the single body source, validating its contents.

    Raises:
        ConflictingOptions: more than one source was given
        FileAccessError: the file source could not be read
    """
    given = [name for name, value in (("--data", data), ("--json", json_text), ("--file", file)) if value is not None]
    if len(given) > 1:
        raise ConflictingOptions(f"Simultaneous usage of {' and '.join(given)} is not permitted")

    if data is not None:
        if not URLENCODED_PATTERN.match(data):
            warn(MalformedFieldWarning("Invalid urlencoded body"))
        return UrlEncodedBody(data)
    if json_text is not None:
        try:
            json.loads(json_text)
        except (ValueError, RecursionError):
            warn(MalformedFieldWarning("Invalid JSON body"))
        return JsonBody(json_text)
    if file is not None:
        return _read_file(file)
    return None


def parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Timeout must be a number, got '{raw}'") from e
    if not math.isfinite(timeout) or timeout < 0:
        raise InvalidArgument(f"Timeout must be a non-negative number, got '{raw}'")
    return timeout


def resolve_options(parsed: argparse.Namespace, warn: WarningCallback = log_warning) -> RequestSpec:
    url = parse_url(parsed.url)
    timeout = parse_timeout(parsed.timeout)
    body = resolve_body(parsed.data, parsed.json, parsed.file, warn)
    headers = parse_headers(parsed.headers, warn)

    url_queries = parse_queries([url.query], warn) if url.query else {}
    queries = parse_queries(parsed.queries, warn, initial=url_queries)

    return RequestSpec(
        url=url,
        method=(parsed.method or DEFAULT_METHOD).upper(),
        headers=headers,
        queries=queries,
        body=body,
        timeout=timeout,
    )
