from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import SplitResult

from reqline import FILE_CONTENT_TYPE, JSON_CONTENT_TYPE, URLENCODED_CONTENT_TYPE


@dataclass(frozen=True)
class UrlEncodedBody:
    text: str

    content_type = URLENCODED_CONTENT_TYPE

    @property
    def payload(self) -> bytes:
        return self.text.encode("utf-8")


@dataclass(frozen=True)
class JsonBody:
    text: str

    content_type = JSON_CONTENT_TYPE

    @property
    def payload(self) -> bytes:
        return self.text.encode("utf-8")


@dataclass(frozen=True)
class FileBody:
    path: str
    content: bytes = field(repr=False)

    content_type = FILE_CONTENT_TYPE

    @property
    def payload(self) -> bytes:
        return self.content


BodySource = Union[UrlEncodedBody, JsonBody, FileBody]


@dataclass(frozen=True)
class RequestSpec:
    """Validated description of the single request to send."""

    url: SplitResult
    method: str = "GET"
    headers: dict = field(default_factory=dict)
    queries: dict = field(default_factory=dict)
    body: Optional[BodySource] = None
    timeout: Optional[float] = None


@dataclass
class ResponseSummary:
    method: str
    status_code: int
    reason: str
    headers: list = field(default_factory=list)
    body: str = ""
