"""Validated Extractors

원시 요청 데이터(경로 세그먼트, 쿼리, 헤더, 본문)를 검증된 값으로 바꾼다.
검증에 실패하면 값 대신 Rejection 을 던진다.

경로 세그먼트 파서(parse_u64, parse_seconds)는 문자열 하나를 받는 순수 함수이고,
나머지 추출기는 Request 를 받는 코루틴이다.
"""

import ipaddress
import re
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from starlette.requests import Request

from backend.app.core.config import settings
from backend.app.core.errors import ErrorKind, Rejection
from backend.app.models.todo import U64_MAX, ListOptions

Extractor = Callable[[Request], Awaitable[Any]]
M = TypeVar("M", bound=BaseModel)

_UNSIGNED = re.compile(r"\+?[0-9]+")
_DIGITS = re.compile(r"[0-9]+")
_JSON_MEDIA_TYPE = "application/json"


def _parse_unsigned(raw: str, maximum: int) -> Optional[int]:
    if not _UNSIGNED.fullmatch(raw):
        return None
    value = int(raw)
    if value > maximum:
        return None
    return value


# ─────────────────────────────────────────────────────────────
#  Path segments
# ─────────────────────────────────────────────────────────────

def parse_u64(raw: str) -> int:
    """Parse an unsigned 64-bit integer path segment"""
    value = _parse_unsigned(raw, U64_MAX)
    if value is None:
        raise Rejection(ErrorKind.MALFORMED_PARAMETER, details={"value": raw})
    return value


def parse_seconds(raw: str) -> int:
    """Parse a delay in seconds, closed interval [0, MAX_SLEEP_SECONDS]

    Out-of-range values are rejected, never clamped.
    """
    value = parse_u64(raw)
    if value > settings.MAX_SLEEP_SECONDS:
        raise Rejection(
            ErrorKind.OUT_OF_RANGE,
            details={"value": value, "max": settings.MAX_SLEEP_SECONDS},
        )
    return value


# ─────────────────────────────────────────────────────────────
#  Query
# ─────────────────────────────────────────────────────────────

async def list_options(request: Request) -> ListOptions:
    """Decode ?offset=&limit= into ListOptions

    Absent fields stay None. Unknown keys are ignored, repeated or
    non-numeric known keys are a MALFORMED_QUERY.
    """
    values: dict[str, int] = {}
    for key, raw in request.query_params.multi_items():
        if key not in ListOptions.model_fields:
            continue
        if key in values:
            raise Rejection(ErrorKind.MALFORMED_QUERY, details={"duplicate": key})
        value = _parse_unsigned(raw, U64_MAX)
        if value is None:
            raise Rejection(ErrorKind.MALFORMED_QUERY, details={key: raw})
        values[key] = value
    return ListOptions(**values)


# ─────────────────────────────────────────────────────────────
#  Body
# ─────────────────────────────────────────────────────────────

async def read_limited_body(request: Request, limit: int) -> bytes:
    """Read the request body, refusing anything longer than ``limit`` bytes

    Content-Length is checked before reading; the stream is capped as well
    for bodies sent without one. The result is cached on request.state so
    competing routes can decode the same body.
    """
    cached = getattr(request.state, "limited_body", None)
    if cached is not None:
        return cached

    declared = request.headers.get("content-length")
    if declared is not None:
        if not _DIGITS.fullmatch(declared):
            raise Rejection(ErrorKind.MALFORMED_BODY, details={"content_length": declared})
        if int(declared) > limit:
            raise Rejection(
                ErrorKind.PAYLOAD_TOO_LARGE,
                details={"content_length": int(declared), "limit": limit},
            )

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise Rejection(ErrorKind.PAYLOAD_TOO_LARGE, details={"limit": limit})

    request.state.limited_body = bytes(body)
    return request.state.limited_body


def json_body(model: Type[M], limit: Optional[int] = None) -> Extractor:
    """Build an extractor that decodes a size-limited JSON body into ``model``

    Validation is strict: JSON strings are not coerced into numbers or booleans.
    """
    max_bytes = limit if limit is not None else settings.BODY_LIMIT_BYTES

    async def extract(request: Request) -> M:
        content_type = request.headers.get("content-type")
        if content_type is not None:
            media_type = content_type.split(";", 1)[0].strip().lower()
            if media_type != _JSON_MEDIA_TYPE:
                raise Rejection(
                    ErrorKind.MALFORMED_BODY,
                    details={"content_type": content_type},
                )

        raw = await read_limited_body(request, max_bytes)
        try:
            return model.model_validate_json(raw, strict=True)
        except ValidationError as e:
            raise Rejection(
                ErrorKind.MALFORMED_BODY,
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e

    return extract


# ─────────────────────────────────────────────────────────────
#  Headers
# ─────────────────────────────────────────────────────────────

def header_exact(name: str, expected: str) -> Extractor:
    """Guard: header ``name`` must equal ``expected`` byte for byte"""
    expected_bytes = expected.encode("latin-1")

    async def guard(request: Request) -> None:
        value = request.headers.get(name)
        if value is None or value.encode("latin-1") != expected_bytes:
            raise Rejection(ErrorKind.UNAUTHORIZED, details={"header": name})

    return guard


def required_header(
    name: str,
    parse: Optional[Callable[[str], Any]] = None,
) -> Extractor:
    """Extract header ``name``, optionally converted by ``parse``

    ``parse`` signals an invalid value by raising ValueError.
    """

    async def extract(request: Request) -> Any:
        value = request.headers.get(name)
        if value is None:
            raise Rejection(ErrorKind.MALFORMED_HEADER, details={"missing": name})
        if parse is None:
            return value
        try:
            return parse(value)
        except ValueError as e:
            raise Rejection(
                ErrorKind.MALFORMED_HEADER,
                details={"header": name, "value": value},
            ) from e

    return extract


def parse_socket_addr(raw: str) -> str:
    """Normalize ``ip:port`` (``[ip]:port`` for IPv6)

    >>> parse_socket_addr("127.0.0.1:3030")
    '127.0.0.1:3030'
    >>> parse_socket_addr("[::1]:80")
    '[::1]:80'
    """
    host, sep, port = raw.rpartition(":")
    if not sep or not _DIGITS.fullmatch(port) or int(port) > 65535:
        raise ValueError(f"invalid socket address: {raw!r}")

    if host.startswith("[") and host.endswith("]"):
        address = ipaddress.IPv6Address(host[1:-1])
        return f"[{address}]:{int(port)}"

    address = ipaddress.IPv4Address(host)
    return f"{address}:{int(port)}"
