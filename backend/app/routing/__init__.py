"""Routing Package

라우트 테이블, 디스패처, 검증 추출기
"""

from .extractors import (
    Extractor,
    header_exact,
    json_body,
    list_options,
    parse_seconds,
    parse_socket_addr,
    parse_u64,
    read_limited_body,
    required_header,
)
from .router import Dispatcher, PathPattern, Route, route, split_path

__all__ = [
    # Router
    "Dispatcher",
    "PathPattern",
    "Route",
    "route",
    "split_path",
    # Extractors
    "Extractor",
    "header_exact",
    "json_body",
    "list_options",
    "parse_seconds",
    "parse_socket_addr",
    "parse_u64",
    "read_limited_body",
    "required_header",
]
