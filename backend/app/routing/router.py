"""Router / Dispatcher

라우트는 (method, path pattern, guards, inputs) 묶음을 순서대로 나열한 목록이다.
요청마다 다음 순서로 평가한다.

1. 경로 패턴 (리터럴 세그먼트 + 타입 캡처). 캡처 파싱 실패도 경로 불일치다.
2. HTTP 메서드
3. 라우트 전용 guard (예: 관리자 인증 헤더)
4. inputs 추출기 (쿼리, 본문, 헤더)

처음으로 모든 단계를 통과한 라우트의 핸들러를 호출하고 나머지는 보지 않는다.
통과한 라우트가 없으면 모아 둔 Rejection 중 우선순위가 가장 높은 것을 던진다.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, Optional, Tuple

from starlette.requests import Request
from starlette.responses import Response

from backend.app.core.errors import ErrorKind, Rejection, select_rejection
from backend.app.core.logging import clear_log_context, get_logger, log_context
from backend.app.routing.extractors import Extractor, parse_seconds, parse_u64

logger = get_logger(__name__)

Handler = Callable[..., Awaitable[Response]]
Converter = Callable[[str], Any]

CONVERTERS: dict[str, Converter] = {
    "str": str,
    "u64": parse_u64,
    "seconds": parse_seconds,
}

_CAPTURE = re.compile(r"\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<converter>[a-z0-9_]+))?\}")


def split_path(path: str) -> List[str]:
    """'/todos/1/' -> ['todos', '1'], '/' -> []"""
    return [segment for segment in path.split("/") if segment]


@dataclass(frozen=True)
class _Segment:
    literal: Optional[str] = None
    name: Optional[str] = None
    converter: Optional[Converter] = None


class PathPattern:
    """Compiled path template such as ``/todos/{id:u64}``

    A capture without a converter name is taken as a plain string.
    """

    def __init__(self, template: str):
        self.template = template
        self._segments = [self._compile(part) for part in split_path(template)]

    @staticmethod
    def _compile(part: str) -> _Segment:
        capture = _CAPTURE.fullmatch(part)
        if capture is None:
            return _Segment(literal=part)
        converter_name = capture.group("converter") or "str"
        if converter_name not in CONVERTERS:
            raise ValueError(f"Unknown path converter: {converter_name}")
        return _Segment(name=capture.group("name"), converter=CONVERTERS[converter_name])

    def match(self, segments: List[str]) -> Optional[dict[str, Any]]:
        """Return the converted captures, or None if the path does not fit"""
        if len(segments) != len(self._segments):
            return None

        captures: dict[str, Any] = {}
        for segment, raw in zip(self._segments, segments):
            if segment.literal is not None:
                if raw != segment.literal:
                    return None
                continue
            try:
                captures[segment.name] = segment.converter(raw)
            except Rejection as e:
                logger.debug(
                    "Path capture rejected",
                    template=self.template,
                    capture=segment.name,
                    kind=e.kind.value,
                )
                return None
        return captures

    def __repr__(self) -> str:
        return f"PathPattern({self.template!r})"


@dataclass(frozen=True)
class Route:
    """A handler bound to method + path + extra predicates"""

    method: str
    path: PathPattern
    handler: Handler
    guards: Tuple[Extractor, ...] = ()
    inputs: Tuple[Tuple[str, Extractor], ...] = ()
    name: str = field(default="")


def route(
    method: str,
    template: str,
    handler: Handler,
    *,
    guards: Iterable[Extractor] = (),
    inputs: Optional[Mapping[str, Extractor]] = None,
    name: Optional[str] = None,
) -> Route:
    """Route 생성 헬퍼

    inputs 는 선언 순서대로 추출되어 같은 이름의 키워드 인자로 핸들러에 전달된다.
    """
    return Route(
        method=method.upper(),
        path=PathPattern(template),
        handler=handler,
        guards=tuple(guards),
        inputs=tuple((inputs or {}).items()),
        name=name or f"{method.upper()} {template}",
    )


class Dispatcher:
    """Ordered route table with short-circuit alternation"""

    def __init__(self, routes: Iterable[Route] = ()):
        self._routes: List[Route] = list(routes)

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def add(self, new_route: Route) -> None:
        self._routes.append(new_route)

    async def resolve(self, request: Request) -> Tuple[Route, dict[str, Any]]:
        """Find the first route that fully accepts ``request``

        Raises the highest-precedence Rejection collected along the way
        when none does.
        """
        segments = split_path(request.url.path)
        rejections: List[Rejection] = []

        for candidate in self._routes:
            try:
                arguments = await self._evaluate(candidate, request, segments)
            except Rejection as e:
                rejections.append(e)
                continue
            return candidate, arguments

        rejection = select_rejection(rejections)
        logger.debug(
            "Request rejected",
            kind=rejection.kind.value,
            candidates=len(rejections),
        )
        raise rejection

    async def _evaluate(
        self,
        candidate: Route,
        request: Request,
        segments: List[str],
    ) -> dict[str, Any]:
        arguments = candidate.path.match(segments)
        if arguments is None:
            raise Rejection(ErrorKind.ROUTE_NOT_FOUND)

        if request.method != candidate.method:
            raise Rejection(ErrorKind.METHOD_NOT_ALLOWED)

        for guard in candidate.guards:
            await guard(request)

        for input_name, extractor in candidate.inputs:
            arguments[input_name] = await extractor(request)

        return arguments

    async def dispatch(self, request: Request) -> Response:
        """Endpoint entry: resolve the route and run its handler"""
        clear_log_context()
        log_context(method=request.method, path=request.url.path)

        matched, arguments = await self.resolve(request)
        logger.debug("Route matched", route=matched.name)
        return await matched.handler(**arguments)
