"""Demo Routes

GET  /                  README 파일
GET  /hi                평문 인사
GET  /hello/{name}      host / user-agent 헤더 에코
GET  /sleep/{seconds}   0..=MAX_SLEEP_SECONDS 초 대기 후 응답
POST /register          Employee 에코
"""

import asyncio
from pathlib import Path
from typing import List, Optional

from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response

from backend.api.schemas.request import Employee
from backend.api.schemas.response import GreetingResponse
from backend.app.core.config import settings
from backend.app.core.errors import ErrorKind, Rejection
from backend.app.routing import Route, json_body, parse_socket_addr, required_header, route


async def hi() -> Response:
    return PlainTextResponse("Hello, World!")


async def hello(name: str, host: str, agent: str) -> Response:
    result = GreetingResponse(name=name, host=host, agent=agent)
    return JSONResponse(content=result.model_dump(), headers={"foo": "bar"})


async def register(employee: Employee) -> Response:
    return JSONResponse(content=employee.model_dump())


async def sleepy(seconds: int) -> Response:
    # 공유 자원을 잡지 않은 채로 대기
    await asyncio.sleep(seconds)
    return PlainTextResponse(f"I waited {seconds} seconds!")


def demo_routes(readme_path: Optional[str] = None) -> List[Route]:
    """Stateless demonstration routes"""
    readme = Path(readme_path or settings.README_PATH)

    async def serve_readme() -> Response:
        if not readme.is_file():
            raise Rejection(ErrorKind.ROUTE_NOT_FOUND, details={"file": str(readme)})
        return FileResponse(readme)

    return [
        route("GET", "/", serve_readme, name="readme"),
        route(
            "GET", "/hello/{name}", hello,
            inputs={
                "host": required_header("host", parse_socket_addr),
                "agent": required_header("user-agent"),
            },
        ),
        route("GET", "/hi", hi),
        route("GET", "/sleep/{seconds:seconds}", sleepy),
        route("POST", "/register", register, inputs={"employee": json_body(Employee)}),
    ]
