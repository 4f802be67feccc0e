"""테스트 설정 및 공통 fixture"""

import sys
from typing import Optional
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

# 프로젝트 루트를 Python 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from backend.api.main import create_app  # noqa: E402
from backend.app.core.todo_store import TodoStore  # noqa: E402
from backend.app.models.todo import Todo  # noqa: E402

ADMIN_HEADERS = {"Authorization": "Bearer admin"}


@pytest.fixture
def sample_todo_data():
    """샘플 Todo 데이터"""
    return {
        "id": 1,
        "text": "test 1",
        "completed": False,
    }


@pytest.fixture
def todo1(sample_todo_data):
    return Todo(**sample_todo_data)


@pytest.fixture
def store():
    """빈 Todo 저장소"""
    return TodoStore()


@pytest.fixture
def readme_file(tmp_path):
    path = tmp_path / "README.md"
    path.write_text("# Todo Service\n", encoding="utf-8")
    return path


@pytest.fixture
def app(store, readme_file):
    return create_app(store=store, readme_path=str(readme_file))


@pytest.fixture
def client(app):
    """lifespan 포함 TestClient"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


def build_request(
    method: str = "GET",
    path: str = "/",
    query: str = "",
    headers: Optional[dict] = None,
    body: bytes = b"",
    chunk_size: int = 0,
) -> Request:
    """ASGI scope + receive 로 Request 구성

    chunk_size 를 주면 본문을 여러 http.request 메시지로 나눠 보낸다.
    """
    raw_headers = [
        (key.lower().encode("latin-1"), value.encode("latin-1"))
        for key, value in (headers or {}).items()
    ]
    chunks = [body]
    if chunk_size:
        chunks = [body[i:i + chunk_size] for i in range(0, len(body), chunk_size)] or [b""]

    async def receive():
        if chunks:
            chunk = chunks.pop(0)
            return {"type": "http.request", "body": chunk, "more_body": bool(chunks)}
        return {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query.encode("latin-1"),
        "headers": raw_headers,
    }
    return Request(scope, receive)


@pytest.fixture
def make_request():
    return build_request
