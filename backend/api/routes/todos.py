"""Todo Routes

GET    /todos?offset=&limit=   목록 조회
POST   /todos                  생성
PUT    /todos/{id}             수정
DELETE /todos/{id}             삭제 (Authorization: Bearer admin 필요)

Conflict / NotFound 는 라우터가 아니라 핸들러가 직접 응답으로 만든다.
"""

from typing import List

from fastapi.responses import JSONResponse, Response

from backend.api.middleware.error_handler import error_response
from backend.app.core.config import settings
from backend.app.core.errors import TodoConflictError, TodoNotFoundError
from backend.app.core.logging import get_logger
from backend.app.core.todo_store import TodoStore
from backend.app.models.todo import ListOptions, Todo
from backend.app.routing import Route, header_exact, json_body, list_options, route

logger = get_logger(__name__)


async def list_todos(opts: ListOptions, store: TodoStore) -> Response:
    todos = await store.list(offset=opts.offset or 0, limit=opts.limit)
    return JSONResponse(
        status_code=200,
        content=[todo.model_dump() for todo in todos],
    )


async def create_todo(create: Todo, store: TodoStore) -> Response:
    try:
        await store.create(create)
    except TodoConflictError as e:
        logger.info("Todo already exists", todo_id=e.todo_id)
        return error_response(e.status_code, e.message)
    return Response(status_code=201)


async def update_todo(id: int, update: Todo, store: TodoStore) -> Response:
    try:
        await store.update(id, update)
    except TodoNotFoundError as e:
        return error_response(e.status_code, e.message)
    return Response(status_code=200)


async def delete_todo(id: int, store: TodoStore) -> Response:
    try:
        await store.delete(id)
    except TodoNotFoundError as e:
        return error_response(e.status_code, e.message)
    return Response(status_code=204)


def todo_routes(store: TodoStore) -> List[Route]:
    """The four todo routes bound to ``store``

    The delete guard is evaluated after path and method, so a bad id on
    another route never turns into an auth failure.
    """

    async def with_store(request) -> TodoStore:
        return store

    admin_only = header_exact("authorization", settings.ADMIN_AUTHORIZATION)

    return [
        route(
            "GET", "/todos", list_todos,
            inputs={"opts": list_options, "store": with_store},
        ),
        route(
            "POST", "/todos", create_todo,
            inputs={"create": json_body(Todo), "store": with_store},
        ),
        route(
            "PUT", "/todos/{id:u64}", update_todo,
            inputs={"update": json_body(Todo), "store": with_store},
        ),
        route(
            "DELETE", "/todos/{id:u64}", delete_todo,
            guards=[admin_only],
            inputs={"store": with_store},
        ),
    ]
