"""Todo Store - 인메모리 Todo 저장소

프로세스 수명 동안만 유지되는 Todo 목록. 모든 접근은 하나의
asyncio.Lock 으로 직렬화되며, 락은 탐색/변경 구간에서만 잡는다.
재시작하면 비어 있는 상태로 돌아간다.
"""

import asyncio
from typing import Iterable, List, Optional

from backend.app.core.errors import TodoConflictError, TodoNotFoundError
from backend.app.core.logging import get_logger
from backend.app.models.todo import Todo

logger = get_logger(__name__)


class TodoStore:
    """삽입 순서를 유지하는 Todo 저장소

    id 유일성은 create 에서만 검사한다. update 는 id 자체를 바꿀 수 있다.
    """

    def __init__(self, todos: Optional[Iterable[Todo]] = None):
        self._todos: List[Todo] = list(todos or [])
        self._lock = asyncio.Lock()

    async def list(self, offset: int = 0, limit: Optional[int] = None) -> List[Todo]:
        """offset 만큼 건너뛴 뒤 최대 limit 개를 삽입 순서대로 반환"""
        async with self._lock:
            end = None if limit is None else offset + limit
            return self._todos[offset:end]

    async def create(self, todo: Todo) -> None:
        async with self._lock:
            if any(existing.id == todo.id for existing in self._todos):
                raise TodoConflictError(todo.id)
            self._todos.append(todo)
        logger.debug("Todo created", todo_id=todo.id)

    async def update(self, todo_id: int, todo: Todo) -> None:
        async with self._lock:
            for index, existing in enumerate(self._todos):
                if existing.id == todo_id:
                    self._todos[index] = todo
                    break
            else:
                raise TodoNotFoundError(todo_id)
        logger.debug("Todo updated", todo_id=todo_id, new_id=todo.id)

    async def delete(self, todo_id: int) -> None:
        async with self._lock:
            before = len(self._todos)
            self._todos = [todo for todo in self._todos if todo.id != todo_id]
            if len(self._todos) == before:
                raise TodoNotFoundError(todo_id)
        logger.debug("Todo deleted", todo_id=todo_id)
