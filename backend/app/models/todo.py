"""Todo Model

저장소에 보관되는 Todo 와 목록 조회 옵션
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

U64_MAX = 2**64 - 1


class Todo(BaseModel):
    """Todo 아이템 (Immutable)

    frozen=True 이므로 저장소가 돌려주는 목록은 그대로 스냅샷으로 쓸 수 있다.
    수정은 항상 새 인스턴스로 교체한다.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, le=U64_MAX)
    text: str
    completed: bool


class ListOptions(BaseModel):
    """GET /todos 쿼리 옵션"""

    model_config = ConfigDict(frozen=True)

    offset: Optional[int] = Field(None, ge=0)
    limit: Optional[int] = Field(None, ge=0)
