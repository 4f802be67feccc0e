"""Error Kinds and Exceptions

요청 처리 중 발생하는 모든 실패는 ErrorKind 하나로 분류된다.
라우터/추출기 단계의 실패는 Rejection, 저장소 단계의 실패는
TodoConflictError / TodoNotFoundError 로 표현한다.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """실패 종류"""

    # === Routing ===
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # === Extraction ===
    MALFORMED_BODY = "MALFORMED_BODY"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    MALFORMED_QUERY = "MALFORMED_QUERY"
    MALFORMED_PARAMETER = "MALFORMED_PARAMETER"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    MALFORMED_HEADER = "MALFORMED_HEADER"
    UNAUTHORIZED = "UNAUTHORIZED"

    # === Domain ===
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"

    # === System ===
    INTERNAL = "INTERNAL"


# ErrorKind -> HTTP status
ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.ROUTE_NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.MALFORMED_BODY: 400,
    ErrorKind.PAYLOAD_TOO_LARGE: 400,
    ErrorKind.MALFORMED_QUERY: 400,
    ErrorKind.MALFORMED_PARAMETER: 400,
    ErrorKind.OUT_OF_RANGE: 400,
    ErrorKind.MALFORMED_HEADER: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.CONFLICT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

# ErrorKind -> machine-readable message
ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.ROUTE_NOT_FOUND: "NOT_FOUND",
    ErrorKind.METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    ErrorKind.MALFORMED_BODY: "BAD_REQUEST",
    ErrorKind.PAYLOAD_TOO_LARGE: "PAYLOAD_TOO_LARGE",
    ErrorKind.MALFORMED_QUERY: "INVALID_QUERY",
    ErrorKind.MALFORMED_PARAMETER: "INVALID_PARAMETER",
    ErrorKind.OUT_OF_RANGE: "OUT_OF_RANGE",
    ErrorKind.MALFORMED_HEADER: "INVALID_HEADER",
    ErrorKind.UNAUTHORIZED: "UNAUTHORIZED",
    ErrorKind.CONFLICT: "CONFLICT",
    ErrorKind.NOT_FOUND: "NOT_FOUND",
    ErrorKind.INTERNAL: "UNHANDLED_REJECTION",
}

# 여러 라우트가 동시에 거절했을 때 선택 우선순위 (높을수록 우선)
# not found < method not allowed < 그 외 구체적인 실패
_PRECEDENCE: dict[ErrorKind, int] = {
    ErrorKind.ROUTE_NOT_FOUND: 0,
    ErrorKind.METHOD_NOT_ALLOWED: 1,
}
SPECIFIC_PRECEDENCE = 2


class ServiceError(Exception):
    """Base Service Exception"""

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.kind = kind
        self.message = message or ERROR_MESSAGES.get(kind, "UNKNOWN")
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS.get(self.kind, 500)

    @property
    def precedence(self) -> int:
        return _PRECEDENCE.get(self.kind, SPECIFIC_PRECEDENCE)

    def to_body(self) -> dict[str, Any]:
        """Convert to the uniform {code, message} response body"""
        return {"code": self.status_code, "message": self.message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value}, details={self.details!r})"


class Rejection(ServiceError):
    """라우터 / 추출기 단계에서 요청을 거절"""
    pass


class TodoError(ServiceError):
    """Todo store errors"""

    def __init__(self, kind: ErrorKind, todo_id: int):
        self.todo_id = todo_id
        super().__init__(kind, details={"todo_id": todo_id})


class TodoConflictError(TodoError):
    """같은 id의 Todo가 이미 존재"""

    def __init__(self, todo_id: int):
        super().__init__(ErrorKind.CONFLICT, todo_id)


class TodoNotFoundError(TodoError):
    """해당 id의 Todo가 없음"""

    def __init__(self, todo_id: int):
        super().__init__(ErrorKind.NOT_FOUND, todo_id)


def select_rejection(rejections: list[Rejection]) -> Rejection:
    """Pick the rejection that best explains why no route accepted the request

    Higher precedence wins; within one tier the first recorded one wins.
    No candidates at all means nothing matched the path.
    """
    if not rejections:
        return Rejection(ErrorKind.ROUTE_NOT_FOUND)
    return max(rejections, key=lambda rejection: rejection.precedence)
