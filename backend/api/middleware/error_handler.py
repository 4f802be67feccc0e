"""Error Handler Middleware

전역 에러 핸들링. 라우터/추출기에서 올라온 Rejection 과 예상하지 못한 예외를
모두 {code, message} 형태의 JSON 응답 하나로 변환한다.
"""

from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from backend.api.schemas.response import ErrorMessage
from backend.app.core.errors import ErrorKind, ServiceError
from backend.app.core.logging import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Uniform error body: ``{"code": status_code, "message": message}``"""
    return JSONResponse(
        status_code=status_code,
        content=ErrorMessage(code=status_code, message=message).model_dump(),
    )


def render_error(error: ServiceError) -> JSONResponse:
    """ServiceError -> JSONResponse"""
    if error.kind is ErrorKind.INTERNAL:
        logger.error("Unhandled rejection", error=repr(error))
    return error_response(error.status_code, error.message)


def render_internal() -> JSONResponse:
    return render_error(ServiceError(ErrorKind.INTERNAL))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """예상하지 못한 예외를 500 으로 변환하는 미들웨어

    내부 정보는 로그에만 남기고 클라이언트에는 노출하지 않는다.
    ServiceError 는 앱 안쪽의 service_error_handler 가 먼저 응답으로 바꾼다.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        try:
            return await call_next(request)

        except Exception as e:
            logger.exception(
                "Unexpected error",
                path=request.url.path,
                error=str(e),
            )
            return render_internal()


def setup_error_handlers(app: FastAPI) -> None:
    """에러 핸들러 설정

    Args:
        app: FastAPI 앱
    """
    app.add_middleware(ErrorHandlerMiddleware)

    @app.exception_handler(ServiceError)
    async def service_error_handler(
        request: Request,
        exc: ServiceError,
    ) -> JSONResponse:
        """Rejection / 도메인 에러 핸들러"""
        logger.debug(
            "Service error",
            kind=exc.kind.value,
            details=exc.details,
        )
        return render_error(exc)
