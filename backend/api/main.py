"""FastAPI Application

Main application entry point
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from backend.api.middleware import setup_error_handlers
from backend.api.routes import demo_routes, todo_routes
from backend.app.core.config import settings
from backend.app.core.logging import get_logger, setup_logging
from backend.app.core.todo_store import TodoStore
from backend.app.routing import Dispatcher

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler

    Startup: logging
    Shutdown: the store is dropped with the process
    """
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info(
        "Starting application",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        routes=len(app.state.dispatcher.routes),
    )

    yield

    logger.info("Application shutdown complete")


def create_app(
    store: Optional[TodoStore] = None,
    readme_path: Optional[str] = None,
) -> FastAPI:
    """Create FastAPI application

    Args:
        store: Todo 저장소 (없으면 빈 저장소 생성)
        readme_path: GET / 로 제공할 파일 경로
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.store = store if store is not None else TodoStore()
    app.state.dispatcher = Dispatcher(
        demo_routes(readme_path) + todo_routes(app.state.store)
    )

    setup_error_handlers(app)

    # methods=None: every verb, custom ones included, reaches the dispatcher
    app.router.add_route(
        "/{path:path}",
        app.state.dispatcher.dispatch,
        include_in_schema=False,
    )

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
