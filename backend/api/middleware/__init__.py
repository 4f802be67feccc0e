"""API Middleware Package"""

from .error_handler import (
    ErrorHandlerMiddleware,
    error_response,
    render_error,
    setup_error_handlers,
)

__all__ = [
    "ErrorHandlerMiddleware",
    "error_response",
    "render_error",
    "setup_error_handlers",
]
