"""Models - Pydantic 모델 패키지"""

from .todo import U64_MAX, ListOptions, Todo

__all__ = [
    "Todo",
    "ListOptions",
    "U64_MAX",
]
