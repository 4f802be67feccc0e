"""API Schemas

API 요청/응답 스키마
"""

from backend.api.schemas.request import Employee
from backend.api.schemas.response import ErrorMessage, GreetingResponse

__all__ = [
    # Request
    "Employee",
    # Response
    "ErrorMessage",
    "GreetingResponse",
]
