"""API Response Schemas"""

from pydantic import BaseModel, Field


class ErrorMessage(BaseModel):
    """에러 응답

    code 는 항상 HTTP 상태 코드와 같다.
    """

    code: int = Field(..., description="HTTP 상태 코드")
    message: str = Field(..., description="기계가 읽을 수 있는 짧은 메시지")


class GreetingResponse(BaseModel):
    """GET /hello/{name} 응답"""

    name: str
    host: str
    agent: str
