"""API Request Schemas"""

from pydantic import BaseModel, Field

U32_MAX = 2**32 - 1


class Employee(BaseModel):
    """POST /register 요청"""

    name: str = Field(..., description="이름")
    rate: int = Field(..., ge=0, le=U32_MAX, description="시급")
