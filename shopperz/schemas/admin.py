"""Admin console schemas"""

from pydantic import Field

from .base import BaseSchema

class AdminLoginRequest(BaseSchema):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class TokenResponse(BaseSchema):
    access_token: str
    token_type: str = "bearer"

class CategoryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
