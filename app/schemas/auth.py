from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.user import UserOut


class LoginIn(BaseModel):
    email: str
    password: str = Field(alias="senha")

    class Config:
        populate_by_name = True


class LoginOut(BaseModel):
    user: UserOut
    token: str


class TokenPayload(BaseModel):
    user_id: int
    role_id: int


class RequestContext(BaseModel):
    """Кто делает запрос: заполняется Access Guard'ом из токена"""
    user_id: int
    role_id: int
    role_name: Optional[str] = None
