from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    first_name: str = Field(alias="nome", min_length=1)
    last_name: str = Field(alias="sobrenome", min_length=1)
    phone: Optional[str] = Field(default=None, alias="telefone")
    email: EmailStr
    role_id: int = Field(alias="papelUsuarioID")
    password: str = Field(alias="senha", min_length=1)

    class Config:
        populate_by_name = True


class UserUpdate(BaseModel):
    # Все поля необязательные: частичное обновление
    full_name: Optional[str] = Field(default=None, alias="nomeCompleto")
    phone: Optional[str] = Field(default=None, alias="telefone")
    email: Optional[EmailStr] = None
    role_id: Optional[int] = Field(default=None, alias="papelUsuarioID")
    password: Optional[str] = Field(default=None, alias="senha")

    class Config:
        populate_by_name = True
        # Неизвестные поля (например "nome") - ошибка, а не тихий 200
        extra = "forbid"


class UserOut(BaseModel):
    # Пароля здесь нет и быть не должно
    id: int
    full_name: str = Field(alias="nomeCompleto")
    phone: Optional[str] = Field(default=None, alias="telefone")
    email: str
    role_id: int = Field(alias="papelUsuarioID")
    created_at: Optional[datetime] = Field(default=None, alias="dataCadastro")

    class Config:
        from_attributes = True
        populate_by_name = True
