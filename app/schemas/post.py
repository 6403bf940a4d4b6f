from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    title: str
    description: str
    visibility: str = "false"  # приходит из multipart как текст: "true" / "false"
    author_id: int
    image_path: Optional[str] = None


class PostUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[str] = None
    image_path: Optional[str] = None


class PostOut(BaseModel):
    id: int
    title: str = Field(alias="titulo")
    description: str = Field(alias="descricao")
    is_visible: bool = Field(alias="visibilidade")
    image_path: str = Field(alias="caminhoImagem")
    author_id: int = Field(alias="autorID")
    created_at: Optional[datetime] = Field(default=None, alias="dataPublicacao")

    class Config:
        from_attributes = True
        populate_by_name = True


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class PostPage(BaseModel):
    data: List[PostOut]
    pagination: Pagination
