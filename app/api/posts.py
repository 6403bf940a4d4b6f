# app/api/posts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_roles
from app.core.config import settings
from app.core.exceptions import NotFound
from app.core.uploads import save_upload
from app.crud import post as crud_post
from app.schemas.auth import RequestContext
from app.schemas.post import PostCreate, PostOut, PostPage, PostUpdate

router = APIRouter()

# Списки ролей для маршрутов
teacher_only = require_roles(settings.TEACHER_ROLE)
school_members = require_roles(settings.TEACHER_ROLE, settings.STUDENT_ROLE)


@router.get("", response_model=List[PostOut])
def read_posts(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(teacher_only),
):
    return crud_post.get_all_posts(db)


@router.get("/me", response_model=PostPage)
def read_my_posts(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(teacher_only),
):
    return crud_post.get_posts_by_author(
        db,
        context.user_id,
        page=crud_post.positive_or_default(page, 1),
        limit=crud_post.positive_or_default(limit, crud_post.AUTHOR_PAGE_SIZE),
    )


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post(
    title: str = Form(..., alias="titulo"),
    description: str = Form(..., alias="descricao"),
    visibility: str = Form("false", alias="visibilidade"),
    image: Optional[UploadFile] = File(None, alias="imagem"),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(teacher_only),
):
    image_path = await save_upload(image) if image is not None and image.filename else None

    # Автор всегда берётся из токена, а не из формы
    return crud_post.create_post(db, PostCreate(
        title=title,
        description=description,
        visibility=visibility,
        author_id=context.user_id,
        image_path=image_path,
    ))


@router.get("/feed", response_model=PostPage)
def read_feed(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(school_members),
):
    return crud_post.get_feed_posts(
        db,
        page=crud_post.positive_or_default(page, 1),
        limit=crud_post.positive_or_default(limit, crud_post.FEED_PAGE_SIZE),
        q=q or "",
    )


@router.get("/search", response_model=List[PostOut])
def search_posts(
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(school_members),
):
    return crud_post.search_posts(db, q)


@router.get("/{post_id}", response_model=PostOut)
def read_post(
    post_id: int,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(teacher_only),
):
    post = crud_post.get_post_by_id(db, post_id)
    if not post:
        raise NotFound("Пост не найден")
    return post


@router.put("/{post_id}", response_model=PostOut)
async def update_post(
    post_id: int,
    title: Optional[str] = Form(None, alias="titulo"),
    description: Optional[str] = Form(None, alias="descricao"),
    visibility: Optional[str] = Form(None, alias="visibilidade"),
    image: Optional[UploadFile] = File(None, alias="imagem"),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(teacher_only),
):
    if crud_post.get_post_by_id(db, post_id) is None:
        raise NotFound("Пост не найден")

    image_path = await save_upload(image) if image is not None and image.filename else None
    return crud_post.update_post(db, post_id, PostUpdate(
        title=title,
        description=description,
        visibility=visibility,
        image_path=image_path,
    ))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(teacher_only),
):
    crud_post.delete_post(db, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
