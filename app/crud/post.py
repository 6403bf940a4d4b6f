import logging
import math
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, Query

from app.core.exceptions import NotFound, ValidationError
from app.db.models.post import Post
from app.schemas.post import Pagination, PostCreate, PostOut, PostPage, PostUpdate

logger = logging.getLogger(__name__)

AUTHOR_PAGE_SIZE = 10
FEED_PAGE_SIZE = 6
MAX_PAGE_SIZE = 100


def parse_visibility(value) -> bool:
    # Из формы приходит строка; всё, кроме "true", считаем скрытым постом
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def positive_or_default(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _matches_term(term: str):
    pattern = f"%{_escape_like(term)}%"
    return or_(
        Post.title.ilike(pattern, escape="\\"),
        Post.description.ilike(pattern, escape="\\"),
    )


def _newest_first(query: Query) -> Query:
    return query.order_by(Post.created_at.desc(), Post.id.desc())


def _paginate(query: Query, page: int, limit: int) -> PostPage:
    limit = min(limit, MAX_PAGE_SIZE)
    total = query.count()
    offset = (page - 1) * limit
    # Страница за концом списка: в базу не ходим, offset может не влезть в INTEGER
    posts = [] if offset >= total else (
        _newest_first(query)
        .offset(offset)
        .limit(limit)
        .all()
    )
    return PostPage(
        data=[PostOut.model_validate(p) for p in posts],
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            pages=math.ceil(total / limit),
        ),
    )


def create_post(db: Session, post_data: PostCreate) -> Post:
    if not post_data.image_path:
        raise ValidationError("Изображение обязательно")

    db_post = Post(
        title=post_data.title,
        description=post_data.description,
        is_visible=parse_visibility(post_data.visibility),
        image_path=post_data.image_path,
        author_id=post_data.author_id,
    )
    db.add(db_post)
    db.commit()
    db.refresh(db_post)
    logger.info(f"[Posts] Пост id={db_post.id} создан автором {db_post.author_id}")
    return db_post


def update_post(db: Session, post_id: int, patch: PostUpdate) -> Post:
    post = get_post_by_id(db, post_id)
    if not post:
        raise NotFound("Пост не найден")

    if patch.title is not None:
        post.title = patch.title
    if patch.description is not None:
        post.description = patch.description
    if patch.visibility is not None:
        post.is_visible = parse_visibility(patch.visibility)
    # Картинку меняем только если загрузили новую
    if patch.image_path:
        post.image_path = patch.image_path

    db.commit()
    db.refresh(post)
    logger.info(f"[Posts] Пост id={post_id} обновлён")
    return post


def get_all_posts(db: Session) -> List[Post]:
    return _newest_first(db.query(Post)).all()


def get_posts_by_author(db: Session, author_id: int, page=1, limit=AUTHOR_PAGE_SIZE) -> PostPage:
    page = positive_or_default(page, 1)
    limit = positive_or_default(limit, AUTHOR_PAGE_SIZE)
    query = db.query(Post).filter(Post.author_id == author_id)
    return _paginate(query, page, limit)


def get_feed_posts(db: Session, page=1, limit=FEED_PAGE_SIZE, q: Optional[str] = "") -> PostPage:
    page = positive_or_default(page, 1)
    limit = positive_or_default(limit, FEED_PAGE_SIZE)

    query = db.query(Post).filter(Post.is_visible.is_(True))
    term = (q or "").strip()
    if term:
        query = query.filter(_matches_term(term))
    return _paginate(query, page, limit)


def get_post_by_id(db: Session, post_id: int) -> Optional[Post]:
    return db.get(Post, post_id)


def delete_post(db: Session, post_id: int) -> None:
    post = get_post_by_id(db, post_id)
    if not post:
        raise NotFound("Пост не найден")
    db.delete(post)
    db.commit()
    logger.info(f"[Posts] Пост id={post_id} удалён")


def search_posts(db: Session, term: Optional[str]) -> List[Post]:
    term = (term or "").strip()
    if not term:
        raise ValidationError("Не указан поисковый запрос")
    return _newest_first(db.query(Post).filter(_matches_term(term))).all()
