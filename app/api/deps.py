# app/api/deps.py
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import Forbidden, Unauthenticated
from app.core.security import decode_access_token
from app.crud.role import get_role
from app.db.session import SessionLocal
from app.schemas.auth import RequestContext

logger = logging.getLogger(__name__)

# auto_error=False: сами отвечаем 401 в общем формате
bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> RequestContext:
    """Любой пользователь с валидным токеном"""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Токен не предоставлен")

    payload = decode_access_token(credentials.credentials)
    return RequestContext(user_id=payload.user_id, role_id=payload.role_id)


def require_roles(*allowed_roles: str):
    """
    Access Guard для маршрута: проверяет токен и, если список ролей не пуст,
    сверяет название роли пользователя со списком.

    Пример: Depends(require_roles(settings.TEACHER_ROLE))
    """
    allowed = frozenset(allowed_roles)

    def guard(
        context: RequestContext = Depends(get_request_context),
        db: Session = Depends(get_db),
    ) -> RequestContext:
        if not allowed:
            return context

        role = get_role(db, context.role_id)
        if role is None:
            logger.warning(f"[Guard] Роль id={context.role_id} не найдена (user_id={context.user_id})")
            raise Forbidden("Роль пользователя не найдена")

        if role.name not in allowed:
            logger.debug(f"[Guard] user_id={context.user_id} с ролью {role.name!r} не входит в {sorted(allowed)}")
            raise Forbidden("Доступ запрещён: недостаточно прав для этого ресурса")

        return context.model_copy(update={"role_name": role.name})

    return guard
