import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from app.core.security import get_password_hash, verify_password, create_access_token
from app.crud.role import get_role
from app.db.models.role import Role
from app.db.models.user import User
from app.schemas.auth import LoginOut
from app.schemas.user import UserCreate, UserUpdate, UserOut

logger = logging.getLogger(__name__)


def to_public(user: User) -> UserOut:
    """Единственное место, где запись пользователя превращается в ответ API (без пароля)"""
    return UserOut.model_validate(user)


def normalize_email(email: str) -> str:
    # Домен без учёта регистра, как это делает EmailStr при регистрации
    local, sep, domain = email.strip().rpartition("@")
    return f"{local}{sep}{domain.lower()}" if sep else email.strip()


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def _ensure_role_exists(db: Session, role_id: int):
    if get_role(db, role_id) is None:
        raise ValidationError(f"Роль с id={role_id} не существует")


def _commit_user(db: Session, user: User, email: str):
    # Уникальный индекс по email - окончательная проверка (гонка между запросами)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if get_user_by_email(db, email) is not None:
            raise DuplicateEmail() from exc
        raise
    db.refresh(user)


def create_user(db: Session, user_data: UserCreate) -> UserOut:
    if get_user_by_email(db, user_data.email):
        raise DuplicateEmail()
    _ensure_role_exists(db, user_data.role_id)

    db_user = User(
        full_name=f"{user_data.first_name} {user_data.last_name}",
        phone=user_data.phone,
        email=normalize_email(user_data.email),
        hashed_password=get_password_hash(user_data.password),
        role_id=user_data.role_id,
    )
    db.add(db_user)
    _commit_user(db, db_user, user_data.email)
    logger.info(f"[Users] Создан пользователь id={db_user.id} ({db_user.email})")
    return to_public(db_user)


def get_users(db: Session) -> List[UserOut]:
    return [to_public(u) for u in db.query(User).order_by(User.id).all()]


def get_users_by_type(db: Session, user_type: str) -> List[UserOut]:
    """
    Пользователи одной роли.
    Число трактуется как id роли, иначе как название роли (без учёта регистра).
    """
    query = db.query(User)
    if user_type.isdigit():
        query = query.filter(User.role_id == int(user_type))
    else:
        query = query.join(Role, User.role_id == Role.id).filter(
            func.lower(Role.name) == user_type.strip().lower()
        )
    return [to_public(u) for u in query.order_by(User.id).all()]


def get_user(db: Session, user_id: int) -> Optional[UserOut]:
    user = get_user_by_id(db, user_id)
    return to_public(user) if user else None


def update_user(db: Session, user_id: int, patch: UserUpdate) -> UserOut:
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFound("Пользователь не найден")

    data = patch.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in data:
        data["email"] = normalize_email(data["email"])
        existing = get_user_by_email(db, data["email"])
        if existing and existing.id != user_id:
            raise DuplicateEmail("Email уже используется другим пользователем")

    if "role_id" in data:
        _ensure_role_exists(db, data["role_id"])

    if "password" in data:
        user.hashed_password = get_password_hash(data.pop("password"))

    for field, value in data.items():
        setattr(user, field, value)

    _commit_user(db, user, data.get("email", user.email))
    logger.info(f"[Users] Обновлён пользователь id={user_id}: {sorted(patch.model_fields_set)}")
    return to_public(user)


def delete_user(db: Session, user_id: int) -> None:
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFound("Пользователь не найден")
    db.delete(user)
    db.commit()
    logger.info(f"[Users] Удалён пользователь id={user_id}")


def login_user(db: Session, email: str, password: str) -> LoginOut:
    user = get_user_by_email(db, email)
    # Одна и та же ошибка для "нет такого email" и "неверный пароль"
    if not user or not verify_password(password, user.hashed_password):
        logger.warning(f"[Auth] Неудачная попытка входа: {email}")
        raise InvalidCredentials()

    token = create_access_token(user.id, user.role_id)
    logger.info(f"[Auth] Вход выполнен: user_id={user.id}")
    return LoginOut(user=to_public(user), token=token)
