from typing import Optional

from sqlalchemy.orm import Session
from app.db.models.role import Role


def get_role(db: Session, role_id: int) -> Optional[Role]:
    return db.get(Role, role_id)


def get_role_by_name(db: Session, name: str) -> Optional[Role]:
    return db.query(Role).filter(Role.name == name).first()


def ensure_roles(db: Session, names) -> None:
    """Создаёт недостающие роли (для базы без миграций)"""
    for name in names:
        if get_role_by_name(db, name) is None:
            db.add(Role(name=name))
    db.commit()
