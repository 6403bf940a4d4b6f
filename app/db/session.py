# app/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db.base import Base

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    # Регистрируем модели в Base.metadata перед create_all
    import app.db.models  # noqa: F401
    from app.crud.role import ensure_roles

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_roles(db, [settings.STUDENT_ROLE, settings.TEACHER_ROLE])
    finally:
        db.close()
