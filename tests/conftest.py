import os
import tempfile
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('UPLOAD_DIR', tempfile.mkdtemp(prefix='school-posts-uploads-'))

from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_db  # noqa: E402
from app.core.security import create_access_token, get_password_hash  # noqa: E402
from app.db import Base, Post, Role, User  # noqa: E402
from app.main import app  # noqa: E402

STUDENT_ROLE_ID = 1
TEACHER_ROLE_ID = 2


@pytest.fixture
def db_session():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = testing_session_local()
    db.add_all([
        Role(id=STUDENT_ROLE_ID, name='Student'),
        Role(id=TEACHER_ROLE_ID, name='Teacher'),
    ])
    db.commit()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def create_user(db, *, email: str, role_id: int, password: str = '123', full_name: str = 'Cristhian Mendes') -> User:
    user = User(
        full_name=full_name,
        phone='11933049341',
        email=email,
        hashed_password=get_password_hash(password),
        role_id=role_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_post(db, *, author: User, title: str = 'teste', description: str = 'teste',
                visible: bool = True, created_at: datetime | None = None) -> Post:
    post = Post(
        title=title,
        description=description,
        is_visible=visible,
        image_path='fake-path.jpg',
        author_id=author.id,
    )
    if created_at is not None:
        post.created_at = created_at
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def auth_header(user: User) -> dict:
    return {'Authorization': f'Bearer {create_access_token(user.id, user.role_id)}'}


@pytest.fixture
def teacher(db_session) -> User:
    return create_user(db_session, email='professor@escola.com.br', role_id=TEACHER_ROLE_ID)


@pytest.fixture
def student(db_session) -> User:
    return create_user(db_session, email='aluno@escola.com.br', role_id=STUDENT_ROLE_ID, full_name='Ana Souza')


@pytest.fixture
def dated_posts(db_session, teacher):
    """Восемь видимых постов, каждый следующий на час новее предыдущего"""
    base = datetime(2026, 3, 1, 8, 0)
    return [
        create_post(db_session, author=teacher, title=f'post {i}', created_at=base + timedelta(hours=i))
        for i in range(8)
    ]
