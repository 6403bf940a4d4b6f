# app/db/__init__.py
# Этот файл гарантирует, что все модели импортированы при первом импорте app.db

from app.db.base import Base
from app.db.models.role import Role
from app.db.models.user import User
from app.db.models.post import Post

# Экспортируем Base и модели наружу
__all__ = ["Base", "Role", "User", "Post"]
