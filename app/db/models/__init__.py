from app.db.base import Base
from app.db.models.role import Role
from app.db.models.user import User
from app.db.models.post import Post

__all__ = ["Base", "Role", "User", "Post"]
