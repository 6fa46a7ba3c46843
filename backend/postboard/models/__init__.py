# Models package init
"""
ORM models, one per collection. Importing this package registers both
tables on `Base.metadata` (used by Database.create_all and Alembic).
"""

from postboard.models.post import Post
from postboard.models.user import User

__all__ = ["Post", "User"]
