"""
CampusHub Backend — ORM Models
================================

Importing this package registers every table with Base.metadata, which is
what Alembic autogenerate and `create_all()` read.
"""

from campushub.models.club import Club
from campushub.models.profile import UserProfile
from campushub.models.project import Project
from campushub.models.session import AuthSession
from campushub.models.user import User

__all__ = ["AuthSession", "Club", "Project", "User", "UserProfile"]
