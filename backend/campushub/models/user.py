"""
CampusHub Backend — User Model
================================

What:  ORM model for the `users` table: one row per principal.
Why:   The credential store persists identities here.

Table Design:
    - UUID primary key: non-sequential, cannot be enumerated
    - username / email: UNIQUE constraints are the only guard against two
      concurrent signups taking the same identity
    - password_hash: argon2id PHC string; the salt and cost parameters are
      encoded inside it, so no separate salt column is needed
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from campushub.database import Base


class User(Base):
    """
    A registered campus user.

    The password hash never leaves the credential store; everything else in
    the application works with the `Principal` view instead of this row.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="Login name, unique across all users",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Lower-cased email, unique across all users",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="argon2id hash (PHC string with embedded salt)",
    )

    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str] = mapped_column(String(100), nullable=False)
    campus: Mapped[str] = mapped_column(String(100), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        # password_hash deliberately absent
        return f"<User(id={self.id}, username='{self.username}')>"
