"""
CampusHub Backend — Principal & Authorization Context
=======================================================

What:  Immutable value types that the rest of the application uses to talk
       about "who is making this request".
Why:   Route handlers receive an explicit AuthContext instead of reading
       ambient global state, and the Principal type has no secret fields, so
       it is safe to return, log or attach anywhere.
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from campushub.exceptions import UnauthorizedError


@dataclass(frozen=True)
class Principal:
    """An authenticated identity. Carries no password material."""

    id: uuid.UUID
    username: str
    email: str
    firstname: str
    lastname: str
    campus: str

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            firstname=user.firstname,
            lastname=user.lastname,
            campus=user.campus,
        )


@dataclass(frozen=True)
class PrincipalCandidate:
    """Identity fields submitted at signup, before a password hash exists."""

    username: str
    email: str
    firstname: str
    lastname: str
    campus: str


@dataclass(frozen=True)
class AuthContext:
    """
    Per-request authorization state, built once by the session dependency.

    Anonymous when `principal` is None. The raw session token is kept only so
    logout can revoke it; it is excluded from repr.
    """

    principal: Optional[Principal] = None
    session_token: Optional[str] = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    def require_authenticated(self) -> Principal:
        """Return the principal or raise UnauthorizedError; never a partial identity."""
        if self.principal is None:
            raise UnauthorizedError()
        return self.principal


ANONYMOUS = AuthContext()
