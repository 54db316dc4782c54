"""
CampusHub Backend — Session Gate
==================================

What:  Binds an authenticated Principal to an opaque session token and turns
       that token back into a Principal on later requests.
Why:   Two explicit functions (serialize_principal / resolve_principal)
       replace the framework-level serialize/deserialize hooks; both are
       testable on their own with nothing registered globally.

Token format:
    secrets.token_urlsafe(32) → 43 url-safe characters, 256 bits of entropy.
    The token has no structure: it does not encode the user id, a counter or
    a timestamp. Only SHA-256(token) is stored, so a copy of the table cannot
    be replayed as cookies.

State per request:
    Anonymous      no cookie, or cookie that does not resolve
    Authenticated  cookie resolves to a live, unrevoked, unexpired session

Fail closed:
    Malformed, tampered, unknown, expired or revoked tokens, and store errors
    during resolution, all yield None. There is no reduced-trust state.
"""

import hashlib
import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.principal import Principal
from campushub.config import settings
from campushub.database import store_guard
from campushub.exceptions import StoreUnavailableError
from campushub.models.session import AuthSession
from campushub.models.user import User

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{43}$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("ascii")).hexdigest()


def is_well_formed(token: Optional[str]) -> bool:
    return isinstance(token, str) and bool(_TOKEN_PATTERN.match(token))


class SessionGate:
    """
    Issues, resolves and revokes server-side sessions.

    Args:
        ttl_seconds: Idle lifetime. Defaults to settings.session_ttl_seconds,
            read at call time so configuration changes take effect.
    """

    def __init__(self, ttl_seconds: Optional[int] = None):
        self._ttl_seconds = ttl_seconds

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self._ttl_seconds or settings.session_ttl_seconds)

    async def serialize_principal(self, db: AsyncSession, principal: Principal) -> str:
        """Create a session for `principal` and return its opaque token."""
        token = secrets.token_urlsafe(TOKEN_BYTES)
        now = _utcnow()
        record = AuthSession(
            token_hash=token_digest(token),
            user_id=principal.id,
            created_at=now,
            last_seen_at=now,
            expires_at=now + self.ttl,
            data={},
        )
        with store_guard("issue session"):
            db.add(record)
            await db.flush()
        logger.info("Session issued for user %s", principal.id)
        return token

    async def resolve_principal(self, db: AsyncSession, token: Optional[str]) -> Optional[Principal]:
        """
        Return the Principal behind `token`, or None.

        A live session has its expiry pushed forward by one TTL.
        """
        if not is_well_formed(token):
            return None

        now = _utcnow()
        try:
            with store_guard("resolve session"):
                result = await db.execute(
                    select(AuthSession, User)
                    .join(User, User.id == AuthSession.user_id)
                    .where(
                        AuthSession.token_hash == token_digest(token),
                        AuthSession.revoked_at.is_(None),
                        AuthSession.expires_at > now,
                    )
                )
                row = result.first()
                if row is None:
                    return None

                record, user = row
                record.last_seen_at = now
                record.expires_at = now + self.ttl
                await db.flush()
        except StoreUnavailableError:
            logger.warning("Session resolution failed; treating request as anonymous")
            return None

        return Principal.from_user(user)

    async def invalidate(self, db: AsyncSession, token: Optional[str]) -> bool:
        """Revoke the session behind `token`. Returns True if one was revoked."""
        if not is_well_formed(token):
            return False
        with store_guard("revoke session"):
            result = await db.execute(
                update(AuthSession)
                .where(
                    AuthSession.token_hash == token_digest(token),
                    AuthSession.revoked_at.is_(None),
                )
                .values(revoked_at=_utcnow())
            )
        revoked = (result.rowcount or 0) > 0
        if revoked:
            logger.info("Session revoked")
        return revoked

    async def purge_expired(self, db: AsyncSession) -> int:
        """Delete expired and revoked sessions. Returns the number removed."""
        with store_guard("purge sessions"):
            result = await db.execute(
                delete(AuthSession).where(
                    or_(
                        AuthSession.expires_at <= _utcnow(),
                        AuthSession.revoked_at.is_not(None),
                    )
                )
            )
        removed = result.rowcount or 0
        if removed:
            logger.info("Purged %d stale sessions", removed)
        return removed


session_gate = SessionGate()
