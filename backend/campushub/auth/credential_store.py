"""
CampusHub Backend — Credential Store
======================================

What:  Persists principal records and owns password verification.
Why:   The only component that ever sees a password hash. Everything it hands
       out is a `Principal`, which has no secret fields.
How:   argon2id hashing (run in the threadpool so the event loop keeps
       serving other requests), database UNIQUE constraints for identity
       uniqueness.

Uniqueness:
    A SELECT pre-check gives the common duplicate case a fast answer, but the
    UNIQUE indexes on users.username / users.email are what actually decide a
    race between two concurrent signups. The loser gets an IntegrityError,
    its transaction is rolled back, and it sees DuplicateIdentityError.
"""

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from campushub.auth.passwords import hash_password, verify_dummy, verify_password
from campushub.auth.principal import Principal, PrincipalCandidate
from campushub.database import store_guard
from campushub.exceptions import AuthFailureError, DuplicateIdentityError, ValidationError
from campushub.models.user import User

logger = logging.getLogger(__name__)


def normalize_username(username: str) -> str:
    return (username or "").strip()


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class CredentialStore:
    """Registration and credential verification against the `users` table."""

    async def register(
        self,
        db: AsyncSession,
        candidate: PrincipalCandidate,
        plaintext_password: str,
    ) -> Principal:
        """
        Create a user with a freshly salted argon2id hash.

        Raises:
            ValidationError: blank identity field or password
            DuplicateIdentityError: username or email already taken; the
                store is left unchanged
            StoreUnavailableError: database unreachable
        """
        username = normalize_username(candidate.username)
        email = normalize_email(candidate.email)
        if not username or not email or not plaintext_password:
            raise ValidationError(message="Error during signup")

        with store_guard("signup pre-check"):
            existing = await db.execute(
                select(User.id).where(
                    or_(User.username == username, User.email == email)
                )
            )
        if existing.first() is not None:
            raise DuplicateIdentityError(context={"stage": "pre-check"})

        password_hash = await run_in_threadpool(hash_password, plaintext_password)

        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            firstname=candidate.firstname.strip(),
            lastname=candidate.lastname.strip(),
            campus=candidate.campus.strip(),
        )
        db.add(user)
        try:
            with store_guard("signup insert"):
                await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateIdentityError(context={"stage": "unique-constraint"})

        logger.info("Registered user %s", user.id)
        return Principal.from_user(user)

    async def verify(
        self,
        db: AsyncSession,
        username: str,
        plaintext_password: str,
    ) -> Principal:
        """
        Check a username/password pair.

        Unknown user, wrong password and blank input all raise the same
        AuthFailureError after comparable hashing work.
        """
        if not isinstance(username, str) or not isinstance(plaintext_password, str):
            await run_in_threadpool(verify_dummy, "")
            raise AuthFailureError()

        name = normalize_username(username)
        if not name or not plaintext_password:
            await run_in_threadpool(verify_dummy, plaintext_password)
            raise AuthFailureError()

        user = await self._find_by_username(db, name)
        if user is None:
            await run_in_threadpool(verify_dummy, plaintext_password)
            raise AuthFailureError()

        ok = await run_in_threadpool(verify_password, user.password_hash, plaintext_password)
        if not ok:
            raise AuthFailureError()
        return Principal.from_user(user)

    async def _find_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        with store_guard("credential lookup"):
            result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()


credential_store = CredentialStore()
