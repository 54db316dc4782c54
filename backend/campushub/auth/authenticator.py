"""
CampusHub Backend — Authenticator Interface
=============================================

What:  The credential challenge for a login attempt, independent of HTTP.
Why:   One polymorphic interface; today the only variant is local
       username/password. OAuth or campus SSO would be further subclasses of
       the same interface, selected where `authenticator` is assigned below.

Contract:
    - authenticate() returns a Principal or raises AuthFailureError
    - every failure (unknown user, wrong password, malformed input) is the
      same AuthFailureError; callers must not branch on the cause
    - implementations keep no per-call state and are safe to call concurrently
"""

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.credential_store import CredentialStore, credential_store
from campushub.auth.principal import Principal


class Authenticator(ABC):
    """Abstract credential challenge."""

    @abstractmethod
    async def authenticate(self, db: AsyncSession, username: Any, password: Any) -> Principal:
        """
        Verify the presented credentials.

        Args:
            db: Request-scoped database session
            username / password: Raw values from the request body; may be
                missing or of the wrong type

        Returns:
            Principal of the authenticated user

        Raises:
            AuthFailureError: on any failure
            StoreUnavailableError: database unreachable
        """
        ...


class LocalAuthenticator(Authenticator):
    """Username/password checked against the local credential store."""

    def __init__(self, store: CredentialStore):
        self._store = store

    async def authenticate(self, db: AsyncSession, username: Any, password: Any) -> Principal:
        return await self._store.verify(db, username, password)


authenticator: Authenticator = LocalAuthenticator(credential_store)
