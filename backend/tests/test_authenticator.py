"""
CampusHub Backend — Authenticator Tests
=========================================

What we test:
    ✅ LocalAuthenticator is an Authenticator and delegates to its store
    ✅ Failures surface as AuthFailureError only
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from campushub.auth.authenticator import Authenticator, LocalAuthenticator, authenticator
from campushub.auth.credential_store import CredentialStore
from campushub.auth.principal import Principal, PrincipalCandidate
from campushub.exceptions import AuthFailureError


class TestLocalAuthenticator:

    def test_module_authenticator_is_local(self):
        assert isinstance(authenticator, Authenticator)
        assert isinstance(authenticator, LocalAuthenticator)

    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            Authenticator()

    @pytest.mark.asyncio
    async def test_delegates_to_store(self, mock_db_session):
        principal = Principal(
            id=uuid4(), username="alice", email="a@x.com",
            firstname="Alice", lastname="Liddell", campus="North",
        )
        store = MagicMock(spec=CredentialStore)
        store.verify = AsyncMock(return_value=principal)

        result = await LocalAuthenticator(store).authenticate(mock_db_session, "alice", "p1")

        assert result is principal
        store.verify.assert_awaited_once_with(mock_db_session, "alice", "p1")

    @pytest.mark.asyncio
    async def test_scenario_authenticate_then_reject(self, db):
        store = CredentialStore()
        await store.register(
            db,
            PrincipalCandidate(
                username="alice", email="a@x.com",
                firstname="Alice", lastname="Liddell", campus="North",
            ),
            "p1",
        )
        local = LocalAuthenticator(store)

        principal = await local.authenticate(db, "alice", "p1")
        assert principal.username == "alice"
        assert not hasattr(principal, "password")
        assert not hasattr(principal, "password_hash")

        with pytest.raises(AuthFailureError):
            await local.authenticate(db, "alice", "wrong")

    @pytest.mark.asyncio
    async def test_missing_fields(self, db):
        with pytest.raises(AuthFailureError):
            await LocalAuthenticator(CredentialStore()).authenticate(db, None, None)
