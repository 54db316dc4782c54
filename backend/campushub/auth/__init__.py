"""
CampusHub Backend — Authentication & Session Gate
===================================================

    Credential Store  → users table, argon2id hashes, uniqueness
    Authenticator     → credential challenge (local username/password)
    Session Gate      → opaque server-side sessions behind an HttpOnly cookie

Route handlers only ever see `Principal` and `AuthContext`.
"""

from campushub.auth.authenticator import Authenticator, LocalAuthenticator, authenticator
from campushub.auth.credential_store import CredentialStore, credential_store
from campushub.auth.deps import get_auth_context, require_principal
from campushub.auth.principal import ANONYMOUS, AuthContext, Principal, PrincipalCandidate
from campushub.auth.sessions import SessionGate, session_gate

__all__ = [
    "ANONYMOUS",
    "AuthContext",
    "Authenticator",
    "CredentialStore",
    "LocalAuthenticator",
    "Principal",
    "PrincipalCandidate",
    "SessionGate",
    "authenticator",
    "credential_store",
    "get_auth_context",
    "require_principal",
    "session_gate",
]
