"""Password hashing and verification (argon2id)."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from campushub.config import settings

_PH = PasswordHasher(
    time_cost=settings.password_hash_time_cost,
    memory_cost=settings.password_hash_memory_cost,
)

# Verified against when the username is unknown, so both failure paths pay
# for one hash computation.
_DUMMY_HASH = _PH.hash("campushub-unknown-user")


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("password_blank")
    return _PH.hash(plain)


def verify_password(hash_value: str, plain: str) -> bool:
    if not hash_value or not plain:
        return False
    try:
        return _PH.verify(hash_value, plain)
    except (VerificationError, InvalidHashError):
        return False


def verify_dummy(plain: str) -> bool:
    """Spend the same work as a real verification; always False."""
    verify_password(_DUMMY_HASH, plain if isinstance(plain, str) and plain else "-")
    return False
