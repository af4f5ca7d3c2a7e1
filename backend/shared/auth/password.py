"""Password hashing for staff accounts.

BcryptHasher is the production hasher. bcrypt is deliberately slow, so both
hashing and verification are pushed to a worker thread with anyio to keep
the event loop responsive while a staff member logs in.

SimpleHasher stores an unsalted SHA-256 digest behind a "simple$" marker and
exists so the test suite does not pay the bcrypt cost on every login.
"""

from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

import bcrypt
from anyio import to_thread

SIMPLE_HASH_PREFIX = "simple$"


@runtime_checkable
class PasswordHasher(Protocol):
    async def hash(self, plain: str) -> str: ...

    async def verify(self, plain: str, hashed: str) -> bool: ...


class BcryptHasher:
    async def hash(self, plain: str) -> str:
        def _hash() -> str:
            return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

        return await to_thread.run_sync(_hash)

    async def verify(self, plain: str, hashed: str) -> bool:
        """Compare a password against a stored hash; a corrupt hash never matches."""

        def _check() -> bool:
            try:
                return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
            except ValueError:
                return False

        return await to_thread.run_sync(_check)


class SimpleHasher:
    async def hash(self, plain: str) -> str:
        return SIMPLE_HASH_PREFIX + _sha256(plain)

    async def verify(self, plain: str, hashed: str) -> bool:
        if not hashed.startswith(SIMPLE_HASH_PREFIX):
            return False
        return hashed.removeprefix(SIMPLE_HASH_PREFIX) == _sha256(plain)


def _sha256(plain: str) -> str:
    return hashlib.sha256(plain.encode("utf-8")).hexdigest()


_HASHERS: dict[str, type[BcryptHasher] | type[SimpleHasher]] = {
    "bcrypt": BcryptHasher,
    "simple": SimpleHasher,
}


def get_hasher(name: str = "bcrypt") -> PasswordHasher:
    """Return the hasher registered under ``name``."""
    try:
        return _HASHERS[name]()
    except KeyError:
        raise ValueError(f"Unknown password hasher: {name!r}") from None
