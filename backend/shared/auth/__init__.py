"""Staff authentication: accounts, password hashing, and server-side sessions."""

from shared.auth.models import AuthSession, StaffAccount, StaffRole
from shared.auth.password import BcryptHasher, PasswordHasher, SimpleHasher, get_hasher
from shared.auth.service import AuthError, AuthService, normalize_email
from shared.auth.session_store import AuthSessionStore
from shared.auth.settings import AuthSettings

__all__ = [
    "AuthError",
    "AuthService",
    "AuthSession",
    "AuthSessionStore",
    "AuthSettings",
    "BcryptHasher",
    "PasswordHasher",
    "SimpleHasher",
    "StaffAccount",
    "StaffRole",
    "get_hasher",
    "normalize_email",
]
