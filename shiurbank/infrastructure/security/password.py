"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated. Accounts
migrated from the previous ShiurBank deployment carry plain bcrypt hashes
(``$2a$`` prefix, no pre-hash); verify_password accepts both.
"""

import base64
import hashlib

import bcrypt

LEGACY_PREFIX = "$2a$"


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password (current or legacy format)."""
    try:
        hashed = hashed_password.encode("utf-8")
        if hashed_password.startswith(LEGACY_PREFIX):
            return bool(bcrypt.checkpw(plain_password.encode("utf-8")[:72], hashed))
        return bool(bcrypt.checkpw(_prehash(plain_password), hashed))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt())
    return hashed.decode("utf-8")
