"""
Cryptographic helpers — password hashing and verification.

Uses argon2 for passwords (via argon2-cffi). The ``*_async``
variants run the hasher in a worker thread and are the ones coroutines call.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_password_hasher = PasswordHasher()


def hash_password(plain_password: str) -> str:
    """Hash *plain_password* with argon2id.

    Returns:
        Argon2 hash string (includes algorithm parameters and salt).
    """
    return _password_hasher.hash(plain_password)


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    """Verify *plain_password* against an argon2 *password_hash*.

    Returns:
        ``True`` if the password matches, ``False`` for any failure
        (wrong password, invalid hash, no hash stored, etc.).
    """
    if not password_hash or not isinstance(plain_password, str):
        return False
    try:
        return _password_hasher.verify(password_hash, plain_password)
    except (VerificationError, InvalidHashError):
        return False


async def hash_password_async(plain_password: str) -> str:
    return await asyncio.to_thread(hash_password, plain_password)


async def verify_password_async(
    plain_password: str, password_hash: Optional[str]
) -> bool:
    return await asyncio.to_thread(verify_password, plain_password, password_hash)
