"""
bcrypt helpers for credential secrets.

Secrets are encoded as UTF-8 and cut to bcrypt's 72-byte input limit
before hashing and checking, so any non-empty secret round-trips; bytes
past the limit do not affect the hash.  The ``*_async`` variants run the
CPU-bound bcrypt call in a worker thread so one slow hash never stalls
the event loop.
"""

from __future__ import annotations

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10
MIN_ROUNDS = 4
MAX_ROUNDS = 31
MAX_PASSWORD_BYTES = 72


def check_rounds(rounds: int) -> int:
    if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
        raise ValueError(
            f"bcrypt work factor must be between {MIN_ROUNDS} and {MAX_ROUNDS}, got {rounds}"
        )
    return rounds


def _secret_bytes(password: str) -> bytes:
    return password.encode()[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_secret_bytes(password), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """True when ``password`` matches; a malformed hash counts as a mismatch."""
    try:
        return bcrypt.checkpw(_secret_bytes(password), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
