"""
Credential service — registration and verification rules.

The service keeps no state of its own between calls; the store it is
constructed with is the only shared resource.  Neither the plaintext
secret nor the stored hash ever appears in a result or a log line.
"""

from __future__ import annotations

import logging

from auth.password import (
    DEFAULT_ROUNDS,
    check_rounds,
    hash_password_async,
    verify_password_async,
)
from auth.results import AuthFailure, AuthResult, AuthSuccess, FailureKind
from database.credential_store import CredentialStore, InsertOutcome, StorageError
from database.models import CredentialRecord

logger = logging.getLogger(__name__)

MSG_REQUIRED = "Username and password are required"
MSG_EXISTS = "User already exists"
MSG_CREATED = "User created successfully"
MSG_NOT_FOUND = "User not found"
MSG_BAD_PASSWORD = "Invalid password"
MSG_LOGGED_IN = "Login successful!"
MSG_INTERNAL = "Server error"


def _validate(identity: object, secret: object) -> AuthFailure | None:
    if not isinstance(identity, str) or not isinstance(secret, str):
        return AuthFailure(kind=FailureKind.INVALID_INPUT, message=MSG_REQUIRED)
    if not identity or not secret:
        return AuthFailure(kind=FailureKind.INVALID_INPUT, message=MSG_REQUIRED)
    return None


class CredentialService:
    """Register identities and verify login attempts against a store."""

    def __init__(self, store: CredentialStore, rounds: int = DEFAULT_ROUNDS) -> None:
        self.store = store
        self.rounds = check_rounds(rounds)

    async def register(self, identity: str, secret: str) -> AuthResult:
        """
        Create a credential record for ``identity``.

        Fails with ``DUPLICATE_IDENTITY`` when the identity exists, either
        before hashing or when a concurrent registration wins the insert.
        """
        invalid = _validate(identity, secret)
        if invalid is not None:
            return invalid

        try:
            if await self.store.find_by_identity(identity) is not None:
                logger.warning("Registration rejected, user exists: %s", identity)
                return AuthFailure(kind=FailureKind.DUPLICATE_IDENTITY, message=MSG_EXISTS)

            secret_hash = await hash_password_async(secret, self.rounds)
            outcome = await self.store.insert(
                CredentialRecord(identity=identity, secret_hash=secret_hash)
            )
        except StorageError:
            logger.exception("Signup error for %s", identity)
            return AuthFailure(kind=FailureKind.INTERNAL, message=MSG_INTERNAL)

        if outcome is InsertOutcome.ALREADY_EXISTS:
            logger.warning("Registration lost insert race, user exists: %s", identity)
            return AuthFailure(kind=FailureKind.DUPLICATE_IDENTITY, message=MSG_EXISTS)

        logger.info("Registered user %s", identity)
        return AuthSuccess(message=MSG_CREATED)

    async def verify(self, identity: str, secret: str) -> AuthResult:
        """Check ``secret`` against the stored hash for ``identity``."""
        invalid = _validate(identity, secret)
        if invalid is not None:
            return invalid

        try:
            record = await self.store.find_by_identity(identity)
        except StorageError:
            logger.exception("Login error for %s", identity)
            return AuthFailure(kind=FailureKind.INTERNAL, message=MSG_INTERNAL)

        if record is None:
            logger.warning("Login failed, unknown user: %s", identity)
            return AuthFailure(kind=FailureKind.UNKNOWN_IDENTITY, message=MSG_NOT_FOUND)

        if not await verify_password_async(secret, record.secret_hash):
            logger.warning("Login failed, wrong password for %s", identity)
            return AuthFailure(kind=FailureKind.INVALID_CREDENTIAL, message=MSG_BAD_PASSWORD)

        logger.info("Login: %s", identity)
        return AuthSuccess(message=MSG_LOGGED_IN)
