"""
Result types returned by ``CredentialService``.

Expected outcomes (bad input, duplicates, wrong password …) are values,
not exceptions: every call returns either ``AuthSuccess`` or
``AuthFailure`` and callers branch on ``result.ok`` / ``result.kind``.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel


class FailureKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    DUPLICATE_IDENTITY = "duplicate_identity"
    UNKNOWN_IDENTITY = "unknown_identity"
    INVALID_CREDENTIAL = "invalid_credential"
    INTERNAL = "internal"


class AuthSuccess(BaseModel):
    ok: Literal[True] = True
    message: str


class AuthFailure(BaseModel):
    ok: Literal[False] = False
    kind: FailureKind
    message: str


AuthResult = Union[AuthSuccess, AuthFailure]
