"""
Auth API routes — signup, login.

Both endpoints take ``{"username": ..., "password": ...}`` and answer with
``{"message": ...}`` on success or ``{"error": ...}`` on failure.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from auth.dependencies import get_credential_service
from auth.results import AuthFailure, AuthResult, FailureKind
from auth.service import MSG_REQUIRED, CredentialService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request schema ─────────────────────────────────────────────────────


class CredentialsRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


_FAILURE_STATUS = {
    FailureKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    FailureKind.DUPLICATE_IDENTITY: status.HTTP_400_BAD_REQUEST,
    FailureKind.UNKNOWN_IDENTITY: status.HTTP_400_BAD_REQUEST,
    FailureKind.INVALID_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    FailureKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def _read_credentials(request: Request) -> Optional[CredentialsRequest]:
    """Parse the JSON body; ``None`` when it is missing or malformed."""
    try:
        return CredentialsRequest.model_validate(await request.json())
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
        return None


def _to_response(result: AuthResult, success_status: int) -> JSONResponse:
    if isinstance(result, AuthFailure):
        return JSONResponse(
            status_code=_FAILURE_STATUS[result.kind],
            content={"error": result.message},
        )
    return JSONResponse(status_code=success_status, content={"message": result.message})


def _required() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": MSG_REQUIRED},
    )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup")
async def signup(
    request: Request,
    service: CredentialService = Depends(get_credential_service),
) -> JSONResponse:
    """Register a new user."""
    body = await _read_credentials(request)
    if body is None:
        return _required()
    result = await service.register(body.username or "", body.password or "")
    return _to_response(result, status.HTTP_201_CREATED)


@router.post("/login")
async def login(
    request: Request,
    service: CredentialService = Depends(get_credential_service),
) -> JSONResponse:
    """Login with username + password."""
    body = await _read_credentials(request)
    if body is None:
        return _required()
    result = await service.verify(body.username or "", body.password or "")
    return _to_response(result, status.HTTP_200_OK)
