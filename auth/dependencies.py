"""
FastAPI dependencies for authentication.

The ``CredentialService`` is built once in the application lifespan and
kept on ``app.state``; routes receive it through ``get_credential_service``.
"""

from __future__ import annotations

from fastapi import Request

from auth.service import CredentialService


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credential_service
