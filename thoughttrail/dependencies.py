"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from thoughttrail.config import get_settings
from thoughttrail.db import DbClient
from thoughttrail.errors import Unauthorized
from thoughttrail.identity import (
    FirebaseIdentityVerifier,
    IdentityVerifier,
    InMemoryIdentityVerifier,
)
from thoughttrail.security import decode_access_token
from thoughttrail.storage import InMemoryStorageClient, S3StorageClient, StorageClient

_db_client: DbClient | None = None
_storage_client: StorageClient | None = None
_identity_verifier: IdentityVerifier | None = None

bearer_scheme = HTTPBearer(auto_error=False)


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so the engine and its pool are shared across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _db_client = DbClient()
    else:
        _db_client = DbClient(settings.database_url)
    return _db_client


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.aws_bucket:
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = S3StorageClient(
            bucket=settings.aws_bucket,
            region=settings.aws_region or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            endpoint=settings.aws_endpoint,
        )
    return _storage_client


def get_identity_verifier() -> IdentityVerifier:
    global _identity_verifier
    if _identity_verifier:
        return _identity_verifier

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.firebase_credentials:
        _identity_verifier = InMemoryIdentityVerifier()
    else:
        _identity_verifier = FirebaseIdentityVerifier(settings.firebase_credentials)
    return _identity_verifier


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Resolve the bearer token on a protected route to the caller's user id."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("No access token")
    return decode_access_token(credentials.credentials, get_settings().secret_access_key)
