"""
Storage abstraction for S3-compatible object storage and in-memory testing.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Optional, Protocol

import boto3
from botocore.config import Config

UPLOAD_URL_EXPIRES_IN = 1000
IMAGE_CONTENT_TYPE = "image/jpeg"


def new_image_key() -> str:
    """Random object key for an uploaded image, e.g. ``<uuid>-<epoch ms>.jpeg``."""
    return f"{uuid.uuid4().hex}-{int(time.time() * 1000)}.jpeg"


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def presign_put(
        self,
        path: str,
        expires_in: int = UPLOAD_URL_EXPIRES_IN,
        content_type: str = IMAGE_CONTENT_TYPE,
    ) -> str:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://example.test/storage"
    issued: list[str] = field(default_factory=list)

    def presign_put(
        self,
        path: str,
        expires_in: int = UPLOAD_URL_EXPIRES_IN,
        content_type: str = IMAGE_CONTENT_TYPE,
    ) -> str:
        self.issued.append(path)
        return f"{self.base_url}/{path}?op=put&expires={expires_in}"


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client. ``endpoint`` is only needed for non-AWS providers.
    """

    bucket: str
    region: str
    access_key_id: str
    secret_access_key: str
    endpoint: Optional[str] = None

    def __post_init__(self):
        config = Config(signature_version="s3v4")
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def presign_put(
        self,
        path: str,
        expires_in: int = UPLOAD_URL_EXPIRES_IN,
        content_type: str = IMAGE_CONTENT_TYPE,
    ) -> str:
        # The browser must send the same Content-Type header for the signature to match.
        return self._client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": self.bucket,
                "Key": path,
                "ContentType": content_type,
            },
            ExpiresIn=expires_in,
        )
