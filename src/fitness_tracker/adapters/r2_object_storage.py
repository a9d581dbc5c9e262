"""Cloudflare R2 object storage adapter."""

import logging
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from fitness_tracker.domain.errors import StorageError
from fitness_tracker.services.storage import ObjectStorage

_logger = logging.getLogger(__name__)


@dataclass
class R2ObjectStorage(ObjectStorage):
    """S3-compatible storage backed by a boto3 client."""

    client: Any
    bucket_name: str

    @classmethod
    def create(
        cls,
        endpoint_url: str,
        access_key_id: str,
        secret_access_key: str,
        bucket_name: str,
        region_name: str = "auto",
    ) -> "R2ObjectStorage":
        """Create a storage adapter with a SigV4 boto3 client."""
        client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region_name,
            config=Config(signature_version="s3v4"),
        )
        return cls(client=client, bucket_name=bucket_name)

    def presign_upload(self, key: str, content_type: str, expires_in: int) -> str:
        """Return a presigned PUT URL bound to the key and content type."""
        return self._presign(
            "put_object",
            {"Bucket": self.bucket_name, "Key": key, "ContentType": content_type},
            expires_in,
            http_method="PUT",
        )

    def presign_download(self, key: str, expires_in: int) -> str:
        """Return a presigned GET URL for the key."""
        return self._presign(
            "get_object",
            {"Bucket": self.bucket_name, "Key": key},
            expires_in,
            http_method="GET",
        )

    def delete_object(self, key: str) -> None:
        """Delete an object; missing objects are not an error in S3."""
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError("Failed to delete stored object") from exc

    def _presign(
        self,
        client_method: str,
        params: dict[str, str],
        expires_in: int,
        http_method: str,
    ) -> str:
        try:
            return self.client.generate_presigned_url(
                ClientMethod=client_method,
                Params=params,
                ExpiresIn=expires_in,
                HttpMethod=http_method,
            )
        except (BotoCoreError, ClientError) as exc:
            _logger.error(
                "Presigned URL generation failed",
                exc_info=exc,
                extra={"object_key": params["Key"]},
            )
            raise StorageError("Failed to generate presigned URL") from exc
