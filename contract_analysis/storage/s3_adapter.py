from typing import Any, BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from contract_analysis.logging.logger import Log
from contract_analysis.storage.base import BaseObjectStore, require_bucket_and_key
from contract_analysis.storage.exceptions import ObjectNotFoundError, StorageError

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


class S3ObjectStore(BaseObjectStore):
    """Object storage adapter built on the boto3 S3 client."""

    def __init__(
        self,
        *,
        region_name: str,
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        self._client = client or boto3.client(
            "s3",
            region_name=region_name,
            endpoint_url=endpoint_url,
        )

    def put(self, bucket: str, key: str, stream: BinaryIO, size: int) -> None:
        require_bucket_and_key(bucket, key)
        if size < 0:
            raise ValueError("Content length cannot be negative")
        try:
            self._client.put_object(
                Bucket=bucket,
                Key=key,
                Body=stream,
                ContentLength=size,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 upload failed for s3://{bucket}/{key}: {exc}") from exc
        Log.info(f"S3 upload successful: bucket={bucket}, key={key}, size={size} bytes")

    def get(self, bucket: str, key: str) -> bytes:
        require_bucket_and_key(bucket, key)
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except ClientError as exc:
            if _error_code(exc) in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(f"s3://{bucket}/{key} not found") from exc
            raise StorageError(f"S3 download failed for s3://{bucket}/{key}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"S3 download failed for s3://{bucket}/{key}: {exc}") from exc

    def delete(self, bucket: str, key: str) -> None:
        require_bucket_and_key(bucket, key)
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 delete failed for s3://{bucket}/{key}: {exc}") from exc
        Log.info(f"S3 delete successful: bucket={bucket}, key={key}")

    def list(self, bucket: str, prefix: str = "") -> list[str]:
        if not bucket or not bucket.strip():
            raise ValueError("Bucket name cannot be empty")
        params: dict[str, str] = {"Bucket": bucket}
        if prefix.strip():
            params["Prefix"] = prefix
        keys: list[str] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(**params):
                keys.extend(item["Key"] for item in page.get("Contents", []))
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 list failed for s3://{bucket}/{prefix}: {exc}") from exc
        return sorted(keys)

    def exists(self, bucket: str, key: str) -> bool:
        require_bucket_and_key(bucket, key)
        try:
            self._client.head_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in _NOT_FOUND_CODES:
                return False
            raise StorageError(f"S3 existence check failed for s3://{bucket}/{key}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"S3 existence check failed for s3://{bucket}/{key}: {exc}") from exc
        return True


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))
