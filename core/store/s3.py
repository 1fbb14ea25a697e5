"""Amazon S3 backed key-value store."""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.constants import LIST_PAGE_SIZE
from core.errors import StoreError
from core.store.base import KeyValueStore, ListPage

logger = logging.getLogger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}
# list_objects_v2 never returns more than this per call.
_S3_MAX_KEYS = 1000


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return error.get("Message") or error.get("Code") or str(exc)
    return str(exc)


class S3Store(KeyValueStore):
    """Keys map to objects ``<root><key>`` in a single bucket."""

    def __init__(self, bucket: str, root: str = "", client: Any | None = None, region: str | None = None) -> None:
        if not bucket:
            raise ValueError("S3 store requires a bucket name.")
        self.bucket = bucket
        self.root = root
        self.region = region
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("s3", region_name=self.region)
        return self._client

    def put(self, key: str, value: str) -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=self.root + key,
                Body=value.encode("utf-8"),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(_error_message(exc)) from exc

    def get(self, key: str) -> Optional[str]:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=self.root + key)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return None
            raise StoreError(_error_message(exc)) from exc
        except BotoCoreError as exc:
            raise StoreError(_error_message(exc)) from exc
        return response["Body"].read().decode("utf-8", errors="replace")

    def list_keys(self, prefix: str = "", limit: int = LIST_PAGE_SIZE, cursor: Optional[str] = None) -> ListPage:
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Prefix": self.root + prefix,
            "MaxKeys": max(1, min(limit, _S3_MAX_KEYS)),
        }
        if cursor:
            params["ContinuationToken"] = cursor
        try:
            response = self.client.list_objects_v2(**params)
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(_error_message(exc)) from exc

        keys = [obj["Key"][len(self.root):] for obj in response.get("Contents", [])]
        truncated = bool(response.get("IsTruncated"))
        logger.debug("Listed %d keys from s3://%s/%s", len(keys), self.bucket, params["Prefix"])
        return ListPage(
            keys=keys,
            cursor=response.get("NextContinuationToken") if truncated else None,
            complete=not truncated,
        )


__all__ = ["S3Store"]
