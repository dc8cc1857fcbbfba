"""
S3-compatible object storage used as the image gallery's source of truth.
"""
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from dev2050.common.config import settings

MISSING_OBJECT_CODES = {"404", "NoSuchKey", "NotFound"}


@dataclass
class StoredObject:
    """One object listed from the bucket."""
    key: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None


class ObjectStorage:
    """
    Thin wrapper over a boto3 S3 client bound to one bucket and public URL.

    Cloudflare R2 requires region "auto", path-style addressing and no ACLs.
    All methods are blocking; async callers run them in a worker thread.
    """

    def __init__(
        self,
        bucket: str,
        public_base_url: str,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        region: str = "auto",
        client=None,
    ):
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.endpoint_url = endpoint_url or None
        self.region = region
        self._access_key = access_key or None
        self._secret_key = secret_key or None
        self._client = client

    @property
    def client(self):
        # Built on first use so configuration errors surface from the storage call
        if self._client is None:
            self._client = boto3.client(
                "s3",
                region_name=self.region,
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self._access_key,
                aws_secret_access_key=self._secret_key,
                config=Config(s3={"addressing_style": "path"}),
            )
        return self._client

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def list_objects(self, prefix: str) -> List[StoredObject]:
        paginator = self.client.get_paginator("list_objects_v2")
        objects: List[StoredObject] = []
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for item in page.get("Contents", []):
                objects.append(StoredObject(
                    key=item["Key"],
                    last_modified=item.get("LastModified"),
                    size=item.get("Size"),
                ))
        return objects

    def put_object(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        extra_args = {}
        if content_type:
            extra_args["ContentType"] = content_type
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, **extra_args)

    def exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in MISSING_OBJECT_CODES:
                return False
            raise

    def copy_object(self, source_key: str, dest_key: str) -> None:
        self.client.copy_object(
            Bucket=self.bucket,
            Key=dest_key,
            CopySource={"Bucket": self.bucket, "Key": source_key},
        )

    def delete_object(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)


@lru_cache(maxsize=1)
def get_object_storage() -> ObjectStorage:
    """FastAPI dependency returning the configured bucket."""
    return ObjectStorage(
        bucket=settings.R2_BUCKET,
        public_base_url=settings.R2_PUBLIC_URL,
        endpoint_url=settings.R2_ENDPOINT,
        access_key=settings.R2_ACCESS_KEY,
        secret_key=settings.R2_SECRET_KEY,
    )
