from __future__ import annotations

import logging
from typing import IO

from app.core.aws import get_s3_client
from app.core.config import settings

logger = logging.getLogger(__name__)

OUTPUTS_PREFIX = "outputs/"


class StorageService:
    def __init__(self, client=None, bucket: str | None = None) -> None:
        self._client = client
        self.bucket = bucket or settings.s3_bucket

    @property
    def client(self):
        if self._client is None:
            self._client = get_s3_client()
        return self._client

    def uri(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    def put_text(self, key: str, content: str, content_type: str) -> str:
        logger.info("Uploading %s to s3://%s/%s", content_type, self.bucket, key)
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=content.encode("utf-8"),
            ContentType=f"{content_type}; charset=utf-8",
        )
        return self.uri(key)

    def put_stream(self, key: str, stream: IO[bytes], content_type: str) -> str:
        logger.info("Uploading %s to s3://%s/%s", content_type, self.bucket, key)
        self.client.upload_fileobj(stream, self.bucket, key, ExtraArgs={"ContentType": content_type})
        return self.uri(key)

    def find_output_key(self, job_id: str, default_key: str) -> str:
        compact_id = job_id.replace("-", "")
        paginator = self.client.get_paginator("list_objects_v2")
        matches: list[str] = []
        for page in paginator.paginate(Bucket=self.bucket, Prefix=OUTPUTS_PREFIX):
            for item in page.get("Contents", []):
                key = item["Key"]
                if job_id in key or compact_id in key:
                    matches.append(key)
        logger.info("Found %d output objects for job %s", len(matches), job_id)
        if not matches:
            return default_key
        matches.sort()
        return matches[0]

    def presigned_download_url(self, key: str, *, expires_in: int | None = None, filename: str | None = None) -> str:
        return self.client.generate_presigned_url(
            "get_object",
            Params={
                "Bucket": self.bucket,
                "Key": key,
                "ResponseContentDisposition": f'attachment; filename="{filename or settings.download_filename}"',
                "ResponseContentType": "video/mp4",
            },
            ExpiresIn=expires_in or settings.signed_url_expire_seconds,
        )
