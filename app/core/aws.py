from functools import lru_cache

import boto3

from app.core.config import settings


def _credentials() -> dict:
    creds: dict = {"region_name": settings.aws_region}
    if settings.aws_access_key and settings.aws_secret_key:
        creds["aws_access_key_id"] = settings.aws_access_key
        creds["aws_secret_access_key"] = settings.aws_secret_key
    return creds


@lru_cache(maxsize=1)
def get_s3_client():
    return boto3.client("s3", **_credentials())


@lru_cache(maxsize=1)
def get_mediaconvert_client():
    kwargs = _credentials()
    if settings.mediaconvert_endpoint:
        kwargs["endpoint_url"] = settings.mediaconvert_endpoint
    return boto3.client("mediaconvert", **kwargs)
