from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.jobs import JobRegistry
from app.services.job_service import JobService
from app.services.storage_service import StorageService
from app.services.subtitle_service import SubtitleService
from app.services.transcode_service import TranscodeService
from app.services.video_service import VideoService


@pytest.fixture
def s3_client() -> MagicMock:
    client = MagicMock()
    client.get_paginator.return_value.paginate.return_value = [{"Contents": []}]
    client.generate_presigned_url.return_value = "https://signed.example/output.mp4"
    return client


@pytest.fixture
def mediaconvert_client() -> MagicMock:
    client = MagicMock()
    client.create_job.return_value = {"Job": {"Id": "mc-job-1"}}
    client.get_job.return_value = {"Job": {"Id": "mc-job-1", "Status": "SUBMITTED"}}
    return client


@pytest.fixture
def video_response() -> MagicMock:
    response = MagicMock()
    response.ok = True
    response.reason = "OK"
    response.iter_content.return_value = [b"fake-", b"mp4-bytes"]
    return response


@pytest.fixture
def http_session(video_response: MagicMock) -> MagicMock:
    session = MagicMock()
    session.get.return_value = video_response
    return session


@pytest.fixture
def job_service(s3_client, mediaconvert_client, http_session) -> JobService:
    storage = StorageService(client=s3_client, bucket="test-bucket")
    return JobService(
        jobs=JobRegistry(),
        subtitles=SubtitleService(),
        storage=storage,
        videos=VideoService(storage, session=http_session, timeout=5),
        transcoder=TranscodeService(client=mediaconvert_client, role_arn="arn:aws:iam::123:role/mc"),
    )


@pytest.fixture
def client(monkeypatch, job_service: JobService) -> TestClient:
    from app.api.routes import jobs as jobs_routes
    from app.main import app

    monkeypatch.setattr(jobs_routes, "service", job_service)
    return TestClient(app)


@pytest.fixture
def sample_verses() -> list[dict]:
    return [
        {"arabic": "بسم الله الرحمن الرحيم", "translation": "In the name of Allah, the Most Compassionate"},
        {"arabic": "الحمد لله رب العالمين", "translation": "All praise is for Allah, Lord of all worlds"},
    ]
