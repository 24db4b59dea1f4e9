from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from botocore.exceptions import BotoCoreError, ClientError

from app.core.errors import MISSING_PARAMETERS, InvalidRequestError, JobNotFoundError, ProcessorError
from app.core.jobs import JobRegistry, registry
from app.models.schemas import JobRecord, JobState, JobStatusResponse, ProcessRequest, ProcessResponse
from app.services.storage_service import StorageService
from app.services.subtitle_service import SubtitleService
from app.services.transcode_service import PROGRESS_BY_STATUS, TranscodeService
from app.services.video_service import VideoService

logger = logging.getLogger(__name__)


class JobService:
    def __init__(
        self,
        *,
        jobs: JobRegistry | None = None,
        subtitles: SubtitleService | None = None,
        storage: StorageService | None = None,
        videos: VideoService | None = None,
        transcoder: TranscodeService | None = None,
    ) -> None:
        self.jobs = jobs if jobs is not None else registry
        self.subtitles = subtitles or SubtitleService()
        self.storage = storage or StorageService()
        self.videos = videos or VideoService(self.storage)
        self.transcoder = transcoder or TranscodeService()

    def submit(self, payload: ProcessRequest) -> ProcessResponse:
        if not payload.video_url or not payload.verses:
            raise InvalidRequestError(MISSING_PARAMETERS)
        dialect = payload.subtitle_format
        self.transcoder.caption_source_type(dialect)

        job_id = str(uuid4())
        logger.info("Created job %s: %s with %d verses", job_id, payload.video_url, len(payload.verses))

        preferences = payload.resolved_preferences()
        document = self.subtitles.synthesize(payload.verses, preferences, dialect)
        try:
            subtitle_uri = self.storage.put_text(document.storage_key(job_id), document.content, document.mime_type)
            video_key = f"inputs/{job_id}.mp4"
            self.videos.fetch_to_storage(payload.video_url, video_key)
            params = self.transcoder.build_job_params(
                video_uri=self.storage.uri(video_key),
                subtitle_uri=subtitle_uri,
                destination_uri=self.storage.uri(f"outputs/{job_id}"),
                preferences=preferences,
                dialect=dialect,
            )
            mediaconvert_job_id = self.transcoder.create_job(params)
        except (BotoCoreError, ClientError) as exc:
            raise ProcessorError(str(exc)) from exc

        self.jobs.add(
            JobRecord(
                job_id=job_id,
                mediaconvert_job_id=mediaconvert_job_id,
                created=datetime.now(timezone.utc),
                dialect=dialect,
            )
        )
        return ProcessResponse(job_id=job_id)

    def status(self, job_id: str) -> JobStatusResponse:
        record = self.jobs.get(job_id)
        if not record:
            logger.info("Job not found: %s", job_id)
            raise JobNotFoundError(job_id)

        try:
            job = self.transcoder.get_job(record.mediaconvert_job_id)
            state = str(job.get("Status", "")).upper()
            logger.info("Job %s status: %s", job_id, state)

            if state == "COMPLETE":
                key = self.storage.find_output_key(job_id, default_key=f"outputs/{job_id}.mp4")
                url = self.storage.presigned_download_url(key)
                self.jobs.update(job_id, status=JobState.complete, output_url=url)
                return JobStatusResponse(status="complete", progress=100, output_url=url)
        except (BotoCoreError, ClientError) as exc:
            raise ProcessorError(str(exc)) from exc

        error = None
        if state in {"ERROR", "CANCELED"}:
            error = job.get("ErrorMessage")
            self.jobs.update(job_id, status=JobState.failed)
        return JobStatusResponse(status=state.lower(), progress=PROGRESS_BY_STATUS.get(state, 0), error=error)
