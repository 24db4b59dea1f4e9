from fastapi import APIRouter

from app.models.schemas import JobStatusResponse, ProcessRequest, ProcessResponse
from app.services.job_service import JobService

router = APIRouter(tags=["jobs"])
service = JobService()


@router.post("/process", response_model=ProcessResponse)
def process(payload: ProcessRequest) -> ProcessResponse:
    return service.submit(payload)


@router.get("/status/{job_id}", response_model=JobStatusResponse, response_model_exclude_none=True)
def job_status(job_id: str) -> JobStatusResponse:
    return service.status(job_id)
