from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def home() -> str:
    return "Quran Subtitle Processor is running"


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}
