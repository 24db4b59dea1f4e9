from fastapi import APIRouter, Response

from app.core.errors import InvalidRequestError
from app.models.schemas import SynthesisRequest
from app.services.subtitle_service import SubtitleService

router = APIRouter(tags=["subtitles"])
service = SubtitleService()


@router.post("/subtitles")
def render_subtitles(payload: SynthesisRequest) -> Response:
    if not payload.verses:
        raise InvalidRequestError("Missing required parameters: verses array")

    document = service.synthesize(payload.verses, payload.resolved_preferences(), payload.subtitle_format)
    return Response(
        content=document.content,
        media_type=document.mime_type,
        headers={"Content-Disposition": f'inline; filename="subtitles{document.extension}"'},
    )
