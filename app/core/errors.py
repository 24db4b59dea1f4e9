import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

MISSING_PARAMETERS = "Missing required parameters: videoUrl and verses array"


class ProcessorError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidRequestError(ProcessorError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnsupportedFormatError(InvalidRequestError):
    pass


class JobNotFoundError(ProcessorError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, job_id: str) -> None:
        super().__init__("Job not found")
        self.job_id = job_id


class VideoDownloadError(ProcessorError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def processor_exception_handler(request: Request, exc: ProcessorError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request to %s failed: %s", request.url.path, exc)
    return error_response(exc.status_code, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', []))}: {err.get('msg', 'Invalid input')}"
        for err in exc.errors()
    )
    logger.info("Rejected request to %s: %s", request.url.path, details)
    if request.url.path == "/process":
        return error_response(status.HTTP_400_BAD_REQUEST, MISSING_PARAMETERS)
    return error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request: {details}")


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s", request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProcessorError, processor_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
