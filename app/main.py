from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import health, jobs, subtitles
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging

setup_logging()

app = FastAPI(title="verse-subtitle-burner", version="0.1.0")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
register_exception_handlers(app)

app.include_router(health.router)
app.include_router(jobs.router)
app.include_router(subtitles.router)
