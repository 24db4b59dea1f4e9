import math
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

DISPLAY_MODES = {"arabic", "translation", "both"}
FONT_SIZES = {"small", "medium", "large"}


def optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Dialect(str, Enum):
    srt = "srt"
    ass = "ass"
    ttml = "ttml"


class Verse(CamelModel):
    start_time: float | None = None
    end_time: float | None = None
    arabic: str | None = None
    translation: str | None = None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def coerce_time(cls, value: Any) -> float | None:
        return optional_float(value)

    @field_validator("arabic", "translation", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        # lone surrogates from JSON escapes cannot be encoded as UTF-8
        return value.encode("utf-8", "replace").decode("utf-8")


class SubtitlePreferences(CamelModel):
    subtitle_offset: float = 0.0
    lang: str | None = None
    display: str | None = None
    font_size: str = "medium"

    # burn-in only
    font_opacity: int = 100
    background_opacity: int = 80
    outline_size: int = 2
    shadow_opacity: int = 80
    x_position: int | None = None
    y_position: int | None = None

    @field_validator("subtitle_offset", mode="before")
    @classmethod
    def coerce_offset(cls, value: Any) -> float:
        return optional_float(value) or 0.0

    @field_validator("lang", "display", mode="before")
    @classmethod
    def coerce_display(cls, value: Any) -> str | None:
        if isinstance(value, str) and value.strip().lower() in DISPLAY_MODES:
            return value.strip().lower()
        return None

    @field_validator("font_size", mode="before")
    @classmethod
    def coerce_font_size(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().lower() in FONT_SIZES:
            return value.strip().lower()
        return "medium"

    @field_validator("font_opacity", "background_opacity", "shadow_opacity", "outline_size", "x_position", "y_position", mode="before")
    @classmethod
    def coerce_bounded(cls, value: Any, info: ValidationInfo) -> int | None:
        default = cls.model_fields[info.field_name].default
        number = optional_float(value)
        if number is None or number < 0:
            return default
        high = 10 if info.field_name == "outline_size" else 255
        if info.field_name in {"x_position", "y_position"}:
            high = 4096
        return int(min(number, high))

    @property
    def display_mode(self) -> str:
        return self.lang or self.display or "both"

    @property
    def includes_arabic(self) -> bool:
        return self.display_mode != "translation"

    @property
    def includes_translation(self) -> bool:
        return self.display_mode != "arabic"


class SubtitleDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    mime_type: str
    extension: str
    dialect: Dialect

    def storage_key(self, job_id: str) -> str:
        return f"subtitles/{job_id}{self.extension}"


class SynthesisRequest(CamelModel):
    verses: list[Verse] | None = None
    subtitle_preferences: SubtitlePreferences | None = None
    subtitle_offset: float | None = None
    subtitle_format: Dialect = Dialect.srt

    @field_validator("subtitle_preferences", mode="before")
    @classmethod
    def coerce_preferences(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, SubtitlePreferences)) else None

    @field_validator("subtitle_offset", mode="before")
    @classmethod
    def coerce_offset(cls, value: Any) -> float | None:
        return optional_float(value)

    @field_validator("subtitle_format", mode="before")
    @classmethod
    def coerce_format(cls, value: Any) -> Dialect:
        if isinstance(value, Dialect):
            return value
        if isinstance(value, str) and value.strip().lower() in Dialect.__members__:
            return Dialect(value.strip().lower())
        return Dialect.srt

    def resolved_preferences(self) -> SubtitlePreferences:
        preferences = self.subtitle_preferences or SubtitlePreferences()
        if self.subtitle_offset is not None:
            preferences = preferences.model_copy(update={"subtitle_offset": self.subtitle_offset})
        return preferences


class ProcessRequest(SynthesisRequest):
    video_url: str | None = None


class ProcessResponse(CamelModel):
    success: bool = True
    job_id: str
    status: str = "processing"


class JobStatusResponse(CamelModel):
    success: bool = True
    status: str
    progress: int
    output_url: str | None = None
    error: str | None = None


class JobState(str, Enum):
    processing = "PROCESSING"
    complete = "COMPLETE"
    failed = "FAILED"


class JobRecord(BaseModel):
    job_id: str
    mediaconvert_job_id: str
    status: JobState = JobState.processing
    created: datetime
    dialect: Dialect = Dialect.srt
    output_url: str | None = None
