from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class SynthesisConfig(BaseModel):
    cue_spacing: float = 5.0
    arabic_max_chars: int = 40
    translation_max_chars: int = 50
    srt_max_chars: int = 40
    font_sizes: dict[str, int] = {"small": 18, "medium": 24, "large": 30}
    default_font_size: str = "medium"
    arabic_size_boost: int = 6
    include_bom: bool = True
    skip_empty_cues: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_nested_delimiter="__", extra="ignore")

    aws_region: str = "us-east-1"
    aws_access_key: str | None = None
    aws_secret_key: str | None = None
    mediaconvert_endpoint: str | None = None
    mediaconvert_role_arn: str = ""
    s3_bucket: str = ""

    port: int = 3000
    log_level: str = "INFO"
    signed_url_expire_seconds: int = 24 * 60 * 60
    video_download_timeout: float = 120.0
    download_filename: str = "quran-recitation-with-subtitles.mp4"

    synthesis: SynthesisConfig = SynthesisConfig()


settings = Settings()
