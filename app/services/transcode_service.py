from __future__ import annotations

import json
import logging

from app.core.aws import get_mediaconvert_client
from app.core.config import SynthesisConfig, settings
from app.core.errors import UnsupportedFormatError
from app.models.schemas import Dialect, SubtitlePreferences

logger = logging.getLogger(__name__)

CAPTION_SOURCE_TYPES = {Dialect.srt: "SRT", Dialect.ttml: "TTML"}
PROGRESS_BY_STATUS = {"SUBMITTED": 5, "PROGRESSING": 50, "COMPLETE": 100}


class TranscodeService:
    def __init__(self, client=None, role_arn: str | None = None, config: SynthesisConfig | None = None) -> None:
        self._client = client
        self.role_arn = role_arn or settings.mediaconvert_role_arn
        self.config = config or settings.synthesis

    @property
    def client(self):
        if self._client is None:
            self._client = get_mediaconvert_client()
        return self._client

    @staticmethod
    def caption_source_type(dialect: Dialect) -> str:
        source_type = CAPTION_SOURCE_TYPES.get(dialect)
        if not source_type:
            raise UnsupportedFormatError(f"Subtitle format '{dialect.value}' cannot be burned in; use srt or ttml")
        return source_type

    def burn_in_settings(self, preferences: SubtitlePreferences, dialect: Dialect) -> dict:
        sizes = self.config.font_sizes
        font_size = sizes.get(preferences.font_size) or sizes.get(self.config.default_font_size, 24)
        burn_in = {
            "Alignment": "CENTERED",
            "TeletextSpacing": "PROPORTIONAL",
            "FontScript": "AUTOMATIC",
            "FontSize": font_size,
            "FontColor": "WHITE",
            "FontOpacity": preferences.font_opacity,
            "BackgroundColor": "BLACK",
            "BackgroundOpacity": preferences.background_opacity,
            "OutlineColor": "BLACK",
            "OutlineSize": preferences.outline_size,
            "ShadowColor": "BLACK",
            "ShadowOpacity": preferences.shadow_opacity,
            "ShadowXOffset": 2,
            "ShadowYOffset": 2,
            "StylePassthrough": "ENABLED" if dialect == Dialect.ttml else "DISABLED",
        }
        if preferences.x_position is not None:
            burn_in["XPosition"] = preferences.x_position
        if preferences.y_position is not None:
            burn_in["YPosition"] = preferences.y_position
        return burn_in

    def build_job_params(
        self,
        *,
        video_uri: str,
        subtitle_uri: str,
        destination_uri: str,
        preferences: SubtitlePreferences,
        dialect: Dialect,
    ) -> dict:
        return {
            "Role": self.role_arn,
            "Settings": {
                "Inputs": [
                    {
                        "FileInput": video_uri,
                        "AudioSelectors": {"Audio Selector 1": {"DefaultSelection": "DEFAULT"}},
                        "CaptionSelectors": {
                            "Captions": {
                                "SourceSettings": {
                                    "SourceType": self.caption_source_type(dialect),
                                    "FileSourceSettings": {"SourceFile": subtitle_uri},
                                }
                            }
                        },
                    }
                ],
                "OutputGroups": [
                    {
                        "Name": "File Group",
                        "OutputGroupSettings": {
                            "Type": "FILE_GROUP_SETTINGS",
                            "FileGroupSettings": {"Destination": destination_uri},
                        },
                        "Outputs": [
                            {
                                "VideoDescription": {
                                    "CodecSettings": {
                                        "Codec": "H_264",
                                        "H264Settings": {"RateControlMode": "CBR", "Bitrate": 5000000},
                                    }
                                },
                                "AudioDescriptions": [
                                    {
                                        "AudioSourceName": "Audio Selector 1",
                                        "CodecSettings": {
                                            "Codec": "AAC",
                                            "AacSettings": {
                                                "Bitrate": 96000,
                                                "CodingMode": "CODING_MODE_2_0",
                                                "SampleRate": 48000,
                                            },
                                        },
                                    }
                                ],
                                "ContainerSettings": {"Container": "MP4"},
                                "CaptionDescriptions": [
                                    {
                                        "CaptionSelectorName": "Captions",
                                        "DestinationSettings": {
                                            "DestinationType": "BURN_IN",
                                            "BurnInDestinationSettings": self.burn_in_settings(preferences, dialect),
                                        },
                                    }
                                ],
                            }
                        ],
                    }
                ],
            },
        }

    def create_job(self, params: dict) -> str:
        logger.debug("MediaConvert job parameters: %s", json.dumps(params, indent=2))
        response = self.client.create_job(**params)
        job_id = response["Job"]["Id"]
        logger.info("MediaConvert job created: %s", job_id)
        return job_id

    def get_job(self, mediaconvert_job_id: str) -> dict:
        return self.client.get_job(Id=mediaconvert_job_id)["Job"]
