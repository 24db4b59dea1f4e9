from __future__ import annotations

import logging
from collections.abc import Sequence

from app.core.config import SynthesisConfig, settings
from app.models.schemas import Dialect, SubtitleDocument, SubtitlePreferences, Verse
from app.services.dialects import DialectEmitter, emitter_for

logger = logging.getLogger(__name__)


class SubtitleService:
    def __init__(self, config: SynthesisConfig | None = None) -> None:
        self.config = config or settings.synthesis

    def emitter(self, dialect: Dialect | str) -> DialectEmitter:
        return emitter_for(dialect, self.config)

    def synthesize(
        self,
        verses: Sequence[Verse | dict],
        preferences: SubtitlePreferences | dict | None = None,
        dialect: Dialect | str = Dialect.srt,
    ) -> SubtitleDocument:
        if isinstance(verses, (str, bytes)) or not isinstance(verses, Sequence):
            raise TypeError("verses must be a sequence of verses")

        rows = [verse if isinstance(verse, Verse) else Verse.model_validate(verse) for verse in verses]
        if preferences is None:
            preferences = SubtitlePreferences()
        elif not isinstance(preferences, SubtitlePreferences):
            preferences = SubtitlePreferences.model_validate(preferences)

        emitter = self.emitter(dialect)
        content = emitter.emit(rows, preferences)
        logger.debug(
            "Synthesized %s document: %d verses, display=%s, %d chars",
            emitter.dialect.value,
            len(rows),
            preferences.display_mode,
            len(content),
        )
        return SubtitleDocument(
            content=content,
            mime_type=emitter.mime_type,
            extension=emitter.extension,
            dialect=emitter.dialect,
        )
