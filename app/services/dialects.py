from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from app.core.config import SynthesisConfig
from app.models.schemas import Dialect, SubtitlePreferences, Verse
from app.services.text_layout import BOM, escape_ass, escape_xml, mark_rtl, wrap_text
from app.services.timing import format_ass_time, format_srt_time, format_ttml_time, resolve_cue_times


@dataclass(frozen=True)
class Cue:
    index: int
    start: float
    end: float
    arabic: str | None
    translation: str | None


class DialectEmitter(ABC):
    dialect: Dialect
    mime_type: str
    extension: str

    def __init__(self, config: SynthesisConfig | None = None) -> None:
        self.config = config or SynthesisConfig()

    @abstractmethod
    def format_time(self, seconds: float) -> str: ...

    @abstractmethod
    def emit(self, verses: Sequence[Verse], preferences: SubtitlePreferences) -> str: ...

    def escape(self, text: str) -> str:
        return text

    def wrap(self, text: str | None, max_chars: int) -> list[str]:
        return [self.escape(line) for line in wrap_text(text, max_chars)]

    def font_size(self, preferences: SubtitlePreferences) -> int:
        sizes = self.config.font_sizes
        return sizes.get(preferences.font_size) or sizes.get(self.config.default_font_size, 24)

    def cues(self, verses: Sequence[Verse], preferences: SubtitlePreferences) -> Iterator[Cue]:
        for index, verse in enumerate(verses):
            start, end = resolve_cue_times(
                index,
                verse.start_time,
                verse.end_time,
                preferences.subtitle_offset,
                self.config.cue_spacing,
            )
            yield Cue(
                index=index,
                start=start,
                end=end,
                arabic=verse.arabic if preferences.includes_arabic and verse.arabic else None,
                translation=verse.translation if preferences.includes_translation and verse.translation else None,
            )


class SrtEmitter(DialectEmitter):
    dialect = Dialect.srt
    mime_type = "application/x-subrip"
    extension = ".srt"

    def format_time(self, seconds: float) -> str:
        return format_srt_time(seconds)

    def emit(self, verses: Sequence[Verse], preferences: SubtitlePreferences) -> str:
        # SRT carries no styling, font preferences do not apply here
        max_chars = self.config.srt_max_chars
        blocks: list[str] = []
        number = 0
        for cue in self.cues(verses, preferences):
            lines = mark_rtl(self.wrap(cue.arabic, max_chars)) + self.wrap(cue.translation, max_chars)
            if not lines and self.config.skip_empty_cues:
                continue
            number += 1
            timing = f"{self.format_time(cue.start)} --> {self.format_time(cue.end)}"
            blocks.append("\n".join([str(number), timing, *lines]) + "\n\n")
        prefix = BOM if self.config.include_bom else ""
        return prefix + "".join(blocks)


class AssEmitter(DialectEmitter):
    dialect = Dialect.ass
    mime_type = "text/x-ssa"
    extension = ".ass"

    font_name = "Arial"
    style_format = (
        "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, "
        "Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, "
        "Shadow, Alignment, MarginL, MarginR, MarginV, Encoding"
    )
    event_format = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"

    def format_time(self, seconds: float) -> str:
        return format_ass_time(seconds)

    def escape(self, text: str) -> str:
        return escape_ass(text)

    def style_line(self, name: str, size: int, margin_v: int, encoding: int) -> str:
        return (
            f"Style: {name},{self.font_name},{size},&H00FFFFFF,&H000000FF,&H00000000,&H80000000,"
            f"0,0,0,0,100,100,0,0,1,2,1,2,20,20,{margin_v},{encoding}"
        )

    def header(self, preferences: SubtitlePreferences) -> list[str]:
        size = self.font_size(preferences)
        return [
            "[Script Info]",
            "Title: Verse Subtitles",
            "ScriptType: v4.00+",
            "PlayResX: 384",
            "PlayResY: 288",
            "WrapStyle: 2",
            "ScaledBorderAndShadow: yes",
            "",
            "[V4+ Styles]",
            self.style_format,
            # 178 selects the Arabic charset
            self.style_line("Arabic", size + self.config.arabic_size_boost, 60, 178),
            self.style_line("Translation", size, 20, 1),
            "",
            "[Events]",
            self.event_format,
        ]

    def dialogue(self, cue: Cue, style: str, lines: list[str]) -> str:
        text = "\\N".join(lines)
        return f"Dialogue: 0,{self.format_time(cue.start)},{self.format_time(cue.end)},{style},,0,0,0,,{text}"

    def emit(self, verses: Sequence[Verse], preferences: SubtitlePreferences) -> str:
        rows = self.header(preferences)
        for cue in self.cues(verses, preferences):
            arabic = self.wrap(cue.arabic, self.config.arabic_max_chars)
            if arabic:
                rows.append(self.dialogue(cue, "Arabic", arabic))
            translation = self.wrap(cue.translation, self.config.translation_max_chars)
            if translation:
                rows.append(self.dialogue(cue, "Translation", translation))
        return "\n".join(rows) + "\n"


class TtmlEmitter(DialectEmitter):
    dialect = Dialect.ttml
    mime_type = "application/ttml+xml"
    extension = ".ttml"

    font_family = "Arial"

    def format_time(self, seconds: float) -> str:
        return format_ttml_time(seconds)

    def escape(self, text: str) -> str:
        return escape_xml(text)

    def head(self, preferences: SubtitlePreferences) -> list[str]:
        size = self.font_size(preferences)
        arabic_size = size + self.config.arabic_size_boost
        return [
            "  <head>",
            "    <styling>",
            f'      <style xml:id="arabic" tts:fontFamily="{self.font_family}" tts:fontSize="{arabic_size}px" '
            'tts:color="white" tts:backgroundColor="black" tts:textAlign="center" '
            'tts:direction="rtl" tts:unicodeBidi="embed"/>',
            f'      <style xml:id="translation" tts:fontFamily="{self.font_family}" tts:fontSize="{size}px" '
            'tts:color="white" tts:backgroundColor="black" tts:textAlign="center" tts:direction="ltr"/>',
            "    </styling>",
            "    <layout>",
            '      <region xml:id="arabicRegion" tts:origin="10% 60%" tts:extent="80% 20%" tts:displayAlign="after"/>',
            '      <region xml:id="translationRegion" tts:origin="10% 80%" tts:extent="80% 15%" tts:displayAlign="before"/>',
            "    </layout>",
            "  </head>",
        ]

    def paragraph(self, cue: Cue, layer: str, lines: list[str]) -> str:
        lang = ' xml:lang="ar"' if layer == "arabic" else ""
        return (
            f'      <p begin="{self.format_time(cue.start)}" end="{self.format_time(cue.end)}" '
            f'region="{layer}Region" style="{layer}"{lang}>{"<br/>".join(lines)}</p>'
        )

    def emit(self, verses: Sequence[Verse], preferences: SubtitlePreferences) -> str:
        rows = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<tt xmlns="http://www.w3.org/ns/ttml" xmlns:tts="http://www.w3.org/ns/ttml#styling" '
            'xmlns:ttp="http://www.w3.org/ns/ttml#parameter" ttp:timeBase="media" xml:lang="und">',
            *self.head(preferences),
            "  <body>",
            "    <div>",
        ]
        for cue in self.cues(verses, preferences):
            arabic = self.wrap(cue.arabic, self.config.arabic_max_chars)
            if arabic:
                rows.append(self.paragraph(cue, "arabic", arabic))
            translation = self.wrap(cue.translation, self.config.translation_max_chars)
            if translation:
                rows.append(self.paragraph(cue, "translation", translation))
        rows += ["    </div>", "  </body>", "</tt>"]
        return "\n".join(rows) + "\n"


EMITTERS: dict[Dialect, type[DialectEmitter]] = {
    Dialect.srt: SrtEmitter,
    Dialect.ass: AssEmitter,
    Dialect.ttml: TtmlEmitter,
}


def emitter_for(dialect: Dialect | str, config: SynthesisConfig | None = None) -> DialectEmitter:
    return EMITTERS[Dialect(dialect)](config)
