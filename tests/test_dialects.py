import xml.etree.ElementTree as ET

import pytest

from app.core.config import SynthesisConfig
from app.models.schemas import Dialect, SubtitlePreferences, Verse
from app.services.dialects import AssEmitter, SrtEmitter, TtmlEmitter, emitter_for
from app.services.text_layout import BOM, RLM

TT = "{http://www.w3.org/ns/ttml}"


def verses(*rows: dict) -> list[Verse]:
    return [Verse.model_validate(row) for row in rows]


def test_emitter_registry():
    assert isinstance(emitter_for("srt"), SrtEmitter)
    assert isinstance(emitter_for(Dialect.ass), AssEmitter)
    assert isinstance(emitter_for("ttml"), TtmlEmitter)
    assert TtmlEmitter().mime_type == "application/ttml+xml"
    assert SrtEmitter().extension == ".srt"


# SRT


def test_srt_single_verse_both_layers():
    content = SrtEmitter().emit(
        verses({"arabic": "بسم الله", "translation": "In the name of Allah"}),
        SubtitlePreferences(display="both"),
    )
    assert content == f"{BOM}1\n00:00:00,000 --> 00:00:05,000\n{RLM}بسم الله\nIn the name of Allah\n\n"


def test_srt_offset_on_second_verse():
    content = SrtEmitter().emit(
        verses({"translation": "first"}, {"translation": "second"}),
        SubtitlePreferences(subtitle_offset=2),
    )
    assert "2\n00:00:07,000 --> 00:00:12,000\nsecond\n\n" in content


def test_srt_without_bom():
    emitter = SrtEmitter(SynthesisConfig(include_bom=False))
    content = emitter.emit(verses({"translation": "x"}), SubtitlePreferences())
    assert content.startswith("1\n")


def test_srt_wraps_both_layers_at_forty_chars():
    long_translation = "Guide us along the Straight Path, the Path of those You have blessed"
    content = SrtEmitter().emit(verses({"translation": long_translation}), SubtitlePreferences())
    body = content.split("\n")[2:-2]
    assert len(body) == 2
    assert all(len(line) <= 40 for line in body)


def test_srt_marks_every_arabic_line():
    arabic = "صراط الذين أنعمت عليهم غير المغضوب عليهم ولا الضالين"
    content = SrtEmitter().emit(verses({"arabic": arabic}), SubtitlePreferences())
    body = [line for line in content.split("\n")[2:] if line]
    assert len(body) == 2
    assert all(line.startswith(RLM) for line in body)


def test_srt_display_arabic_drops_translation():
    content = SrtEmitter().emit(
        verses({"arabic": "بسم الله", "translation": "In the name of Allah"}),
        SubtitlePreferences(display="arabic"),
    )
    assert "In the name of Allah" not in content
    assert "بسم الله" in content


def test_srt_display_translation_drops_arabic():
    content = SrtEmitter().emit(
        verses({"arabic": "بسم الله", "translation": "In the name of Allah"}),
        SubtitlePreferences(lang="translation"),
    )
    assert "بسم الله" not in content
    assert RLM not in content


def test_srt_keeps_empty_cues_by_default():
    content = SrtEmitter(SynthesisConfig(include_bom=False)).emit(
        verses({}, {"translation": "second"}), SubtitlePreferences()
    )
    assert content == "1\n00:00:00,000 --> 00:00:05,000\n\n2\n00:00:05,000 --> 00:00:10,000\nsecond\n\n"


def test_srt_can_skip_empty_cues_and_renumber():
    emitter = SrtEmitter(SynthesisConfig(include_bom=False, skip_empty_cues=True))
    content = emitter.emit(verses({}, {"translation": "second"}), SubtitlePreferences())
    assert content == "1\n00:00:05,000 --> 00:00:10,000\nsecond\n\n"


def test_srt_inverted_times_are_not_corrected():
    content = SrtEmitter().emit(verses({"startTime": 10, "endTime": 5, "translation": "x"}), SubtitlePreferences())
    assert "00:00:10,000 --> 00:00:05,000" in content


def test_srt_ignores_font_preferences():
    rows = verses({"translation": "x"})
    assert SrtEmitter().emit(rows, SubtitlePreferences(font_size="large")) == SrtEmitter().emit(
        rows, SubtitlePreferences(font_size="small")
    )


# ASS


def test_ass_sections_in_order():
    content = AssEmitter().emit(verses({"arabic": "بسم الله", "translation": "x"}), SubtitlePreferences())
    script_info = content.index("[Script Info]")
    styles = content.index("[V4+ Styles]")
    events = content.index("[Events]")
    assert script_info < styles < events
    assert content.index("Format: Name,") < content.index("Style: Arabic")
    assert content.index("Format: Layer,") < content.index("Dialogue:")


def test_ass_large_font_sizes():
    content = AssEmitter().emit(verses({"translation": "x"}), SubtitlePreferences(font_size="large"))
    assert "Style: Arabic,Arial,36," in content
    assert "Style: Translation,Arial,30," in content


def test_ass_medium_is_default_font_size():
    content = AssEmitter().emit(verses({"translation": "x"}), SubtitlePreferences(font_size="gigantic"))
    assert "Style: Translation,Arial,24," in content


def test_ass_layers_are_separate_dialogue_events():
    content = AssEmitter().emit(
        verses({"arabic": "بسم الله", "translation": "In the name of Allah"}), SubtitlePreferences()
    )
    dialogues = [line for line in content.splitlines() if line.startswith("Dialogue:")]
    assert dialogues == [
        "Dialogue: 0,0:00:00.00,0:00:05.00,Arabic,,0,0,0,,بسم الله",
        "Dialogue: 0,0:00:00.00,0:00:05.00,Translation,,0,0,0,,In the name of Allah",
    ]
    assert RLM not in content


def test_ass_multiline_translation_uses_line_break_token():
    text = "Guide us along the Straight Path, the Path of those You have blessed"
    content = AssEmitter().emit(verses({"translation": text}), SubtitlePreferences())
    dialogues = [line for line in content.splitlines() if line.startswith("Dialogue:")]
    assert len(dialogues) == 1
    assert "\\N" in dialogues[0]


def test_ass_escapes_control_characters():
    content = AssEmitter().emit(verses({"translation": r"a {\b1} b"}), SubtitlePreferences())
    assert r"a \{\\b1\} b" in content
    assert "{\\b1}" not in content


def test_ass_display_arabic_has_no_translation_events():
    content = AssEmitter().emit(
        verses({"arabic": "بسم الله", "translation": "In the name of Allah"}), SubtitlePreferences(display="arabic")
    )
    assert ",Translation,," not in content
    assert ",Arabic,," in content


# TTML


def test_ttml_is_well_formed_with_timed_paragraphs():
    content = TtmlEmitter().emit(
        verses(
            {"arabic": "بسم الله", "translation": "In the name of Allah"},
            {"startTime": 5.5, "endTime": 9.25, "translation": "second"},
        ),
        SubtitlePreferences(),
    )
    root = ET.fromstring(content.encode("utf-8"))
    assert root.tag == f"{TT}tt"
    assert root.find(f"{TT}head") is not None
    paragraphs = root.findall(f"{TT}body/{TT}div/{TT}p")
    assert len(paragraphs) == 3
    assert all(p.get("begin") and p.get("end") for p in paragraphs)
    assert paragraphs[2].get("begin") == "00:00:05.500"
    assert paragraphs[2].get("end") == "00:00:09.250"


def test_ttml_declares_rtl_in_style_not_text():
    content = TtmlEmitter().emit(verses({"arabic": "بسم الله"}), SubtitlePreferences())
    assert 'tts:direction="rtl"' in content
    assert RLM not in content
    assert 'region="arabicRegion" style="arabic"' in content


def test_ttml_escapes_text():
    content = TtmlEmitter().emit(verses({"translation": 'He said "peace" & left'}), SubtitlePreferences())
    assert "He said &quot;peace&quot; &amp; left" in content
    ET.fromstring(content.encode("utf-8"))


def test_ttml_wrapped_lines_use_br():
    text = "Guide us along the Straight Path, the Path of those You have blessed"
    content = TtmlEmitter().emit(verses({"translation": text}), SubtitlePreferences())
    root = ET.fromstring(content.encode("utf-8"))
    paragraph = root.find(f"{TT}body/{TT}div/{TT}p")
    assert len(paragraph.findall(f"{TT}br")) == 1


def test_ttml_display_arabic_has_no_translation_paragraph():
    content = TtmlEmitter().emit(
        verses({"arabic": "بسم الله", "translation": "In the name of Allah"}), SubtitlePreferences(display="arabic")
    )
    assert 'region="translationRegion"' not in content
    assert "In the name of Allah" not in content


@pytest.mark.parametrize("size,expected", [("small", "24px"), ("medium", "30px"), ("large", "36px")])
def test_ttml_arabic_font_size(size, expected):
    content = TtmlEmitter().emit(verses({"arabic": "بسم"}), SubtitlePreferences(font_size=size))
    assert f'xml:id="arabic" tts:fontFamily="Arial" tts:fontSize="{expected}"' in content


def test_ttml_stays_well_formed_with_control_characters():
    content = TtmlEmitter().emit(verses({"translation": "Verse\x0bone\x01 end"}), SubtitlePreferences())
    root = ET.fromstring(content.encode("utf-8"))
    paragraph = root.find(f"{TT}body/{TT}div/{TT}p")
    assert paragraph.text == "Verse one end"
