import re
import textwrap
from collections.abc import Iterator
from xml.sax.saxutils import escape, unescape

RLM = "\u200f"
BOM = "\ufeff"

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")
_ASS_ESCAPE = re.compile(r"\\(.)", re.DOTALL)
# characters XML 1.0 does not allow in a document
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")
_XML_QUOTES = {'"': "&quot;", "'": "&apos;"}
_XML_UNQUOTES = {value: key for key, value in _XML_QUOTES.items()}


def iter_wrapped_lines(text: str | None, max_chars: int) -> Iterator[str]:
    if not text:
        return
    yield from textwrap.wrap(
        _LINE_BREAKS.sub(" ", text),
        width=max_chars,
        break_long_words=False,
        break_on_hyphens=False,
    )


def wrap_text(text: str | None, max_chars: int) -> list[str]:
    return list(iter_wrapped_lines(text, max_chars))


def mark_rtl(lines: list[str]) -> list[str]:
    return [f"{RLM}{line}" for line in lines]


def escape_ass(text: str) -> str:
    return text.replace("\\", "\\\\").replace("{", "\\{").replace("}", "\\}")


def unescape_ass(text: str) -> str:
    return _ASS_ESCAPE.sub(lambda match: match.group(1), text)


def escape_xml(text: str) -> str:
    return escape(_XML_INVALID.sub("", text), _XML_QUOTES)


def unescape_xml(text: str) -> str:
    return unescape(text, _XML_UNQUOTES)
