import math

DEFAULT_CUE_SPACING = 5.0


def resolve_cue_times(
    index: int,
    start: float | None,
    end: float | None,
    offset: float = 0.0,
    spacing: float = DEFAULT_CUE_SPACING,
) -> tuple[float, float]:
    # inverted ranges are passed through untouched
    resolved_start = (start if start is not None else index * spacing) + offset
    resolved_end = (end if end is not None else (index + 1) * spacing) + offset
    return resolved_start, resolved_end


def split_seconds(seconds: float, precision: int) -> tuple[int, int, int, int]:
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)
    fraction = math.floor((seconds % 1) * 10**precision)
    return hours, minutes, secs, fraction


def format_srt_time(seconds: float) -> str:
    h, m, s, ms = split_seconds(seconds, 3)
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"


def format_ass_time(seconds: float) -> str:
    h, m, s, cs = split_seconds(seconds, 2)
    return f"{h:d}:{m:02d}:{s:02d}.{cs:02d}"


def format_ttml_time(seconds: float) -> str:
    h, m, s, ms = split_seconds(seconds, 3)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"
