#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from app.core.logging import setup_logging
from app.models.schemas import Dialect, SubtitlePreferences
from app.services.subtitle_service import SubtitleService

logger = logging.getLogger("make_subtitles")


def load_verses(path: Path) -> list[dict]:
    if not path.exists():
        raise SystemExit(f"Verses file not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    # accept either a bare list or a /process style request body
    verses = payload.get("verses") if isinstance(payload, dict) else payload
    if not isinstance(verses, list) or not verses:
        raise SystemExit(f"No verses array in {path}")
    return verses


def write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(content, encoding="utf-8")
    tmp.replace(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a subtitle file from timed Arabic verses and translations.")
    parser.add_argument("--verses", type=str, required=True, help="JSON file with a verses array.")
    parser.add_argument("--format", type=str, choices=[d.value for d in Dialect], default="srt")
    parser.add_argument("--display", type=str, choices=["arabic", "translation", "both"], default="both")
    parser.add_argument("--font-size", type=str, choices=["small", "medium", "large"], default="medium")
    parser.add_argument("--offset", type=float, default=0.0)
    parser.add_argument("--output", type=str, help="Output path; defaults to the verses file with the format's extension.")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    verses_path = Path(args.verses)
    verses = load_verses(verses_path)
    preferences = SubtitlePreferences(display=args.display, font_size=args.font_size, subtitle_offset=args.offset)
    document = SubtitleService().synthesize(verses, preferences, args.format)

    output = Path(args.output) if args.output else verses_path.with_suffix(document.extension)
    write_output(output, document.content)
    logger.info("Wrote %d verses to %s", len(verses), output)
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
