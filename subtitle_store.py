# -*- coding: utf-8 -*-
########################
# subtitle_store.py
########################
# Purpose:
# - Read lyric subtitle files into time stamped text entries for the lyric compiler.
# - Supports SubRip (.srt) and SubStation Alpha (.ass, .ssa), selected by file extension.
#
# Design notes:
# - Entry times are converted to ticks (milliseconds * 100) here, so callers never see subtitle time formats.
# - Entries keep file order. The lyric compiler numbers lyrics in that order.
# - Any structural problem raises InvalidSubtitleFileError with a short reason.
# - ASS override blocks like {\k20} are removed from the text. \N and \n become newlines.
# - No Qt usage.
#
########################
# Interfaces:
# Public dataclasses:
# - SubtitleEntry(start_tick: int, end_tick: int, text: str)
#
# Public constants:
# - SUBTITLE_EXTENSIONS: tuple[str, ...]
#
# Public functions:
# - parse_srt(text: str) -> list[SubtitleEntry]
# - parse_ass(text: str) -> list[SubtitleEntry]
# - parse_subtitles(text: str, *, extension: str) -> list[SubtitleEntry]
# - load_subtitle_file(path: pathlib.Path) -> list[SubtitleEntry]
#
########################

from __future__ import annotations

from dataclasses import dataclass
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from dsc_models import millis_to_ticks
from merger_errors import InputFileNotFoundError, InvalidSubtitleFileError, TextDecodeError, TimelineIOError


SUBTITLE_EXTENSIONS: Tuple[str, ...] = (".srt", ".ass", ".ssa")

_SRT_TIMING_LINE = re.compile(
    r"^\s*(\d+):(\d{1,2}):(\d{1,2})[,.](\d{1,3})\s*-->\s*(\d+):(\d{1,2}):(\d{1,2})[,.](\d{1,3})(?:\s.*)?$"
)
_ASS_TIME = re.compile(r"^\s*(\d+):(\d{1,2}):(\d{1,2})(?:\.(\d{1,3}))?\s*$")
_ASS_OVERRIDE_BLOCK = re.compile(r"\{[^}]*\}")


@dataclass(frozen=True)
class SubtitleEntry:
    start_tick: int
    end_tick: int
    text: str


def _clock_to_millis(hours: str, minutes: str, seconds: str, fraction: Optional[str]) -> int:
    fraction_digits = (fraction or "0").ljust(3, "0")[:3]
    return ((int(hours) * 60 + int(minutes)) * 60 + int(seconds)) * 1000 + int(fraction_digits)


def _split_blocks(text: str) -> List[List[str]]:
    blocks: List[List[str]] = []
    current_block: List[str] = []
    for raw_line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        if raw_line.strip():
            current_block.append(raw_line)
            continue
        if current_block:
            blocks.append(current_block)
            current_block = []
    if current_block:
        blocks.append(current_block)
    return blocks


def parse_srt(text: str) -> List[SubtitleEntry]:
    entries: List[SubtitleEntry] = []

    for block_index, block_lines in enumerate(_split_blocks(text), start=1):
        lines = list(block_lines)
        if lines and lines[0].strip().isdigit():
            lines = lines[1:]
        if not lines:
            raise InvalidSubtitleFileError(f"cue {block_index} has no timing line")

        match = _SRT_TIMING_LINE.match(lines[0])
        if match is None:
            raise InvalidSubtitleFileError(f"cue {block_index} has an invalid timing line: {lines[0].strip()!r}")

        groups = match.groups()
        start_millis = _clock_to_millis(*groups[0:4])
        end_millis = _clock_to_millis(*groups[4:8])
        if end_millis < start_millis:
            raise InvalidSubtitleFileError(f"cue {block_index} ends before it starts")

        entries.append(
            SubtitleEntry(
                start_tick=millis_to_ticks(start_millis),
                end_tick=millis_to_ticks(end_millis),
                text="\n".join(lines[1:]),
            )
        )

    return entries


def _parse_ass_time(value: str) -> int:
    match = _ASS_TIME.match(value)
    if match is None:
        raise InvalidSubtitleFileError(f"invalid ASS timestamp: {value.strip()!r}")
    hours, minutes, seconds, centis = match.groups()
    # ASS fractions are centiseconds: '0:00:01.5' is 1.50 s.
    return _clock_to_millis(hours, minutes, seconds, (centis or "0").ljust(2, "0"))


def _clean_ass_text(value: str) -> str:
    without_overrides = _ASS_OVERRIDE_BLOCK.sub("", value)
    return without_overrides.replace("\\N", "\n").replace("\\n", "\n").replace("\\h", " ")


def parse_ass(text: str) -> List[SubtitleEntry]:
    entries: List[SubtitleEntry] = []
    in_events = False
    field_names: Optional[List[str]] = None

    for raw_line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        line_text = raw_line.strip()
        if not line_text or line_text.startswith(";"):
            continue

        if line_text.startswith("[") and line_text.endswith("]"):
            in_events = line_text.lower() == "[events]"
            continue
        if not in_events:
            continue

        key, separator, value = line_text.partition(":")
        if not separator:
            continue
        key = key.strip().lower()

        if key == "format":
            field_names = [name.strip().lower() for name in value.split(",")]
            continue
        if key != "dialogue":
            continue

        if field_names is None:
            raise InvalidSubtitleFileError("Dialogue line before the [Events] Format line")

        values = value.strip().split(",", len(field_names) - 1)
        if len(values) != len(field_names):
            raise InvalidSubtitleFileError(f"Dialogue line has {len(values)} fields, expected {len(field_names)}")
        fields = dict(zip(field_names, values))

        try:
            start_millis = _parse_ass_time(fields["start"])
            end_millis = _parse_ass_time(fields["end"])
            dialogue_text = fields["text"]
        except KeyError as exc:
            raise InvalidSubtitleFileError(f"[Events] Format line is missing field {exc}") from exc

        entries.append(
            SubtitleEntry(
                start_tick=millis_to_ticks(start_millis),
                end_tick=millis_to_ticks(end_millis),
                text=_clean_ass_text(dialogue_text),
            )
        )

    if field_names is None:
        raise InvalidSubtitleFileError("no [Events] section with a Format line")

    return entries


_PARSERS: Dict[str, Callable[[str], List[SubtitleEntry]]] = {
    ".srt": parse_srt,
    ".ass": parse_ass,
    ".ssa": parse_ass,
}


def parse_subtitles(text: str, *, extension: str) -> List[SubtitleEntry]:
    normalized_extension = str(extension or "").strip().lower()
    if normalized_extension and not normalized_extension.startswith("."):
        normalized_extension = "." + normalized_extension

    parser = _PARSERS.get(normalized_extension)
    if parser is None:
        raise InvalidSubtitleFileError(f"unsupported subtitle extension {extension!r}")
    return parser(text)


def load_subtitle_file(path: Path) -> List[SubtitleEntry]:
    subtitle_path = Path(path)
    if subtitle_path.suffix.lower() not in _PARSERS:
        raise InvalidSubtitleFileError(f"unsupported subtitle extension {subtitle_path.suffix!r}")

    try:
        raw_bytes = subtitle_path.read_bytes()
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise InputFileNotFoundError(subtitle_path) from exc
    except OSError as exc:
        raise TimelineIOError(f"failed to read {subtitle_path}: {exc}") from exc

    try:
        text = raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise TextDecodeError(f"{subtitle_path} is not valid UTF-8: {exc}") from exc

    return parse_subtitles(text, extension=subtitle_path.suffix)
