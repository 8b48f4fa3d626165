# -*- coding: utf-8 -*-
########################
# lyric_compiler.py
########################
# Purpose:
# - Turn subtitle entries into LYRIC show/reset command pairs for the merger.
# - Report the pv_db lyric key line for every entry, and warn about lines that are too long.
#
########################
# Key Logic:
# - Every entry emits TIME(start), LYRIC(index, -1), TIME(end), LYRIC(0, -1).
# - When an entry starts exactly where the previous one ended, the previous TIME(end), LYRIC(0, -1) pair
#   is dropped so the lyric does not flicker off and on at the same instant.
# - Lyric indices start at 1 and follow entry order.
# - Key lines look like 'pv_012.lyric_en.003=text'. Byte length is measured on the UTF-8 encoded line.
# - Length warnings go to the logger after all key lines and never change the emitted commands.
# - The result is a fragment for the merger: there is no trailing END().
#
########################
# Interfaces:
# Public dataclasses:
# - LyricSettings(pv_id: int, english: bool = False, max_line_length: int = 75)
#
# Public functions:
# - lyric_key_line(settings: LyricSettings, index: int, text: str) -> str
# - compile_lyric_commands(entries: Iterable[SubtitleEntry], settings: LyricSettings, logger: MergeLogger) -> list[Command]
# - compile_lyric_timeline(entries, settings, logger, *, source_path=None) -> Timeline
#
########################

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dsc_models import Command, Timeline, lyric_command, time_command
from merge_logger import MergeLogger
from subtitle_store import SubtitleEntry


DEFAULT_MAX_LYRIC_LENGTH = 75


@dataclass(frozen=True)
class LyricSettings:
    pv_id: int
    english: bool = False
    max_line_length: int = DEFAULT_MAX_LYRIC_LENGTH

    @property
    def key_name(self) -> str:
        return "lyric_en" if self.english else "lyric"


def lyric_key_line(settings: LyricSettings, index: int, text: str) -> str:
    return f"pv_{int(settings.pv_id):03d}.{settings.key_name}.{int(index):03d}={str(text).strip()}"


def compile_lyric_commands(
    entries: Iterable[SubtitleEntry],
    settings: LyricSettings,
    logger: MergeLogger,
) -> List[Command]:
    commands: List[Command] = []
    problematic_lines: List[Tuple[int, int]] = []
    last_end_tick = 0

    for index, entry in enumerate(entries, start=1):
        if int(entry.start_tick) == last_end_tick and len(commands) >= 2:
            del commands[-2:]

        commands.append(time_command(entry.start_tick))
        commands.append(lyric_command(index, -1))
        commands.append(time_command(entry.end_tick))
        commands.append(lyric_command(0, -1))

        last_end_tick = int(entry.end_tick)

        key_line = lyric_key_line(settings, index, entry.text)
        logger.log_lyrics_line(key_line)

        key_line_length = len(key_line.encode("utf-8"))
        if key_line_length > int(settings.max_line_length):
            problematic_lines.append((index, key_line_length))

    for index, key_line_length in problematic_lines:
        logger.log_problematic_lyrics_line(index, int(settings.max_line_length), key_line_length)

    return commands


def compile_lyric_timeline(
    entries: Iterable[SubtitleEntry],
    settings: LyricSettings,
    logger: MergeLogger,
    *,
    source_path: Optional[Path] = None,
) -> Timeline:
    commands = compile_lyric_commands(entries, settings, logger)
    return Timeline(commands=tuple(commands), remove_targets=False, source_path=source_path)
