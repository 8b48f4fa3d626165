# -*- coding: utf-8 -*-
########################
# merge_logger.py
########################
# Purpose:
# - Diagnostics sink for the merge pipeline: progress messages, lyric key lines and lyric length warnings.
#
# Design notes:
# - Pure side channel. Nothing a logger does can change merge output, and loggers never raise.
# - ConsoleLogger prints to stdout like the rest of the command line tools.
# - RecordingLogger keeps everything in memory for the Qt window and tests.
#
########################
# Interfaces:
# Public protocols:
# - class MergeLogger(Protocol)
#   - log(message: str) -> None
#   - log_lyrics_line(line: str) -> None
#   - log_problematic_lyrics_line(index: int, expected: int, actual: int) -> None
#
# Public classes:
# - class ConsoleLogger(*, verbose: bool = True, stream: Optional[TextIO] = None)
# - class RecordingLogger()
#   - reset() -> None
#
# Public functions:
# - format_length_warning(index: int, expected: int, actual: int) -> str
#
########################

from __future__ import annotations

from dataclasses import dataclass
import sys
from typing import List, Optional, Protocol, TextIO, runtime_checkable


_ANSI_YELLOW = "\x1b[33m"
_ANSI_DEFAULT = "\x1b[39m"


@runtime_checkable
class MergeLogger(Protocol):
    def log(self, message: str) -> None:
        ...

    def log_lyrics_line(self, line: str) -> None:
        ...

    def log_problematic_lyrics_line(self, index: int, expected: int, actual: int) -> None:
        ...


def format_length_warning(index: int, expected: int, actual: int) -> str:
    return f"Warning: Line {int(index)} exceeds recommended byte length of {int(expected)}. Actual length: {int(actual)}"


class ConsoleLogger:
    """Prints progress (when verbose), lyric lines and yellow length warnings."""

    def __init__(self, *, verbose: bool = True, stream: Optional[TextIO] = None) -> None:
        self._verbose = bool(verbose)
        self._stream = stream

    def _write(self, text: str) -> None:
        print(text, file=self._stream if self._stream is not None else sys.stdout)

    def log(self, message: str) -> None:
        if self._verbose:
            self._write(str(message))

    def log_lyrics_line(self, line: str) -> None:
        self._write(str(line))

    def log_problematic_lyrics_line(self, index: int, expected: int, actual: int) -> None:
        self._write(_ANSI_YELLOW + format_length_warning(index, expected, actual) + _ANSI_DEFAULT)


@dataclass(frozen=True)
class ProblematicLyricsLine:
    index: int
    expected: int
    actual: int


class RecordingLogger:
    def __init__(self) -> None:
        self.status: str = "Ready."
        self.messages: List[str] = []
        self.lyrics: List[str] = []
        self.problematic_lyrics_lines: List[ProblematicLyricsLine] = []

    def reset(self) -> None:
        self.status = "Ready."
        self.messages.clear()
        self.lyrics.clear()
        self.problematic_lyrics_lines.clear()

    def log(self, message: str) -> None:
        self.status = str(message)
        self.messages.append(self.status)

    def log_lyrics_line(self, line: str) -> None:
        self.lyrics.append(str(line))

    def log_problematic_lyrics_line(self, index: int, expected: int, actual: int) -> None:
        self.problematic_lyrics_lines.append(
            ProblematicLyricsLine(index=int(index), expected=int(expected), actual=int(actual))
        )
