# -*- coding: utf-8 -*-
########################
# merger_errors.py
########################
# Purpose:
# - Every failure the merge pipeline can report, as one exception hierarchy.
# - str(error) is the message shown to the user by the command line, prompt or window.
#
# Design notes:
# - All errors are fatal for the current run. Nothing is retried.
# - Wrapped I/O and UTF-8 failures keep their original exception as __cause__.
# - The core raises these; only entrypoints decide how to present them.
#
########################
# Interfaces:
# Public exceptions:
# - class MergerError(Exception)
#   - InputFileNotFoundError(path)
#   - UnknownOpcodeError(opcode_id)
#   - UnknownOpcodeNameError(name)
#   - ArgumentParseError(opcode_name, token)
#     - ArgumentCountError(opcode_name, expected, actual)
#   - UnsupportedGameError(game)
#   - InvalidSubtitleFileError(reason)
#   - InvalidTimestampError(text)
#   - InvalidDifficultyError(text)
#   - WriteFileFailedError(path)
#   - NoInputFilesError()
#   - TimelineIOError(message)
#   - TextDecodeError(message)
#
########################

from __future__ import annotations

from typing import Any


class MergerError(Exception):
    """Base error for everything raised by the DSC merge pipeline."""


class InputFileNotFoundError(MergerError):
    def __init__(self, path: Any) -> None:
        self.path = str(path)
        super().__init__(f"File not found: {self.path}")


class UnknownOpcodeError(MergerError):
    def __init__(self, opcode_id: int) -> None:
        self.opcode_id = int(opcode_id)
        super().__init__(f"Unknown opcode: {self.opcode_id}")


class UnknownOpcodeNameError(MergerError):
    def __init__(self, name: str) -> None:
        self.name = str(name)
        super().__init__(f"Unknown opcode name: {self.name}")


class ArgumentParseError(MergerError):
    def __init__(self, opcode_name: str, token: str) -> None:
        self.opcode_name = str(opcode_name)
        self.token = str(token)
        super().__init__(f"Invalid command argument for {self.opcode_name}: {self.token}")


class ArgumentCountError(ArgumentParseError):
    """Raised when a plaintext command has a different argument count than its opcode arity."""

    def __init__(self, opcode_name: str, expected: int, actual: int) -> None:
        self.expected = int(expected)
        self.actual = int(actual)
        super().__init__(opcode_name, f"expected {self.expected} arguments, got {self.actual}")


class UnsupportedGameError(MergerError):
    def __init__(self, game: Any) -> None:
        self.game = game
        game_name = getattr(game, "display_name", str(game))
        super().__init__(f"Unsupported game: {game_name}")


class InvalidSubtitleFileError(MergerError):
    def __init__(self, reason: str = "") -> None:
        self.reason = str(reason or "")
        message = "Invalid subtitle file"
        if self.reason:
            message += f": {self.reason}"
        super().__init__(message)


class InvalidTimestampError(MergerError):
    def __init__(self, text: str) -> None:
        self.text = str(text)
        super().__init__(f"Invalid timestamp: {self.text}")


class InvalidDifficultyError(MergerError):
    def __init__(self, text: str) -> None:
        self.text = str(text)
        super().__init__(f"Invalid difficulty: {self.text}")


class WriteFileFailedError(MergerError):
    def __init__(self, path: Any) -> None:
        self.path = str(path)
        super().__init__(f"Failed to write merged DSC to file {self.path} (maybe missing permissions?)")


class NoInputFilesError(MergerError):
    def __init__(self) -> None:
        super().__init__("You have not specified any input files.")


class TimelineIOError(MergerError):
    """Raised for truncated or unreadable timeline data. The OS or struct error is the cause."""

    def __init__(self, message: str) -> None:
        super().__init__(f"IO error: {message}")


class TextDecodeError(MergerError):
    """Raised when a text input is not valid UTF-8. The UnicodeDecodeError is the cause."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Parse error: {message}")
