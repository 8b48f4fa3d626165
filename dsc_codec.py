# -*- coding: utf-8 -*-
########################
# dsc_codec.py
########################
# Purpose:
# - Read and write DSC chart scripts.
# - Binary: game specific header followed by little-endian int32 words (opcode id, then its arguments).
# - Plaintext: one 'NAME(a, b, ...);' command per line, as produced by dump().
#
# Design notes:
# - The opcode table decides how many argument words follow each id. Unknown ids are fatal.
# - Binary decode stops at id 0, or at the alternate sentinel for F 2nd and X, and always appends END().
# - Truncated data is an error, never a silently shortened timeline.
# - Plaintext lines without exactly one '(' are skipped like comments. Every other malformed line is an error.
# - Encode writes each command's recorded id as is; ids are not re-resolved for the target game.
# - No Qt usage.
#
########################
# Interfaces:
# Public dataclasses:
# - HeaderLayout(skip_bytes: int, magic: Optional[int], zero_words: int)
#
# Public functions:
# - header_layout(game: Game) -> HeaderLayout
# - decode_binary(game: Game, data: bytes, *, remove_targets: bool = False, source_path: Optional[Path] = None) -> Timeline
# - decode_plaintext(game: Game, lines: Iterable[str], *, remove_targets: bool = False, source_path: Optional[Path] = None) -> Timeline
# - encode(game: Game, commands: Iterable[Command]) -> bytes
# - dump(commands: Iterable[Command]) -> str
# - load_dsc_file(game: Game, path: Path, *, remove_targets: bool = False) -> Timeline
# - load_plaintext_file(game: Game, path: Path, *, remove_targets: bool = False) -> Timeline
# - write_dsc_file(game: Game, path: Path, commands: Iterable[Command]) -> bytes
#
# Inputs:
# - Raw DSC bytes or UTF-8 text lines, plus the selected game.
#
# Outputs:
# - Timeline values for the merger, and encoded bytes for the output file.
#
########################

from __future__ import annotations

from dataclasses import dataclass
import re
import struct
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import opcode_table
from dsc_models import Command, Timeline, end_command
from game_variant import Game
from merger_errors import (
    ArgumentCountError,
    ArgumentParseError,
    InputFileNotFoundError,
    TextDecodeError,
    TimelineIOError,
    UnsupportedGameError,
    WriteFileFailedError,
)
from opcode_table import Opcode


_WORD = struct.Struct("<i")
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1
_INTEGER_TOKEN = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class HeaderLayout:
    skip_bytes: int
    magic: Optional[int]
    zero_words: int


_HEADER_LAYOUTS: Dict[Game, HeaderLayout] = {
    Game.F: HeaderLayout(skip_bytes=4, magic=302121504, zero_words=0),
    Game.FUTURE_TONE: HeaderLayout(skip_bytes=4, magic=335874337, zero_words=0),
    Game.F2ND: HeaderLayout(skip_bytes=72, magic=1129535056, zero_words=18),
    Game.X: HeaderLayout(skip_bytes=72, magic=1129535056, zero_words=18),
    Game.ARCADE: HeaderLayout(skip_bytes=0, magic=None, zero_words=0),
}

_ALTERNATE_SENTINEL_GAMES = frozenset({Game.F2ND, Game.X})


def header_layout(game: Game) -> HeaderLayout:
    return _HEADER_LAYOUTS[game]


def _require_supported(game: Game) -> None:
    if game not in opcode_table.supported_games():
        raise UnsupportedGameError(game)


class _WordReader:
    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = memoryview(data)
        self._offset = int(offset)

    @property
    def offset(self) -> int:
        return self._offset

    def read_word(self) -> int:
        end = self._offset + _WORD.size
        if end > len(self._data):
            raise TimelineIOError(
                f"unexpected end of DSC data at byte {self._offset} (file is {len(self._data)} bytes)"
            )
        (value,) = _WORD.unpack_from(self._data, self._offset)
        self._offset = end
        return value


def _is_terminator(game: Game, opcode_id: int) -> bool:
    if opcode_id == 0:
        return True
    return opcode_id == opcode_table.ALTERNATE_END_SENTINEL and game in _ALTERNATE_SENTINEL_GAMES


def decode_binary(
    game: Game,
    data: bytes,
    *,
    remove_targets: bool = False,
    source_path: Optional[Path] = None,
) -> Timeline:
    _require_supported(game)
    layout = header_layout(game)
    if len(data) < layout.skip_bytes:
        raise TimelineIOError(f"DSC data is shorter than its {layout.skip_bytes} byte header")

    reader = _WordReader(data, offset=layout.skip_bytes)
    commands: List[Command] = []

    while True:
        opcode_id = reader.read_word()
        if _is_terminator(game, opcode_id):
            break

        meta = opcode_table.resolve(game, opcode_id)
        args = [reader.read_word() for _ in range(meta.arity)]
        commands.append(Command.from_meta(meta, args))

    commands.append(end_command())
    return Timeline(commands=tuple(commands), remove_targets=bool(remove_targets), source_path=source_path)


def _normalize_plaintext_line(raw_line: str) -> str:
    without_markers = str(raw_line).replace(")", "").replace(";", "")
    return "".join(without_markers.split())


def _parse_argument(opcode_name: str, token: str) -> int:
    if not _INTEGER_TOKEN.match(token):
        raise ArgumentParseError(opcode_name, token)
    value = int(token)
    if value < _INT32_MIN or value > _INT32_MAX:
        raise ArgumentParseError(opcode_name, token)
    return value


def decode_plaintext(
    game: Game,
    lines: Iterable[str],
    *,
    remove_targets: bool = False,
    source_path: Optional[Path] = None,
) -> Timeline:
    _require_supported(game)
    commands: List[Command] = []

    for raw_line in lines:
        line_text = _normalize_plaintext_line(raw_line)
        if not line_text or line_text.startswith("#"):
            continue

        components = line_text.split("(")
        if len(components) != 2:
            # TODO: confirm with chart authors whether these lines should raise instead of being skipped.
            continue

        opcode_name, args_text = components
        meta = opcode_table.resolve_by_name(game, opcode_name)

        tokens = args_text.split(",") if args_text else []
        args = [_parse_argument(opcode_name, token) for token in tokens]
        if len(args) != meta.arity:
            raise ArgumentCountError(opcode_name, meta.arity, len(args))

        commands.append(Command.from_meta(meta, args))

    return Timeline(commands=tuple(commands), remove_targets=bool(remove_targets), source_path=source_path)


def dump(commands: Iterable[Command]) -> str:
    return "".join(str(command) + "\n" for command in commands)


def encode(game: Game, commands: Iterable[Command]) -> bytes:
    _require_supported(game)
    layout = header_layout(game)

    output = bytearray()
    if layout.magic is not None:
        output += _WORD.pack(layout.magic)
    output += bytes(_WORD.size * layout.zero_words)

    last_opcode: Optional[Opcode] = None
    for command in commands:
        words = (command.opcode_id,) + tuple(command.args)
        try:
            output += struct.pack(f"<{len(words)}i", *words)
        except struct.error as exc:
            raise TimelineIOError(f"cannot encode {command}: {exc}") from exc
        last_opcode = command.opcode

    if last_opcode is not Opcode.END:
        output += _WORD.pack(end_command().opcode_id)

    return bytes(output)


def _read_input_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise InputFileNotFoundError(path) from exc
    except IsADirectoryError as exc:
        raise InputFileNotFoundError(path) from exc
    except OSError as exc:
        raise TimelineIOError(f"failed to read {path}: {exc}") from exc


def load_dsc_file(game: Game, path: Path, *, remove_targets: bool = False) -> Timeline:
    data = _read_input_bytes(path)
    return decode_binary(game, data, remove_targets=remove_targets, source_path=Path(path))


def load_plaintext_file(game: Game, path: Path, *, remove_targets: bool = False) -> Timeline:
    data = _read_input_bytes(path)
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise TextDecodeError(f"{path} is not valid UTF-8: {exc}") from exc
    return decode_plaintext(game, text.splitlines(), remove_targets=remove_targets, source_path=Path(path))


def write_dsc_file(game: Game, path: Path, commands: Iterable[Command]) -> bytes:
    encoded = encode(game, commands)
    try:
        Path(path).write_bytes(encoded)
    except OSError as exc:
        raise WriteFileFailedError(path) from exc
    return encoded


def _run_unit_tests() -> None:
    words = [335874337, 1, 0, 3, 1, 2, 1, 500, 0]
    data = struct.pack(f"<{len(words)}i", *words)
    timeline = decode_binary(Game.FUTURE_TONE, data)
    assert [command.name for command in timeline.commands] == ["TIME", "MIKU_ROT", "TIME", "END"]
    assert encode(Game.FUTURE_TONE, timeline.commands) == data

    parsed = decode_plaintext(Game.FUTURE_TONE, ["# comment", "", "TIME(100);", "MIKU_ROT(1, -2);", "junk"])
    assert [str(command) for command in parsed.commands] == ["TIME(100);", "MIKU_ROT(1, -2);"]

    try:
        decode_binary(Game.FUTURE_TONE, data[:-6])
    except TimelineIOError:
        pass
    else:
        raise AssertionError("Expected TimelineIOError for truncated data")


if __name__ == "__main__":
    _run_unit_tests()
    print("dsc_codec.py: ok")
