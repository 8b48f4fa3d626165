# -*- coding: utf-8 -*-
########################
# dsc_models.py
########################
# Purpose:
# - Value types shared by the codec, the lyric compiler and the merger.
# - Command: one opcode with its arguments. Timeline: an ordered command list from one source.
# - ChallengeTime: the optional difficulty scoped time range bracketed by MODE_SELECT commands.
#
# Design notes:
# - Times are integer ticks (milliseconds * 100) everywhere.
# - Command equality is (opcode, args). The numeric id is carried for encoding but never compared,
#   since the same opcode can have different ids in different games.
# - All types are frozen. Build new values instead of mutating.
# - No Qt usage.
#
########################
# Interfaces:
# Public enums:
# - class ChallengeTimeDifficulty(enum.Enum): EASY | NORMAL
#
# Public dataclasses:
# - Command(opcode: Opcode, args: tuple[int, ...], opcode_id: int)
#   - Command.from_meta(meta: OpcodeMeta, args: Iterable[int]) -> Command
# - Timeline(commands: tuple[Command, ...], remove_targets: bool = False, source_path: Optional[Path] = None)
# - ChallengeTime(difficulty: ChallengeTimeDifficulty, start_tick: int, end_tick: int)
#   - ChallengeTime.build(start_text: str, end_text: str, difficulty) -> ChallengeTime
#
# Public functions:
# - millis_to_ticks(millis: int) -> int
# - parse_timestamp_millis(text: str) -> int
# - parse_difficulty(value) -> ChallengeTimeDifficulty
# - time_command(tick: int) -> Command
# - lyric_command(index: int, color: int = -1) -> Command
# - end_command() -> Command
# - mode_select_command(mode_type: int, phase: int) -> Command
#
########################
# Smoke Tests:
#   - python dsc_models.py
########################

from __future__ import annotations

from dataclasses import dataclass, field
import enum
import re
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import opcode_table
from merger_errors import InvalidDifficultyError, InvalidTimestampError
from opcode_table import Opcode, OpcodeMeta


TICKS_PER_MILLISECOND = 100

# MODE_SELECT second argument for the start and end of a challenge time section.
MODE_SELECT_CHALLENGE_START = 1
MODE_SELECT_CHALLENGE_END = 3

_TIMESTAMP_PATTERN = re.compile(r"^\s*(\d+):(\d{1,2})(?:[.:](\d{1,3}))?\s*$")


@dataclass(frozen=True)
class Command:
    opcode: Opcode
    args: Tuple[int, ...]
    opcode_id: int = field(default=0, compare=False)

    @classmethod
    def from_meta(cls, meta: OpcodeMeta, args: Iterable[int] = ()) -> "Command":
        arg_values = tuple(int(value) for value in args)
        if len(arg_values) != int(meta.arity):
            raise ValueError(
                f"{meta.opcode.name} takes {meta.arity} arguments, got {len(arg_values)}"
            )
        return cls(opcode=meta.opcode, args=arg_values, opcode_id=int(meta.opcode_id))

    @property
    def name(self) -> str:
        return self.opcode.name

    def __str__(self) -> str:
        return f"{self.opcode.name}({', '.join(str(value) for value in self.args)});"


@dataclass(frozen=True)
class Timeline:
    commands: Tuple[Command, ...]
    remove_targets: bool = False
    source_path: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.commands)

    def dump(self) -> str:
        return "".join(str(command) + "\n" for command in self.commands)


class ChallengeTimeDifficulty(enum.Enum):
    EASY = "easy"
    NORMAL = "normal"

    @property
    def mode_select_type(self) -> int:
        return 17 if self is ChallengeTimeDifficulty.EASY else 2


def millis_to_ticks(millis: int) -> int:
    return int(millis) * TICKS_PER_MILLISECOND


def parse_timestamp_millis(text: str) -> int:
    """Parse 'MM:SS.mmm' into milliseconds.

    'MM:SS:mmm' and 'MM:SS' are accepted too. A short millisecond part is right padded,
    so '01:02.5' is 62500.
    """
    match = _TIMESTAMP_PATTERN.match(str(text or ""))
    if match is None:
        raise InvalidTimestampError(text)

    minutes = int(match.group(1))
    seconds = int(match.group(2))
    millis_text = match.group(3) or "0"
    if seconds >= 60:
        raise InvalidTimestampError(text)

    millis = int(millis_text.ljust(3, "0"))
    return (minutes * 60 + seconds) * 1000 + millis


def parse_difficulty(value: Union[str, int, ChallengeTimeDifficulty]) -> ChallengeTimeDifficulty:
    if isinstance(value, ChallengeTimeDifficulty):
        return value
    if isinstance(value, int):
        ordered = list(ChallengeTimeDifficulty)
        if 0 <= value < len(ordered):
            return ordered[value]
        raise InvalidDifficultyError(str(value))

    normalized = str(value or "").strip().lower()
    for difficulty in ChallengeTimeDifficulty:
        if difficulty.value == normalized:
            return difficulty
    raise InvalidDifficultyError(str(value))


@dataclass(frozen=True)
class ChallengeTime:
    difficulty: ChallengeTimeDifficulty
    start_tick: int
    end_tick: int

    @classmethod
    def build(
        cls,
        start_text: str,
        end_text: str,
        difficulty: Union[str, int, ChallengeTimeDifficulty],
    ) -> "ChallengeTime":
        return cls(
            difficulty=parse_difficulty(difficulty),
            start_tick=millis_to_ticks(parse_timestamp_millis(start_text)),
            end_tick=millis_to_ticks(parse_timestamp_millis(end_text)),
        )

    def start_command(self) -> Command:
        return mode_select_command(self.difficulty.mode_select_type, MODE_SELECT_CHALLENGE_START)

    def end_command(self) -> Command:
        return mode_select_command(self.difficulty.mode_select_type, MODE_SELECT_CHALLENGE_END)


def time_command(tick: int) -> Command:
    return Command.from_meta(opcode_table.shared_meta(Opcode.TIME), (int(tick),))


def lyric_command(index: int, color: int = -1) -> Command:
    return Command.from_meta(opcode_table.shared_meta(Opcode.LYRIC), (int(index), int(color)))


def end_command() -> Command:
    return Command.from_meta(opcode_table.shared_meta(Opcode.END))


def mode_select_command(mode_type: int, phase: int) -> Command:
    return Command.from_meta(opcode_table.shared_meta(Opcode.MODE_SELECT), (int(mode_type), int(phase)))


def _run_unit_tests() -> None:
    assert parse_timestamp_millis("01:02.345") == 62345
    assert parse_timestamp_millis("00:00:000") == 0
    assert parse_timestamp_millis("1:02.5") == 62500

    for bad_text in ("", "abc", "01:75.000", "1.2.3"):
        try:
            parse_timestamp_millis(bad_text)
        except InvalidTimestampError:
            pass
        else:
            raise AssertionError(f"Expected InvalidTimestampError for {bad_text!r}")

    challenge = ChallengeTime.build("00:10.000", "00:20.000", "Easy")
    assert challenge.start_tick == 1_000_000
    assert challenge.start_command().args == (17, 1)
    assert challenge.end_command().args == (17, 3)
    assert ChallengeTime.build("0:00", "0:01", 1).difficulty is ChallengeTimeDifficulty.NORMAL

    # Numeric id is not part of equality.
    left = Command(opcode=Opcode.TIME, args=(5,), opcode_id=1)
    right = Command(opcode=Opcode.TIME, args=(5,), opcode_id=77)
    assert left == right
    assert str(lyric_command(3)) == "LYRIC(3, -1);"
    assert str(end_command()) == "END();"


if __name__ == "__main__":
    _run_unit_tests()
    print("dsc_models.py: ok")
