# -*- coding: utf-8 -*-
########################
# dsc_merger.py
########################
# Purpose:
# - Merge any number of timelines into one command list ordered by time.
#
########################
# Key Logic:
# - Each absorbed timeline is walked from tick 0. TIME(t) moves the cursor to t and makes sure a bucket exists for t.
# - Every other command goes into the bucket for the current tick, unless an equal command is already there.
#   First occurrence wins, and bucket order is arrival order across all timelines.
# - END() is dropped. The encoder writes the terminator.
# - Timelines flagged remove_targets lose their TARGET, TARGET_FLYING_TIME, TARGET_EFFECT, TARGET_FLAG
#   and EDIT_TARGET commands.
# - Challenge time adds MODE_SELECT(type, 1) at its start tick and MODE_SELECT(type, 3) at its end tick,
#   with the same dedup rule.
# - flatten() sorts buckets by tick and emits TIME(tick) followed by the bucket's commands.
#   Every distinct tick gets exactly one TIME, ascending.
#
# Design notes:
# - No I/O and no errors of its own. Malformed input fails earlier, in the codec or subtitle reader.
# - One instance per merge run.
#
########################
# Interfaces:
# Public classes:
# - class DscMerger
#   - add_timeline(timeline: Timeline) -> None
#   - add_commands(commands: Iterable[Command], *, remove_targets: bool = False) -> None
#   - add_challenge_time(challenge_time: ChallengeTime) -> None
#   - bucket(tick: int) -> tuple[Command, ...]
#   - ticks() -> list[int]
#   - flatten() -> list[Command]
#   - to_timeline() -> Timeline
#
########################
# Smoke Tests:
#   - python dsc_merger.py
########################

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from dsc_models import ChallengeTime, Command, Timeline, time_command
from opcode_table import TARGET_OPCODES, Opcode


class DscMerger:
    def __init__(self) -> None:
        self._buckets: Dict[int, List[Command]] = {}

    def _bucket_for(self, tick: int) -> List[Command]:
        return self._buckets.setdefault(int(tick), [])

    def _insert(self, tick: int, command: Command) -> None:
        bucket = self._bucket_for(tick)
        if command in bucket:
            return
        bucket.append(command)

    def add_commands(self, commands: Iterable[Command], *, remove_targets: bool = False) -> None:
        current_tick = 0

        for command in commands:
            if command.opcode is Opcode.TIME:
                current_tick = int(command.args[0])
                self._bucket_for(current_tick)
                continue
            if command.opcode is Opcode.END:
                continue
            if remove_targets and command.opcode in TARGET_OPCODES:
                continue
            self._insert(current_tick, command)

    def add_timeline(self, timeline: Timeline) -> None:
        self.add_commands(timeline.commands, remove_targets=bool(timeline.remove_targets))

    def add_challenge_time(self, challenge_time: ChallengeTime) -> None:
        self._insert(challenge_time.start_tick, challenge_time.start_command())
        self._insert(challenge_time.end_tick, challenge_time.end_command())

    def bucket(self, tick: int) -> Tuple[Command, ...]:
        return tuple(self._buckets.get(int(tick), ()))

    def ticks(self) -> List[int]:
        return sorted(self._buckets.keys())

    def flatten(self) -> List[Command]:
        flattened: List[Command] = []
        for tick in self.ticks():
            flattened.append(time_command(tick))
            flattened.extend(self._buckets[tick])
        return flattened

    def to_timeline(self) -> Timeline:
        return Timeline(commands=tuple(self.flatten()))


def _run_unit_tests() -> None:
    import opcode_table
    from game_variant import Game

    miku_rot = opcode_table.resolve_by_name(Game.FUTURE_TONE, "MIKU_ROT")
    effect_off = opcode_table.resolve_by_name(Game.FUTURE_TONE, "EFFECT_OFF")

    first = [time_command(0), Command.from_meta(miku_rot, (1, 2)), time_command(500)]
    second = [time_command(250), Command.from_meta(effect_off, (9,))]

    merger = DscMerger()
    merger.add_commands(first)
    merger.add_commands(second)
    assert [str(command) for command in merger.flatten()] == [
        "TIME(0);",
        "MIKU_ROT(1, 2);",
        "TIME(250);",
        "EFFECT_OFF(9);",
        "TIME(500);",
    ]

    # Same command at the same tick from another source collapses to one.
    merger.add_commands([time_command(0), Command.from_meta(miku_rot, (1, 2))])
    assert merger.bucket(0) == (Command.from_meta(miku_rot, (1, 2)),)


if __name__ == "__main__":
    _run_unit_tests()
    print("dsc_merger.py: ok")
