from __future__ import annotations

import itertools

import opcode_table
from dsc_merger import DscMerger
from dsc_models import ChallengeTime, Command, Timeline, end_command, time_command
from game_variant import Game
from lyric_compiler import LyricSettings, compile_lyric_commands
from merge_logger import RecordingLogger
from opcode_table import TARGET_OPCODES
from subtitle_store import SubtitleEntry


def _command(name: str, *args: int) -> Command:
    return Command.from_meta(opcode_table.resolve_by_name(Game.FUTURE_TONE, name), args)


def _render(commands) -> list:
    return [str(command) for command in commands]


def test_two_timelines_interleave_by_time() -> None:
    first = Timeline(
        commands=(time_command(0), _command("MIKU_ROT", 1, 2), time_command(500), end_command())
    )
    second = Timeline(commands=(time_command(250), _command("EFFECT_OFF", 9), end_command()))

    merger = DscMerger()
    merger.add_timeline(first)
    merger.add_timeline(second)

    assert _render(merger.flatten()) == [
        "TIME(0);",
        "MIKU_ROT(1, 2);",
        "TIME(250);",
        "EFFECT_OFF(9);",
        "TIME(500);",
    ]


def test_single_timeline_is_sorted_and_deduplicated() -> None:
    timeline = Timeline(
        commands=(
            time_command(500),
            _command("EFFECT_OFF", 1),
            time_command(0),
            _command("EFFECT_OFF", 2),
            time_command(500),
            _command("EFFECT_OFF", 1),
            _command("EFFECT_OFF", 3),
        )
    )
    merger = DscMerger()
    merger.add_timeline(timeline)

    assert _render(merger.flatten()) == [
        "TIME(0);",
        "EFFECT_OFF(2);",
        "TIME(500);",
        "EFFECT_OFF(1);",
        "EFFECT_OFF(3);",
    ]


def test_duplicates_collapse_regardless_of_order() -> None:
    a = _command("MIKU_ROT", 1, 2)
    b = _command("MIKU_ROT", 1, 2)
    c = _command("EFFECT_OFF", 4)
    for ordering in itertools.permutations([a, b, c]):
        merger = DscMerger()
        merger.add_commands([time_command(10), *ordering])
        flattened = merger.flatten()
        assert flattened.count(a) == 1
        assert flattened.count(c) == 1


def test_commands_before_first_time_land_at_zero() -> None:
    merger = DscMerger()
    merger.add_commands([_command("EFFECT_OFF", 1), time_command(30), _command("EFFECT_OFF", 2)])
    assert _render(merger.flatten()) == ["TIME(0);", "EFFECT_OFF(1);", "TIME(30);", "EFFECT_OFF(2);"]


def _target_timeline(remove_targets: bool) -> Timeline:
    return Timeline(
        commands=(
            time_command(0),
            _command("TARGET", 0, 1, 2, 3, 4, 5, 6),
            _command("TARGET_FLYING_TIME", 1000),
            _command("TARGET_FLAG", 1),
            _command("EDIT_TARGET", 1, 2, 3, 4, 5),
            _command("EFFECT_OFF", 1),
            end_command(),
        ),
        remove_targets=remove_targets,
    )


def test_target_removal_is_per_timeline() -> None:
    merger = DscMerger()
    merger.add_timeline(_target_timeline(remove_targets=True))
    assert [command.opcode for command in merger.flatten() if command.opcode in TARGET_OPCODES] == []
    assert _render(merger.flatten()) == ["TIME(0);", "EFFECT_OFF(1);"]

    kept = DscMerger()
    kept.add_timeline(_target_timeline(remove_targets=False))
    assert len([command for command in kept.flatten() if command.opcode in TARGET_OPCODES]) == 4


def test_challenge_time_markers() -> None:
    merger = DscMerger()
    merger.add_commands([time_command(0), _command("EFFECT_OFF", 1)])
    merger.add_challenge_time(ChallengeTime.build("00:01.000", "00:02.000", "easy"))

    assert _render(merger.flatten()) == [
        "TIME(0);",
        "EFFECT_OFF(1);",
        "TIME(100000);",
        "MODE_SELECT(17, 1);",
        "TIME(200000);",
        "MODE_SELECT(17, 3);",
    ]


def test_challenge_time_marker_is_not_duplicated() -> None:
    challenge_time = ChallengeTime.build("00:01.000", "00:02.000", "normal")
    merger = DscMerger()
    merger.add_commands([time_command(100000), challenge_time.start_command()])
    merger.add_challenge_time(challenge_time)
    assert merger.bucket(100000) == (challenge_time.start_command(),)


def test_trailing_time_survives() -> None:
    merger = DscMerger()
    merger.add_commands([time_command(0), _command("EFFECT_OFF", 1), time_command(900), end_command()])
    assert merger.ticks() == [0, 900]
    assert merger.bucket(900) == ()


def test_back_to_back_lyrics_share_one_time_marker() -> None:
    lyric_commands = compile_lyric_commands(
        [SubtitleEntry(100, 200, "one"), SubtitleEntry(200, 300, "two")],
        LyricSettings(pv_id=1),
        RecordingLogger(),
    )
    merger = DscMerger()
    merger.add_commands(lyric_commands)

    flattened = _render(merger.flatten())
    assert flattened.count("TIME(200);") == 1
    assert flattened == ["TIME(100);", "LYRIC(1, -1);", "TIME(200);", "LYRIC(2, -1);", "TIME(300);", "LYRIC(0, -1);"]
