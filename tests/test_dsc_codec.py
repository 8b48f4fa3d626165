from __future__ import annotations

import struct
from pathlib import Path

import pytest

import dsc_codec
from dsc_models import end_command, time_command
from game_variant import Game
from merger_errors import (
    ArgumentCountError,
    ArgumentParseError,
    InputFileNotFoundError,
    TextDecodeError,
    TimelineIOError,
    UnknownOpcodeError,
    UnknownOpcodeNameError,
    UnsupportedGameError,
    WriteFileFailedError,
)
from opcode_table import Opcode

from conftest import FUTURE_TONE_MAGIC, PVSC_MAGIC, future_tone_bytes, pack_words, pvsc_bytes


def _body_words(encoded: bytes, header_bytes: int) -> list:
    body = encoded[header_bytes:]
    return list(struct.unpack(f"<{len(body) // 4}i", body))


def test_decode_future_tone() -> None:
    timeline = dsc_codec.decode_binary(Game.FUTURE_TONE, future_tone_bytes([1, 0, 3, 1, 2, 1, 500, 0]))

    assert [str(command) for command in timeline.commands] == ["TIME(0);", "MIKU_ROT(1, 2);", "TIME(500);", "END();"]
    assert [command.opcode_id for command in timeline.commands] == [1, 3, 1, 0]


def test_round_trip_future_tone() -> None:
    data = future_tone_bytes([1, 0, 6, 1, 2, 3, 4, 5, 6, 7, 1, 100, 11, -9, 0])
    timeline = dsc_codec.decode_binary(Game.FUTURE_TONE, data)
    assert dsc_codec.encode(Game.FUTURE_TONE, timeline.commands) == data


def test_round_trip_f() -> None:
    data = pack_words([302121504, 1, 0, 6, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0])
    timeline = dsc_codec.decode_binary(Game.F, data)
    assert timeline.commands[1].opcode is Opcode.TARGET
    assert len(timeline.commands[1].args) == 11
    assert dsc_codec.encode(Game.F, timeline.commands) == data


def test_pvsc_header_layout() -> None:
    body = [1, 250, 11, 4, 0]
    timeline = dsc_codec.decode_binary(Game.F2ND, pvsc_bytes(body))
    assert [str(command) for command in timeline.commands] == ["TIME(250);", "EFFECT_OFF(4);", "END();"]

    encoded = dsc_codec.encode(Game.F2ND, timeline.commands)
    assert _body_words(encoded, 0)[:19] == [PVSC_MAGIC] + [0] * 18
    assert _body_words(encoded, 76) == body


def test_alternate_sentinel_ends_pvsc_games() -> None:
    timeline = dsc_codec.decode_binary(Game.X, pvsc_bytes([1, 10, 1128681285, 1, 20]))
    assert [str(command) for command in timeline.commands] == ["TIME(10);", "END();"]


def test_alternate_sentinel_is_an_unknown_id_for_future_tone() -> None:
    with pytest.raises(UnknownOpcodeError) as exc_info:
        dsc_codec.decode_binary(Game.FUTURE_TONE, future_tone_bytes([1, 10, 1128681285]))
    assert exc_info.value.opcode_id == 1128681285


@pytest.mark.parametrize(
    "body",
    [
        [1, 0, 3, 1],  # argument missing
        [1, 0],  # terminator missing
    ],
)
def test_truncated_stream_is_an_error(body: list) -> None:
    with pytest.raises(TimelineIOError):
        dsc_codec.decode_binary(Game.FUTURE_TONE, future_tone_bytes(body))


def test_unknown_opcode_id() -> None:
    with pytest.raises(UnknownOpcodeError) as exc_info:
        dsc_codec.decode_binary(Game.FUTURE_TONE, future_tone_bytes([1, 0, 999, 0]))
    assert exc_info.value.opcode_id == 999


def test_arcade_is_unsupported() -> None:
    with pytest.raises(UnsupportedGameError):
        dsc_codec.decode_binary(Game.ARCADE, pack_words([1, 0, 0]))
    with pytest.raises(UnsupportedGameError):
        dsc_codec.encode(Game.ARCADE, [time_command(0)])


def test_encode_appends_terminator() -> None:
    encoded = dsc_codec.encode(Game.FUTURE_TONE, [time_command(5)])
    assert encoded == pack_words([FUTURE_TONE_MAGIC, 1, 5, 0])

    already_terminated = dsc_codec.encode(Game.FUTURE_TONE, [time_command(5), end_command()])
    assert already_terminated == encoded


def test_decode_plaintext() -> None:
    lines = [
        "# header comment",
        "",
        "TIME(100);",
        "  MIKU_ROT( 1 , -2 );",
        "END();",
        "not a command",
        "A(B(C)",
    ]
    timeline = dsc_codec.decode_plaintext(Game.FUTURE_TONE, lines, remove_targets=True)

    assert [str(command) for command in timeline.commands] == ["TIME(100);", "MIKU_ROT(1, -2);", "END();"]
    assert timeline.commands[1].opcode_id == 3
    assert timeline.remove_targets is True


def test_plaintext_reads_dump_output() -> None:
    original = dsc_codec.decode_binary(Game.FUTURE_TONE, future_tone_bytes([1, 0, 3, 1, 2, 1, 500, 0]))
    reparsed = dsc_codec.decode_plaintext(Game.FUTURE_TONE, dsc_codec.dump(original.commands).splitlines())
    assert reparsed.commands == original.commands


@pytest.mark.parametrize("token", ["x", "1.5", "99999999999"])
def test_plaintext_bad_argument(token: str) -> None:
    with pytest.raises(ArgumentParseError) as exc_info:
        dsc_codec.decode_plaintext(Game.FUTURE_TONE, [f"MIKU_ROT(1, {token});"])
    assert exc_info.value.opcode_name == "MIKU_ROT"
    assert exc_info.value.token == token


def test_plaintext_wrong_argument_count() -> None:
    with pytest.raises(ArgumentCountError) as exc_info:
        dsc_codec.decode_plaintext(Game.FUTURE_TONE, ["MIKU_ROT(1);"])
    assert exc_info.value.expected == 2
    assert exc_info.value.actual == 1


def test_plaintext_unknown_name() -> None:
    with pytest.raises(UnknownOpcodeNameError):
        dsc_codec.decode_plaintext(Game.FUTURE_TONE, ["WIGGLE(1);"])


def test_dump_format() -> None:
    assert dsc_codec.dump([time_command(7), end_command()]) == "TIME(7);\nEND();\n"


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InputFileNotFoundError) as exc_info:
        dsc_codec.load_dsc_file(Game.FUTURE_TONE, tmp_path / "missing.dsc")
    assert "missing.dsc" in str(exc_info.value)


def test_load_plaintext_file_rejects_bad_utf8(tmp_path: Path) -> None:
    text_path = tmp_path / "chart.txt"
    text_path.write_bytes(b"TIME(1);\n\xff\xfe\xfa")
    with pytest.raises(TextDecodeError) as exc_info:
        dsc_codec.load_plaintext_file(Game.FUTURE_TONE, text_path)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_load_dsc_file_records_source(tmp_path: Path) -> None:
    dsc_path = tmp_path / "chart.dsc"
    dsc_path.write_bytes(future_tone_bytes([1, 0, 0]))
    timeline = dsc_codec.load_dsc_file(Game.FUTURE_TONE, dsc_path, remove_targets=True)
    assert timeline.source_path == dsc_path
    assert timeline.remove_targets is True


def test_write_failure(tmp_path: Path) -> None:
    with pytest.raises(WriteFileFailedError):
        dsc_codec.write_dsc_file(Game.FUTURE_TONE, tmp_path, [time_command(0)])
