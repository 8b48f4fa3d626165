from __future__ import annotations

from pathlib import Path

import pytest

import dsc_codec
from dsc_models import ChallengeTime
from game_variant import Game
from merge_application import InputKind, MergeApplication, MergeRequest
from merge_logger import RecordingLogger
from merger_errors import (
    InputFileNotFoundError,
    InvalidSubtitleFileError,
    NoInputFilesError,
    UnknownOpcodeError,
    WriteFileFailedError,
)

from conftest import future_tone_bytes


def _render(commands) -> list:
    return [str(command) for command in commands]


def test_no_inputs_is_an_error(tmp_path: Path) -> None:
    request = MergeRequest.build(game=Game.FUTURE_TONE, output=tmp_path / "out.dsc")
    with pytest.raises(NoInputFilesError):
        MergeApplication(request, RecordingLogger()).run()
    assert not (tmp_path / "out.dsc").exists()


def test_merge_two_charts_end_to_end(tmp_path: Path, write_future_tone_dsc) -> None:
    chart_a = write_future_tone_dsc("a.dsc", [1, 0, 3, 1, 2, 1, 500, 0])
    chart_b = write_future_tone_dsc("b.dsc", [1, 250, 11, 9, 0])
    output_path = tmp_path / "merged.dsc"
    logger = RecordingLogger()

    request = MergeRequest.build(game=Game.FUTURE_TONE, dsc_inputs=[chart_a, chart_b], output=output_path)
    result = MergeApplication(request, logger).run()

    assert _render(result.commands) == ["TIME(0);", "MIKU_ROT(1, 2);", "TIME(250);", "EFFECT_OFF(9);", "TIME(500);"]
    assert output_path.read_bytes() == result.encoded
    assert result.encoded == future_tone_bytes([1, 0, 3, 1, 2, 1, 250, 11, 9, 1, 500, 0])

    reloaded = dsc_codec.load_dsc_file(Game.FUTURE_TONE, output_path)
    assert list(reloaded.commands[:-1]) == list(result.commands)

    assert logger.messages == [
        "Merging charts for target game: Project DIVA Future Tone.",
        f'Loading DSC file: "{chart_a}"...',
        f'Loading DSC file: "{chart_b}"...',
        "Merging DSC commands...",
        f'Writing merged DSC to file: "{output_path}"...',
    ]


def test_mixed_sources_with_lyrics_and_challenge_time(tmp_path: Path, write_future_tone_dsc) -> None:
    chart = write_future_tone_dsc("chart.dsc", [1, 0, 6, 0, 1, 2, 3, 4, 5, 6, 1, 100000, 11, 1, 0])
    plaintext = tmp_path / "extra.txt"
    plaintext.write_text("# extra\nTIME(100000);\nEFFECT_OFF(1);\nEFFECT_OFF(2);\n", encoding="utf-8")
    subtitle = tmp_path / "lyrics.srt"
    subtitle.write_text("1\n00:00:01,000 --> 00:00:02,000\nLa la\n", encoding="utf-8")
    logger = RecordingLogger()

    request = MergeRequest.build(
        game=Game.FUTURE_TONE,
        dsc_inputs=[chart],
        plaintext_inputs=[plaintext],
        subtitle_inputs=[subtitle],
        remove_targets_inputs=[chart],
        output=tmp_path / "out.dsc",
        pv_id=42,
        challenge_time=ChallengeTime.build("00:01.000", "00:03.000", "normal"),
    )
    result = MergeApplication(request, logger).run(write_output=False)

    assert _render(result.commands) == [
        "TIME(0);",
        "TIME(100000);",
        "EFFECT_OFF(1);",
        "EFFECT_OFF(2);",
        "LYRIC(1, -1);",
        "MODE_SELECT(2, 1);",
        "TIME(200000);",
        "LYRIC(0, -1);",
        "TIME(300000);",
        "MODE_SELECT(2, 3);",
    ]
    assert logger.lyrics == ["pv_042.lyric.001=La la"]
    assert result.output is None
    assert not (tmp_path / "out.dsc").exists()


def test_sources_follow_kind_order(tmp_path: Path) -> None:
    request = MergeRequest.build(
        game=Game.X,
        dsc_inputs=[tmp_path / "b.dsc"],
        plaintext_inputs=[tmp_path / "a.txt"],
        subtitle_inputs=[tmp_path / "c.srt"],
        remove_targets_inputs=[tmp_path / "a.txt"],
    )
    sources = request.sources()
    assert [source.kind for source in sources] == [InputKind.DSC, InputKind.PLAINTEXT, InputKind.SUBTITLE]
    assert [source.remove_targets for source in sources] == [False, True, False]


def test_first_failing_input_aborts(tmp_path: Path, write_future_tone_dsc) -> None:
    good = write_future_tone_dsc("good.dsc", [1, 0, 0])
    bad = write_future_tone_dsc("bad.dsc", [1, 0, 7777, 0])
    output_path = tmp_path / "out.dsc"

    request = MergeRequest.build(game=Game.FUTURE_TONE, dsc_inputs=[good, bad], output=output_path)
    with pytest.raises(UnknownOpcodeError):
        MergeApplication(request, RecordingLogger()).run()
    assert not output_path.exists()


def test_missing_input_file(tmp_path: Path) -> None:
    request = MergeRequest.build(game=Game.FUTURE_TONE, plaintext_inputs=[tmp_path / "nope.txt"])
    with pytest.raises(InputFileNotFoundError):
        MergeApplication(request, RecordingLogger()).run(write_output=False)


def test_unsupported_subtitle_extension(tmp_path: Path) -> None:
    vtt_path = tmp_path / "lyrics.vtt"
    vtt_path.write_text("WEBVTT\n", encoding="utf-8")
    request = MergeRequest.build(game=Game.FUTURE_TONE, subtitle_inputs=[vtt_path])
    with pytest.raises(InvalidSubtitleFileError):
        MergeApplication(request, RecordingLogger()).run(write_output=False)


def test_unwritable_output(tmp_path: Path, write_future_tone_dsc) -> None:
    chart = write_future_tone_dsc("chart.dsc", [1, 0, 0])
    request = MergeRequest.build(game=Game.FUTURE_TONE, dsc_inputs=[chart], output=tmp_path)
    with pytest.raises(WriteFileFailedError):
        MergeApplication(request, RecordingLogger()).run()
