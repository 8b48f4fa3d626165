from __future__ import annotations

from pathlib import Path

import pytest

import dscmerge
from dsc_models import ChallengeTimeDifficulty
from game_variant import Game
from merger_config import MergerConfig

from conftest import future_tone_bytes, pack_words


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")
    return path


def test_merge_from_command_line(tmp_path: Path, config_path: Path, write_future_tone_dsc, capsys) -> None:
    chart_a = write_future_tone_dsc("a.dsc", [1, 0, 3, 1, 2, 0])
    chart_b = write_future_tone_dsc("b.dsc", [1, 0, 3, 1, 2, 1, 10, 11, 5, 0])
    output_path = tmp_path / "merged.dsc"

    exit_code = dscmerge.main(
        ["--config", str(config_path), "-g", "FT", "-i", str(chart_a), "-i", str(chart_b), "-o", str(output_path), "-v"]
    )

    assert exit_code == 0
    assert output_path.read_bytes() == future_tone_bytes([1, 0, 3, 1, 2, 1, 10, 11, 5, 0])
    printed = capsys.readouterr().out
    assert "Merging charts for target game: Project DIVA Future Tone." in printed
    assert printed.rstrip().endswith("Done!")


def test_dump_prints_commands(tmp_path: Path, config_path: Path, capsys) -> None:
    plaintext = tmp_path / "chart.txt"
    plaintext.write_text("TIME(5);\nEFFECT_OFF(1);\n", encoding="utf-8")

    exit_code = dscmerge.main(
        ["--config", str(config_path), "-p", str(plaintext), "-o", str(tmp_path / "o.dsc"), "--dump"]
    )

    assert exit_code == 0
    printed = capsys.readouterr().out
    assert "TIME(5);\nEFFECT_OFF(1);\n" in printed
    assert "Merging DSC commands..." not in printed


def test_pvsc_output(tmp_path: Path, config_path: Path) -> None:
    plaintext = tmp_path / "chart.txt"
    plaintext.write_text("TIME(5);\n", encoding="utf-8")
    output_path = tmp_path / "x.dsc"

    assert dscmerge.main(["--config", str(config_path), "-g", "x", "-p", str(plaintext), "-o", str(output_path)]) == 0
    assert output_path.read_bytes() == pack_words([1129535056] + [0] * 18 + [1, 5, 0])


def test_merge_error_exit_code(tmp_path: Path, config_path: Path, capsys) -> None:
    exit_code = dscmerge.main(["--config", str(config_path), "-i", str(tmp_path / "missing.dsc")])
    assert exit_code == 1
    assert "Error: File not found:" in capsys.readouterr().out


def test_arcade_is_reported(tmp_path: Path, config_path: Path, capsys) -> None:
    plaintext = tmp_path / "chart.txt"
    plaintext.write_text("TIME(5);\n", encoding="utf-8")
    exit_code = dscmerge.main(["--config", str(config_path), "-g", "arcade", "-p", str(plaintext)])
    assert exit_code == 1
    assert "Error:" in capsys.readouterr().out


@pytest.mark.parametrize(
    "extra_args",
    [
        ["-g", "mega39"],
        ["--challenge-difficulty", "easy", "--challenge-start", "00:01.000"],
        ["--challenge-difficulty", "hard", "--challenge-start", "00:01.000", "--challenge-end", "00:02.000"],
        ["--challenge-difficulty", "easy", "--challenge-start", "soon", "--challenge-end", "00:02.000"],
    ],
)
def test_invalid_arguments(tmp_path: Path, config_path: Path, extra_args: list, capsys) -> None:
    exit_code = dscmerge.main(["--config", str(config_path), "-i", str(tmp_path / "a.dsc"), *extra_args])
    assert exit_code == 2
    assert capsys.readouterr().out.startswith("Error:")


def test_build_request_uses_config_defaults() -> None:
    config = MergerConfig.model_validate({"defaults": {"game": "F", "pv_id": 9, "output": "song.dsc"}})
    parsed_args = dscmerge._build_argument_parser().parse_args(
        [
            "-s", "lyrics.srt",
            "--remove-targets", "a.dsc",
            "-i", "a.dsc",
            "--challenge-difficulty", "normal",
            "--challenge-start", "00:01.000",
            "--challenge-end", "00:02.000",
        ]
    )

    request = dscmerge.build_request(parsed_args, config)

    assert request.game is Game.F
    assert request.pv_id == 9
    assert request.output == Path("song.dsc")
    assert request.max_lyric_length == 75
    assert request.removes_targets(Path("a.dsc"))
    assert request.challenge_time is not None
    assert request.challenge_time.difficulty is ChallengeTimeDifficulty.NORMAL


def test_missing_config_file(tmp_path: Path, capsys) -> None:
    exit_code = dscmerge.main(["--config", str(tmp_path / "nope.json"), "-i", "a.dsc"])
    assert exit_code == 2
    assert capsys.readouterr().out.startswith("Error:")
