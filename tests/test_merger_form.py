from __future__ import annotations

from pathlib import Path

import pytest

from game_variant import Game
from merger_config import MergeDefaultsConfig
from merger_errors import InvalidTimestampError
from merger_form import MergerFormState


def test_defaults_come_from_config() -> None:
    form = MergerFormState(defaults=MergeDefaultsConfig(game="x", pv_id=3, output="chart.dsc"))
    assert form.game is Game.X
    assert form.game_index == 3
    assert form.pv_id == 3
    assert form.output == "chart.dsc"


def test_chart_inputs_are_deduplicated() -> None:
    form = MergerFormState()
    assert form.add_dsc_input("a.dsc") is True
    assert form.add_dsc_input("a.dsc") is False
    assert form.add_plaintext_input("b.txt") is True
    assert form.add_subtitle_input("l.srt") is True
    assert form.add_subtitle_input("l.srt") is True

    assert form.chart_inputs() == ["a.dsc", "b.txt"]
    assert form.remove_targets_map == {"a.dsc": False, "b.txt": False}
    assert form.subtitle_inputs == ["l.srt", "l.srt"]


def test_removing_a_chart_drops_its_flag() -> None:
    form = MergerFormState()
    form.add_dsc_input("a.dsc")
    form.set_remove_targets("a.dsc", True)
    form.remove_dsc_input(0)
    assert form.remove_targets_map == {}


def test_to_request() -> None:
    form = MergerFormState()
    form.set_game_index(2)
    form.add_dsc_input("a.dsc")
    form.add_dsc_input("b.dsc")
    form.set_remove_targets("b.dsc", True)
    form.has_challenge_time = True
    form.challenge_time_start = "00:01.000"
    form.challenge_time_end = "00:02.000"
    form.output = "  "

    request = form.to_request()

    assert request.game is Game.F2ND
    assert request.dsc_inputs == (Path("a.dsc"), Path("b.dsc"))
    assert request.removes_targets(Path("b.dsc"))
    assert not request.removes_targets(Path("a.dsc"))
    assert request.challenge_time is not None
    assert request.challenge_time.start_tick == 100000
    assert request.output == Path("output.dsc")


def test_bad_challenge_time_text() -> None:
    form = MergerFormState()
    form.add_dsc_input("a.dsc")
    form.has_challenge_time = True
    form.challenge_time_start = "later"
    with pytest.raises(InvalidTimestampError):
        form.to_request()


def test_reset() -> None:
    form = MergerFormState()
    form.add_dsc_input("a.dsc")
    form.pv_id = 99
    form.has_challenge_time = True
    form.reset()
    assert form.dsc_inputs == []
    assert form.pv_id == 0
    assert form.has_challenge_time is False
