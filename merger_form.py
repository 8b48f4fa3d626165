# -*- coding: utf-8 -*-
########################
# merger_form.py
########################
# Purpose:
# - Editable merge settings behind the merger window: input lists, per-chart remove-targets flags,
#   lyric settings, Challenge Time and output path.
# - Converts the form into a MergeRequest.
#
# Design notes:
# - No Qt usage, so the window stays a thin view and the form can be tested directly.
# - Adding a chart path that is already listed is ignored. Subtitle paths may repeat.
# - Removing a chart also removes its remove-targets flag.
#
########################
# Interfaces:
# Public classes:
# - class MergerFormState(*, defaults: Optional[MergeDefaultsConfig] = None)
#   - add_dsc_input(path: str) -> bool
#   - add_plaintext_input(path: str) -> bool
#   - add_subtitle_input(path: str) -> bool
#   - remove_dsc_input(index: int) -> None
#   - remove_plaintext_input(index: int) -> None
#   - remove_subtitle_input(index: int) -> None
#   - set_remove_targets(path: str, enabled: bool) -> None
#   - chart_inputs() -> list[str]
#   - to_request() -> MergeRequest
#   - reset() -> None
#
########################

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from dsc_models import ChallengeTime, ChallengeTimeDifficulty
from game_variant import GAME_MAP, Game
from merge_application import MergeRequest
from merger_config import MergeDefaultsConfig


DEFAULT_CHALLENGE_TIME_TEXT = "00:00.000"


class MergerFormState:
    def __init__(self, *, defaults: Optional[MergeDefaultsConfig] = None) -> None:
        self._defaults = defaults if defaults is not None else MergeDefaultsConfig()
        self.dsc_inputs: List[str] = []
        self.plaintext_inputs: List[str] = []
        self.subtitle_inputs: List[str] = []
        self.remove_targets_map: Dict[str, bool] = {}
        self.reset()

    def reset(self) -> None:
        defaults = self._defaults

        self.dsc_inputs.clear()
        self.plaintext_inputs.clear()
        self.subtitle_inputs.clear()
        self.remove_targets_map.clear()

        self.game: Game = defaults.game_variant
        self.output: str = defaults.output
        self.pv_id: int = int(defaults.pv_id)
        self.english_lyrics: bool = bool(defaults.english_lyrics)
        self.max_lyric_length: int = int(defaults.max_lyric_length)
        self.verbose: bool = bool(defaults.verbose)

        self.has_challenge_time: bool = False
        self.challenge_difficulty: ChallengeTimeDifficulty = ChallengeTimeDifficulty.EASY
        self.challenge_time_start: str = DEFAULT_CHALLENGE_TIME_TEXT
        self.challenge_time_end: str = DEFAULT_CHALLENGE_TIME_TEXT

    @property
    def game_index(self) -> int:
        for index, (_name, game) in enumerate(GAME_MAP):
            if game is self.game:
                return index
        return 0

    def set_game_index(self, index: int) -> None:
        self.game = GAME_MAP[int(index)][1]

    def _add_chart_input(self, target: List[str], path: str) -> bool:
        path_text = str(path or "").strip()
        if not path_text or path_text in target:
            return False
        target.append(path_text)
        self.remove_targets_map.setdefault(path_text, False)
        return True

    def add_dsc_input(self, path: str) -> bool:
        return self._add_chart_input(self.dsc_inputs, path)

    def add_plaintext_input(self, path: str) -> bool:
        return self._add_chart_input(self.plaintext_inputs, path)

    def add_subtitle_input(self, path: str) -> bool:
        path_text = str(path or "").strip()
        if not path_text:
            return False
        self.subtitle_inputs.append(path_text)
        return True

    def _remove_chart_input(self, target: List[str], index: int) -> None:
        removed = target.pop(int(index))
        if removed not in self.dsc_inputs and removed not in self.plaintext_inputs:
            self.remove_targets_map.pop(removed, None)

    def remove_dsc_input(self, index: int) -> None:
        self._remove_chart_input(self.dsc_inputs, index)

    def remove_plaintext_input(self, index: int) -> None:
        self._remove_chart_input(self.plaintext_inputs, index)

    def remove_subtitle_input(self, index: int) -> None:
        self.subtitle_inputs.pop(int(index))

    def chart_inputs(self) -> List[str]:
        return list(self.dsc_inputs) + list(self.plaintext_inputs)

    def set_remove_targets(self, path: str, enabled: bool) -> None:
        if path in self.remove_targets_map:
            self.remove_targets_map[path] = bool(enabled)

    def challenge_time(self) -> Optional[ChallengeTime]:
        if not self.has_challenge_time:
            return None
        return ChallengeTime.build(self.challenge_time_start, self.challenge_time_end, self.challenge_difficulty)

    def to_request(self) -> MergeRequest:
        return MergeRequest.build(
            game=self.game,
            dsc_inputs=[Path(path) for path in self.dsc_inputs],
            plaintext_inputs=[Path(path) for path in self.plaintext_inputs],
            subtitle_inputs=[Path(path) for path in self.subtitle_inputs],
            remove_targets_inputs=[Path(path) for path, enabled in self.remove_targets_map.items() if enabled],
            output=Path(self.output.strip() or self._defaults.output),
            pv_id=self.pv_id,
            english_lyrics=self.english_lyrics,
            max_lyric_length=self.max_lyric_length,
            verbose=self.verbose,
            challenge_time=self.challenge_time(),
        )
