# -*- coding: utf-8 -*-
########################
# game_variant.py
########################
# Purpose:
# - Closed set of Project DIVA releases the merger can target.
# - Parses user supplied game names from the command line, prompt and window.
#
# Design notes:
# - Selected once per run and never changed afterwards.
# - Arcade is listed so it can be selected, but the codec has no opcode table for it.
# - No Qt usage. Pure data.
#
########################
# Interfaces:
# Public enums:
# - class Game(enum.Enum): F | F2ND | X | FUTURE_TONE | ARCADE
#
# Public constants:
# - GAME_MAP: tuple[tuple[str, Game], ...]  # display name -> game, in menu order
#
# Public functions:
# - parse_game(text: str) -> Game
#
########################

from __future__ import annotations

import enum
from typing import Dict, Tuple


class Game(enum.Enum):
    F = "F"
    F2ND = "F2nd"
    X = "X"
    FUTURE_TONE = "Future Tone"
    ARCADE = "Arcade"

    @property
    def display_name(self) -> str:
        return self.value


GAME_MAP: Tuple[Tuple[str, Game], ...] = (
    ("Project DIVA Future Tone", Game.FUTURE_TONE),
    ("Project DIVA F", Game.F),
    ("Project DIVA F 2nd", Game.F2ND),
    ("Project DIVA X", Game.X),
    ("Project DIVA Arcade", Game.ARCADE),
)

_GAME_ALIASES: Dict[str, Game] = {
    "f": Game.F,
    "f2": Game.F2ND,
    "f2nd": Game.F2ND,
    "f 2nd": Game.F2ND,
    "x": Game.X,
    "ft": Game.FUTURE_TONE,
    "futuretone": Game.FUTURE_TONE,
    "future tone": Game.FUTURE_TONE,
    "arcade": Game.ARCADE,
    "aft": Game.ARCADE,
}


def parse_game(text: str) -> Game:
    normalized = " ".join(str(text or "").strip().lower().split())
    game = _GAME_ALIASES.get(normalized)
    if game is None:
        raise ValueError(f"Invalid game: {text}")
    return game


def _run_unit_tests() -> None:
    assert parse_game("FT") is Game.FUTURE_TONE
    assert parse_game("  Future   Tone ") is Game.FUTURE_TONE
    assert parse_game("f2") is Game.F2ND
    assert parse_game("AFT") is Game.ARCADE
    try:
        parse_game("mega39")
    except ValueError:
        pass
    else:
        raise AssertionError("Expected ValueError for unknown game")
    assert [game for _, game in GAME_MAP][0] is Game.FUTURE_TONE


if __name__ == "__main__":
    _run_unit_tests()
    print("game_variant.py: ok")
