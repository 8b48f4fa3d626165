from __future__ import annotations

import pytest

import opcode_table
from game_variant import Game
from merger_errors import UnknownOpcodeError, UnknownOpcodeNameError, UnsupportedGameError
from opcode_table import Opcode, OpcodeMeta


def test_same_opcode_has_different_arity_per_game() -> None:
    assert opcode_table.resolve(Game.FUTURE_TONE, 6) == OpcodeMeta(opcode_id=6, opcode=Opcode.TARGET, arity=7)
    assert opcode_table.resolve(Game.F, 6).arity == 11
    assert opcode_table.resolve(Game.F2ND, 6).arity == 12
    assert opcode_table.resolve(Game.X, 6).arity == 12


def test_same_id_can_mean_different_opcodes() -> None:
    assert opcode_table.resolve(Game.F2ND, 106).opcode is Opcode.TOON_EDGE_2
    assert opcode_table.resolve(Game.X, 106).opcode is Opcode.MIKUDAYO_ADJUST
    assert opcode_table.resolve(Game.FUTURE_TONE, 106).opcode is Opcode.PSE


def test_unknown_id_carries_the_id() -> None:
    with pytest.raises(UnknownOpcodeError) as exc_info:
        opcode_table.resolve(Game.FUTURE_TONE, 4000)
    assert exc_info.value.opcode_id == 4000


def test_unknown_name() -> None:
    with pytest.raises(UnknownOpcodeNameError) as exc_info:
        opcode_table.resolve_by_name(Game.FUTURE_TONE, "NOT_AN_OPCODE")
    assert exc_info.value.name == "NOT_AN_OPCODE"


def test_arcade_has_no_table() -> None:
    assert Game.ARCADE not in opcode_table.supported_games()
    with pytest.raises(UnsupportedGameError):
        opcode_table.resolve(Game.ARCADE, 1)
    with pytest.raises(UnsupportedGameError):
        opcode_table.resolve_by_name(Game.ARCADE, "TIME")


@pytest.mark.parametrize("game", [Game.F, Game.F2ND, Game.X, Game.FUTURE_TONE])
def test_name_lookup_reaches_every_id(game: Game) -> None:
    table = opcode_table._OPCODE_TABLES[game]
    for opcode_id, (opcode, arity) in table.items():
        meta = opcode_table.resolve_by_name(game, opcode.name)
        assert meta.opcode is opcode
        assert meta.arity == arity


@pytest.mark.parametrize("opcode", [Opcode.END, Opcode.TIME, Opcode.LYRIC, Opcode.MODE_SELECT])
def test_synthesized_opcodes_share_ids(opcode: Opcode) -> None:
    shared = opcode_table.shared_meta(opcode)
    for game in opcode_table.supported_games():
        assert opcode_table.resolve(game, shared.opcode_id) == shared


def test_target_opcodes() -> None:
    assert opcode_table.TARGET_OPCODES == {
        Opcode.TARGET,
        Opcode.TARGET_FLYING_TIME,
        Opcode.TARGET_EFFECT,
        Opcode.TARGET_FLAG,
        Opcode.EDIT_TARGET,
    }
