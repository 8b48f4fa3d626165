# -*- coding: utf-8 -*-
########################
# opcode_table.py
########################
# Purpose:
# - Static DSC opcode tables for every supported game.
# - Maps (game, numeric id) and (game, opcode name) to the opcode identity and its fixed argument count.
#
# Design notes:
# - Tables are plain data keyed by numeric id. The name index is derived from them at import time.
# - Numeric ids and argument counts differ between games for the same opcode. Never assume an id is portable.
# - A lookup miss is always an error: the argument count is needed to know how many words to consume.
# - Arcade has no table. Any lookup for it raises UnsupportedGameError.
# - No Qt usage. Pure data and lookup.
#
########################
# Interfaces:
# Public enums:
# - class Opcode(enum.Enum)  # every known command kind across all games
#
# Public dataclasses:
# - OpcodeMeta(opcode_id: int, opcode: Opcode, arity: int)
#
# Public constants:
# - TARGET_OPCODES: frozenset[Opcode]
# - SHARED_OPCODE_IDS: dict[Opcode, int]  # ids identical in every supported game
# - ALTERNATE_END_SENTINEL: int
#
# Public functions:
# - supported_games() -> list[Game]
# - resolve(game: Game, opcode_id: int) -> OpcodeMeta
# - resolve_by_name(game: Game, name: str) -> OpcodeMeta
# - shared_meta(opcode: Opcode) -> OpcodeMeta
#
########################
# Smoke Tests:
#   - python opcode_table.py
########################

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Dict, FrozenSet, List, Tuple

from game_variant import Game
from merger_errors import UnknownOpcodeError, UnknownOpcodeNameError, UnsupportedGameError


class Opcode(enum.Enum):
    AGEAGE_CTRL = "AGEAGE_CTRL"
    AIM = "AIM"
    ANNOTATION = "ANNOTATION"
    AOTO_CAP = "AOTO_CAP"
    AUTO_BLINK = "AUTO_BLINK"
    AUTO_CAPTURE_BEGIN = "AUTO_CAPTURE_BEGIN"
    BANK_BRANCH = "BANK_BRANCH"
    BANK_END = "BANK_END"
    BAR_POINT = "BAR_POINT"
    BAR_TIME_SET = "BAR_TIME_SET"
    BEAT_POINT = "BEAT_POINT"
    BLOOM = "BLOOM"
    CHANGE_FIELD = "CHANGE_FIELD"
    CHARA_ALPHA = "CHARA_ALPHA"
    CHARA_COLOR = "CHARA_COLOR"
    CHARA_EFFECT = "CHARA_EFFECT"
    CHARA_EFFECT_CHARA_LIGHT = "CHARA_EFFECT_CHARA_LIGHT"
    CHARA_HEIGHT_ADJUST = "CHARA_HEIGHT_ADJUST"
    CHARA_LIGHT = "CHARA_LIGHT"
    CHARA_POS_ADJUST = "CHARA_POS_ADJUST"
    CHARA_SHADOW_QUALITY = "CHARA_SHADOW_QUALITY"
    CHARA_SIZE = "CHARA_SIZE"
    CHROMATIC_ABERRATION = "CHROMATIC_ABERRATION"
    CLOTH_WET = "CLOTH_WET"
    COLOR_COLLE = "COLOR_COLLE"
    COLOR_CORRECTION = "COLOR_CORRECTION"
    COMMON_EFFECT_AET_FRONT = "COMMON_EFFECT_AET_FRONT"
    COMMON_EFFECT_AET_FRONT_LOW = "COMMON_EFFECT_AET_FRONT_LOW"
    COMMON_EFFECT_PARTICLE = "COMMON_EFFECT_PARTICLE"
    COMMON_LIGHT = "COMMON_LIGHT"
    CREDIT_TITLE = "CREDIT_TITLE"
    CROSSFADE = "CROSSFADE"
    DATA_CAMERA = "DATA_CAMERA"
    DATA_CAMERA_START = "DATA_CAMERA_START"
    DOF = "DOF"
    DUMMY = "DUMMY"
    EDIT_BLUSH = "EDIT_BLUSH"
    EDIT_CAMERA = "EDIT_CAMERA"
    EDIT_CAMERA_BOX = "EDIT_CAMERA_BOX"
    EDIT_CHANGE_FIELD = "EDIT_CHANGE_FIELD"
    EDIT_DISP = "EDIT_DISP"
    EDIT_EFFECT = "EDIT_EFFECT"
    EDIT_EXPRESSION = "EDIT_EXPRESSION"
    EDIT_EYE = "EDIT_EYE"
    EDIT_EYELID = "EDIT_EYELID"
    EDIT_EYELID_ANIM = "EDIT_EYELID_ANIM"
    EDIT_EYE_ANIM = "EDIT_EYE_ANIM"
    EDIT_FACE = "EDIT_FACE"
    EDIT_HAND_ANIM = "EDIT_HAND_ANIM"
    EDIT_INSTRUMENT_ITEM = "EDIT_INSTRUMENT_ITEM"
    EDIT_ITEM = "EDIT_ITEM"
    EDIT_LYRIC = "EDIT_LYRIC"
    EDIT_MODE_SELECT = "EDIT_MODE_SELECT"
    EDIT_MOTION = "EDIT_MOTION"
    EDIT_MOTION_F = "EDIT_MOTION_F"
    EDIT_MOTION_LOOP = "EDIT_MOTION_LOOP"
    EDIT_MOT_SMOOTH_LEN = "EDIT_MOT_SMOOTH_LEN"
    EDIT_MOUTH = "EDIT_MOUTH"
    EDIT_MOUTH_ANIM = "EDIT_MOUTH_ANIM"
    EDIT_MOVE = "EDIT_MOVE"
    EDIT_MOVE_XYZ = "EDIT_MOVE_XYZ"
    EDIT_SHADOW = "EDIT_SHADOW"
    EDIT_STAGE_PARAM = "EDIT_STAGE_PARAM"
    EDIT_TARGET = "EDIT_TARGET"
    EFFECT = "EFFECT"
    EFFECT_OFF = "EFFECT_OFF"
    ENABLE_COMMON_LIGHT_TO_CHARA = "ENABLE_COMMON_LIGHT_TO_CHARA"
    ENABLE_FXAA = "ENABLE_FXAA"
    ENABLE_REFLECTION = "ENABLE_REFLECTION"
    ENABLE_TEMPORAL_AA = "ENABLE_TEMPORAL_AA"
    END = "END"
    EVENT_JUDGE = "EVENT_JUDGE"
    EXPRESSION = "EXPRESSION"
    EYE_ANIM = "EYE_ANIM"
    FACE_TYPE = "FACE_TYPE"
    FADE = "FADE"
    FADEIN_FIELD = "FADEIN_FIELD"
    FADEOUT_FIELD = "FADEOUT_FIELD"
    FADE_MODE = "FADE_MODE"
    FOG = "FOG"
    FOG_ENABLE = "FOG_ENABLE"
    GAZE = "GAZE"
    HAND_ANIM = "HAND_ANIM"
    HAND_ITEM = "HAND_ITEM"
    HAND_SCALE = "HAND_SCALE"
    HIDE_FIELD = "HIDE_FIELD"
    IBL_COLOR = "IBL_COLOR"
    ITEM_ALPHA = "ITEM_ALPHA"
    ITEM_ANIM = "ITEM_ANIM"
    ITEM_ANIM_ATTACH = "ITEM_ANIM_ATTACH"
    ITEM_LIGHT = "ITEM_LIGHT"
    LIGHT_AUTH = "LIGHT_AUTH"
    LIGHT_POS = "LIGHT_POS"
    LIGHT_ROT = "LIGHT_ROT"
    LOOK_ANIM = "LOOK_ANIM"
    LOOK_CAMERA = "LOOK_CAMERA"
    LOOK_CAMERA_FACE_LIMIT = "LOOK_CAMERA_FACE_LIMIT"
    LYRIC = "LYRIC"
    LYRIC_2 = "LYRIC_2"
    LYRIC_READ = "LYRIC_READ"
    LYRIC_READ_2 = "LYRIC_READ_2"
    MANUAL_CAPTURE = "MANUAL_CAPTURE"
    MAN_CAP = "MAN_CAP"
    MARKER = "MARKER"
    MIKUDAYO_ADJUST = "MIKUDAYO_ADJUST"
    MIKU_DISP = "MIKU_DISP"
    MIKU_MOVE = "MIKU_MOVE"
    MIKU_ROT = "MIKU_ROT"
    MIKU_SHADOW = "MIKU_SHADOW"
    MODE_SELECT = "MODE_SELECT"
    MOUTH_ANIM = "MOUTH_ANIM"
    MOVE_CAMERA = "MOVE_CAMERA"
    MOVE_FIELD = "MOVE_FIELD"
    MOVIE_CUT = "MOVIE_CUT"
    MOVIE_CUT_CHG = "MOVIE_CUT_CHG"
    MOVIE_DISP = "MOVIE_DISP"
    MOVIE_PLAY = "MOVIE_PLAY"
    MUSIC_PLAY = "MUSIC_PLAY"
    NEAR_CLIP = "NEAR_CLIP"
    OSAGE_MV_CCL = "OSAGE_MV_CCL"
    OSAGE_STEP = "OSAGE_STEP"
    PARTS_DISP = "PARTS_DISP"
    PSE = "PSE"
    PV_AUTH_LIGHT_PRIORITY = "PV_AUTH_LIGHT_PRIORITY"
    PV_BRANCH_MODE = "PV_BRANCH_MODE"
    PV_CHARA_LIGHT = "PV_CHARA_LIGHT"
    PV_END = "PV_END"
    PV_END_FADEOUT = "PV_END_FADEOUT"
    PV_STAGE_LIGHT = "PV_STAGE_LIGHT"
    REFLECTION = "REFLECTION"
    REFLECTION_QUALITY = "REFLECTION_QUALITY"
    RESERVE = "RESERVE"
    SATURATE = "SATURATE"
    SCENE_FADE = "SCENE_FADE"
    SCENE_ROT = "SCENE_ROT"
    SET_CAMERA = "SET_CAMERA"
    SET_CHARA = "SET_CHARA"
    SET_MOTION = "SET_MOTION"
    SET_PLAYDATA = "SET_PLAYDATA"
    SET_STAGE_EFFECT_ENV = "SET_STAGE_EFFECT_ENV"
    SE_EFFECT = "SE_EFFECT"
    SHADOWHEIGHT = "SHADOWHEIGHT"
    SHADOWPOS = "SHADOWPOS"
    SHADOW_CAST = "SHADOW_CAST"
    SHADOW_RANGE = "SHADOW_RANGE"
    SHIMMER = "SHIMMER"
    SONG_EFFECT = "SONG_EFFECT"
    SONG_EFFECT_ALPHA_SORT = "SONG_EFFECT_ALPHA_SORT"
    SONG_EFFECT_ATTACH = "SONG_EFFECT_ATTACH"
    STAGE_EFFECT = "STAGE_EFFECT"
    STAGE_LIGHT = "STAGE_LIGHT"
    STAGE_SHADOW = "STAGE_SHADOW"
    STAGE_SHADOW_QUALITY = "STAGE_SHADOW_QUALITY"
    SUBFRAMERENDER = "SUBFRAMERENDER"
    TARGET = "TARGET"
    TARGET_EFFECT = "TARGET_EFFECT"
    TARGET_FLAG = "TARGET_FLAG"
    TARGET_FLYING_TIME = "TARGET_FLYING_TIME"
    TECH_DEMO_GESUTRE = "TECH_DEMO_GESUTRE"
    TIME = "TIME"
    TONE_MAP = "TONE_MAP"
    TONE_TRANS = "TONE_TRANS"
    TOON = "TOON"
    TOON_EDGE = "TOON_EDGE"
    TOON_EDGE_2 = "TOON_EDGE_2"
    VR_CHARA_PSMOVE = "VR_CHARA_PSMOVE"
    VR_CHEER = "VR_CHEER"
    VR_CHEMICAL_LIGHT_COLOR = "VR_CHEMICAL_LIGHT_COLOR"
    VR_LIVE_CHARA_VOICE = "VR_LIVE_CHARA_VOICE"
    VR_LIVE_CHEER = "VR_LIVE_CHEER"
    VR_LIVE_CLONE = "VR_LIVE_CLONE"
    VR_LIVE_FLY = "VR_LIVE_FLY"
    VR_LIVE_GESTURE = "VR_LIVE_GESTURE"
    VR_LIVE_HAIR_OSAGE = "VR_LIVE_HAIR_OSAGE"
    VR_LIVE_LOOK_CAMERA = "VR_LIVE_LOOK_CAMERA"
    VR_LIVE_MOB = "VR_LIVE_MOB"
    VR_LIVE_MOVIE = "VR_LIVE_MOVIE"
    VR_LIVE_ONESHOT_EFFECT = "VR_LIVE_ONESHOT_EFFECT"
    VR_LIVE_PRESENT = "VR_LIVE_PRESENT"
    VR_LIVE_TRANSFORM = "VR_LIVE_TRANSFORM"
    VR_LOOP_EFFECT = "VR_LOOP_EFFECT"
    VR_MOVE_PATH = "VR_MOVE_PATH"
    VR_SET_BASE = "VR_SET_BASE"
    VR_TECH_DEMO_EFFECT = "VR_TECH_DEMO_EFFECT"
    VR_TRANSFORM = "VR_TRANSFORM"
    WIND = "WIND"


@dataclass(frozen=True)
class OpcodeMeta:
    opcode_id: int
    opcode: Opcode
    arity: int

    @property
    def name(self) -> str:
        return self.opcode.name


# Hit target commands. Charts can ask for these to be dropped during merge.
TARGET_OPCODES: FrozenSet[Opcode] = frozenset(
    {
        Opcode.TARGET,
        Opcode.TARGET_FLYING_TIME,
        Opcode.TARGET_EFFECT,
        Opcode.TARGET_FLAG,
        Opcode.EDIT_TARGET,
    }
)

# F 2nd and X files may end with this word instead of 0.
ALTERNATE_END_SENTINEL = 1128681285


_F_TABLE: Dict[int, Tuple[Opcode, int]] = {
    0: (Opcode.END, 0),
    1: (Opcode.TIME, 1),
    2: (Opcode.MIKU_MOVE, 4),
    3: (Opcode.MIKU_ROT, 2),
    4: (Opcode.MIKU_DISP, 2),
    5: (Opcode.MIKU_SHADOW, 2),
    6: (Opcode.TARGET, 11),
    7: (Opcode.SET_MOTION, 4),
    8: (Opcode.SET_PLAYDATA, 2),
    9: (Opcode.EFFECT, 6),
    10: (Opcode.FADEIN_FIELD, 2),
    11: (Opcode.EFFECT_OFF, 1),
    12: (Opcode.SET_CAMERA, 6),
    13: (Opcode.DATA_CAMERA, 2),
    14: (Opcode.CHANGE_FIELD, 1),
    15: (Opcode.HIDE_FIELD, 1),
    16: (Opcode.MOVE_FIELD, 3),
    17: (Opcode.FADEOUT_FIELD, 2),
    18: (Opcode.EYE_ANIM, 3),
    19: (Opcode.MOUTH_ANIM, 5),
    20: (Opcode.HAND_ANIM, 5),
    21: (Opcode.LOOK_ANIM, 4),
    22: (Opcode.EXPRESSION, 4),
    23: (Opcode.LOOK_CAMERA, 5),
    24: (Opcode.LYRIC, 2),
    25: (Opcode.MUSIC_PLAY, 0),
    26: (Opcode.MODE_SELECT, 2),
    27: (Opcode.EDIT_MOTION, 4),
    28: (Opcode.BAR_TIME_SET, 2),
    29: (Opcode.SHADOWHEIGHT, 2),
    30: (Opcode.EDIT_FACE, 1),
    31: (Opcode.MOVE_CAMERA, 21),
    32: (Opcode.PV_END, 0),
    33: (Opcode.SHADOWPOS, 3),
    34: (Opcode.EDIT_LYRIC, 2),
    35: (Opcode.EDIT_TARGET, 5),
    36: (Opcode.EDIT_MOUTH, 1),
    37: (Opcode.SET_CHARA, 1),
    38: (Opcode.EDIT_MOVE, 7),
    39: (Opcode.EDIT_SHADOW, 1),
    40: (Opcode.EDIT_EYELID, 1),
    41: (Opcode.EDIT_EYE, 2),
    42: (Opcode.EDIT_ITEM, 1),
    43: (Opcode.EDIT_EFFECT, 2),
    44: (Opcode.EDIT_DISP, 1),
    45: (Opcode.EDIT_HAND_ANIM, 2),
    46: (Opcode.AIM, 3),
    47: (Opcode.HAND_ITEM, 3),
    48: (Opcode.EDIT_BLUSH, 1),
    49: (Opcode.NEAR_CLIP, 2),
    50: (Opcode.CLOTH_WET, 2),
    51: (Opcode.LIGHT_ROT, 3),
    52: (Opcode.SCENE_FADE, 6),
    53: (Opcode.TONE_TRANS, 6),
    54: (Opcode.SATURATE, 1),
    55: (Opcode.FADE_MODE, 1),
    56: (Opcode.AUTO_BLINK, 2),
    57: (Opcode.PARTS_DISP, 3),
    58: (Opcode.TARGET_FLYING_TIME, 1),
    59: (Opcode.CHARA_SIZE, 2),
    60: (Opcode.CHARA_HEIGHT_ADJUST, 2),
    61: (Opcode.ITEM_ANIM, 4),
    62: (Opcode.CHARA_POS_ADJUST, 4),
    63: (Opcode.SCENE_ROT, 1),
    64: (Opcode.EDIT_MOT_SMOOTH_LEN, 2),
    65: (Opcode.PV_BRANCH_MODE, 1),
    66: (Opcode.DATA_CAMERA_START, 2),
    67: (Opcode.MOVIE_PLAY, 1),
    68: (Opcode.MOVIE_DISP, 1),
    69: (Opcode.WIND, 3),
    70: (Opcode.OSAGE_STEP, 3),
    71: (Opcode.OSAGE_MV_CCL, 3),
    72: (Opcode.CHARA_COLOR, 2),
    73: (Opcode.SE_EFFECT, 1),
    74: (Opcode.EDIT_MOVE_XYZ, 9),
    75: (Opcode.EDIT_EYELID_ANIM, 3),
    76: (Opcode.EDIT_INSTRUMENT_ITEM, 2),
    77: (Opcode.EDIT_MOTION_LOOP, 4),
    78: (Opcode.EDIT_EXPRESSION, 2),
    79: (Opcode.EDIT_EYE_ANIM, 3),
    80: (Opcode.EDIT_MOUTH_ANIM, 2),
    81: (Opcode.EDIT_CAMERA, 24),
    82: (Opcode.EDIT_MODE_SELECT, 1),
    83: (Opcode.PV_END_FADEOUT, 2),
}

_F2ND_TABLE: Dict[int, Tuple[Opcode, int]] = {
    0: (Opcode.END, 0),
    1: (Opcode.TIME, 1),
    2: (Opcode.MIKU_MOVE, 4),
    3: (Opcode.MIKU_ROT, 2),
    4: (Opcode.MIKU_DISP, 2),
    5: (Opcode.MIKU_SHADOW, 2),
    6: (Opcode.TARGET, 12),
    7: (Opcode.SET_MOTION, 4),
    8: (Opcode.SET_PLAYDATA, 2),
    9: (Opcode.EFFECT, 6),
    10: (Opcode.FADEIN_FIELD, 2),
    11: (Opcode.EFFECT_OFF, 1),
    12: (Opcode.SET_CAMERA, 6),
    13: (Opcode.DATA_CAMERA, 2),
    14: (Opcode.CHANGE_FIELD, 2),
    15: (Opcode.HIDE_FIELD, 1),
    16: (Opcode.MOVE_FIELD, 3),
    17: (Opcode.FADEOUT_FIELD, 2),
    18: (Opcode.EYE_ANIM, 3),
    19: (Opcode.MOUTH_ANIM, 5),
    20: (Opcode.HAND_ANIM, 5),
    21: (Opcode.LOOK_ANIM, 4),
    22: (Opcode.EXPRESSION, 4),
    23: (Opcode.LOOK_CAMERA, 5),
    24: (Opcode.LYRIC, 2),
    25: (Opcode.MUSIC_PLAY, 0),
    26: (Opcode.MODE_SELECT, 2),
    27: (Opcode.EDIT_MOTION, 4),
    28: (Opcode.BAR_TIME_SET, 2),
    29: (Opcode.SHADOWHEIGHT, 2),
    30: (Opcode.EDIT_FACE, 1),
    31: (Opcode.MOVE_CAMERA, 21),
    32: (Opcode.PV_END, 0),
    33: (Opcode.SHADOWPOS, 3),
    34: (Opcode.EDIT_LYRIC, 2),
    35: (Opcode.EDIT_TARGET, 5),
    36: (Opcode.EDIT_MOUTH, 1),
    37: (Opcode.SET_CHARA, 1),
    38: (Opcode.EDIT_MOVE, 7),
    39: (Opcode.EDIT_SHADOW, 1),
    40: (Opcode.EDIT_EYELID, 1),
    41: (Opcode.EDIT_EYE, 2),
    42: (Opcode.EDIT_ITEM, 1),
    43: (Opcode.EDIT_EFFECT, 2),
    44: (Opcode.EDIT_DISP, 1),
    45: (Opcode.EDIT_HAND_ANIM, 2),
    46: (Opcode.AIM, 3),
    47: (Opcode.HAND_ITEM, 3),
    48: (Opcode.EDIT_BLUSH, 1),
    49: (Opcode.NEAR_CLIP, 2),
    50: (Opcode.CLOTH_WET, 2),
    51: (Opcode.LIGHT_ROT, 3),
    52: (Opcode.SCENE_FADE, 6),
    53: (Opcode.TONE_TRANS, 6),
    54: (Opcode.SATURATE, 1),
    55: (Opcode.FADE_MODE, 1),
    56: (Opcode.AUTO_BLINK, 2),
    57: (Opcode.PARTS_DISP, 3),
    58: (Opcode.TARGET_FLYING_TIME, 1),
    59: (Opcode.CHARA_SIZE, 2),
    60: (Opcode.CHARA_HEIGHT_ADJUST, 2),
    61: (Opcode.ITEM_ANIM, 4),
    62: (Opcode.CHARA_POS_ADJUST, 4),
    63: (Opcode.SCENE_ROT, 1),
    64: (Opcode.EDIT_MOT_SMOOTH_LEN, 2),
    65: (Opcode.PV_BRANCH_MODE, 1),
    66: (Opcode.DATA_CAMERA_START, 2),
    67: (Opcode.MOVIE_PLAY, 1),
    68: (Opcode.MOVIE_DISP, 1),
    69: (Opcode.WIND, 3),
    70: (Opcode.OSAGE_STEP, 3),
    71: (Opcode.OSAGE_MV_CCL, 3),
    72: (Opcode.CHARA_COLOR, 2),
    73: (Opcode.SE_EFFECT, 1),
    74: (Opcode.EDIT_MOVE_XYZ, 9),
    75: (Opcode.EDIT_EYELID_ANIM, 3),
    76: (Opcode.EDIT_INSTRUMENT_ITEM, 2),
    77: (Opcode.EDIT_MOTION_LOOP, 4),
    78: (Opcode.EDIT_EXPRESSION, 2),
    79: (Opcode.EDIT_EYE_ANIM, 3),
    80: (Opcode.EDIT_MOUTH_ANIM, 2),
    81: (Opcode.EDIT_CAMERA, 22),
    82: (Opcode.EDIT_MODE_SELECT, 1),
    83: (Opcode.PV_END_FADEOUT, 2),
    87: (Opcode.RESERVE, 9),
    88: (Opcode.PV_AUTH_LIGHT_PRIORITY, 2),
    89: (Opcode.PV_CHARA_LIGHT, 3),
    90: (Opcode.PV_STAGE_LIGHT, 3),
    91: (Opcode.TARGET_EFFECT, 11),
    92: (Opcode.FOG, 3),
    93: (Opcode.BLOOM, 2),
    94: (Opcode.COLOR_CORRECTION, 3),
    95: (Opcode.DOF, 3),
    96: (Opcode.CHARA_ALPHA, 4),
    97: (Opcode.AUTO_CAPTURE_BEGIN, 1),
    98: (Opcode.MANUAL_CAPTURE, 1),
    99: (Opcode.TOON_EDGE, 3),
    100: (Opcode.SHIMMER, 3),
    101: (Opcode.ITEM_ALPHA, 4),
    102: (Opcode.MOVIE_CUT, 1),
    103: (Opcode.CROSSFADE, 1),
    104: (Opcode.SUBFRAMERENDER, 1),
    105: (Opcode.EVENT_JUDGE, 36),
    106: (Opcode.TOON_EDGE_2, 2),
    107: (Opcode.FOG_ENABLE, 2),
    108: (Opcode.EDIT_CAMERA_BOX, 112),
    109: (Opcode.EDIT_STAGE_PARAM, 1),
    110: (Opcode.EDIT_CHANGE_FIELD, 1),
}

_X_TABLE: Dict[int, Tuple[Opcode, int]] = {
    0: (Opcode.END, 0),
    1: (Opcode.TIME, 1),
    2: (Opcode.MIKU_MOVE, 4),
    3: (Opcode.MIKU_ROT, 2),
    4: (Opcode.MIKU_DISP, 2),
    5: (Opcode.MIKU_SHADOW, 2),
    6: (Opcode.TARGET, 12),
    7: (Opcode.SET_MOTION, 4),
    8: (Opcode.SET_PLAYDATA, 2),
    9: (Opcode.EFFECT, 6),
    10: (Opcode.FADEIN_FIELD, 2),
    11: (Opcode.EFFECT_OFF, 1),
    12: (Opcode.SET_CAMERA, 6),
    13: (Opcode.DATA_CAMERA, 2),
    14: (Opcode.CHANGE_FIELD, 2),
    15: (Opcode.HIDE_FIELD, 1),
    16: (Opcode.MOVE_FIELD, 3),
    17: (Opcode.FADEOUT_FIELD, 2),
    18: (Opcode.EYE_ANIM, 3),
    19: (Opcode.MOUTH_ANIM, 5),
    20: (Opcode.HAND_ANIM, 5),
    21: (Opcode.LOOK_ANIM, 4),
    22: (Opcode.EXPRESSION, 4),
    23: (Opcode.LOOK_CAMERA, 5),
    24: (Opcode.LYRIC, 2),
    25: (Opcode.MUSIC_PLAY, 0),
    26: (Opcode.MODE_SELECT, 2),
    27: (Opcode.EDIT_MOTION, 4),
    28: (Opcode.BAR_TIME_SET, 2),
    29: (Opcode.SHADOWHEIGHT, 2),
    30: (Opcode.EDIT_FACE, 1),
    31: (Opcode.DUMMY, 21),
    32: (Opcode.PV_END, 0),
    33: (Opcode.SHADOWPOS, 3),
    34: (Opcode.EDIT_LYRIC, 2),
    35: (Opcode.EDIT_TARGET, 5),
    36: (Opcode.EDIT_MOUTH, 1),
    37: (Opcode.SET_CHARA, 1),
    38: (Opcode.EDIT_MOVE, 7),
    39: (Opcode.EDIT_SHADOW, 1),
    40: (Opcode.EDIT_EYELID, 1),
    41: (Opcode.EDIT_EYE, 2),
    42: (Opcode.EDIT_ITEM, 1),
    43: (Opcode.EDIT_EFFECT, 2),
    44: (Opcode.EDIT_DISP, 1),
    45: (Opcode.EDIT_HAND_ANIM, 2),
    46: (Opcode.AIM, 3),
    47: (Opcode.HAND_ITEM, 3),
    48: (Opcode.EDIT_BLUSH, 1),
    49: (Opcode.NEAR_CLIP, 2),
    50: (Opcode.CLOTH_WET, 2),
    51: (Opcode.LIGHT_ROT, 3),
    52: (Opcode.SCENE_FADE, 6),
    53: (Opcode.TONE_TRANS, 6),
    54: (Opcode.SATURATE, 1),
    55: (Opcode.FADE_MODE, 1),
    56: (Opcode.AUTO_BLINK, 2),
    57: (Opcode.PARTS_DISP, 3),
    58: (Opcode.TARGET_FLYING_TIME, 1),
    59: (Opcode.CHARA_SIZE, 2),
    60: (Opcode.CHARA_HEIGHT_ADJUST, 2),
    61: (Opcode.ITEM_ANIM, 4),
    62: (Opcode.CHARA_POS_ADJUST, 4),
    63: (Opcode.SCENE_ROT, 1),
    64: (Opcode.EDIT_MOT_SMOOTH_LEN, 2),
    65: (Opcode.PV_BRANCH_MODE, 1),
    66: (Opcode.DATA_CAMERA_START, 2),
    67: (Opcode.MOVIE_PLAY, 1),
    68: (Opcode.MOVIE_DISP, 1),
    69: (Opcode.WIND, 3),
    70: (Opcode.OSAGE_STEP, 3),
    71: (Opcode.OSAGE_MV_CCL, 3),
    72: (Opcode.CHARA_COLOR, 2),
    73: (Opcode.SE_EFFECT, 1),
    74: (Opcode.CHARA_SHADOW_QUALITY, 2),
    75: (Opcode.STAGE_SHADOW_QUALITY, 2),
    76: (Opcode.COMMON_LIGHT, 2),
    77: (Opcode.TONE_MAP, 2),
    78: (Opcode.IBL_COLOR, 2),
    79: (Opcode.REFLECTION, 2),
    80: (Opcode.CHROMATIC_ABERRATION, 3),
    81: (Opcode.STAGE_SHADOW, 2),
    82: (Opcode.REFLECTION_QUALITY, 2),
    83: (Opcode.PV_END_FADEOUT, 2),
    84: (Opcode.CREDIT_TITLE, 1),
    85: (Opcode.BAR_POINT, 1),
    86: (Opcode.BEAT_POINT, 1),
    88: (Opcode.PV_AUTH_LIGHT_PRIORITY, 2),
    89: (Opcode.PV_CHARA_LIGHT, 3),
    90: (Opcode.PV_STAGE_LIGHT, 3),
    91: (Opcode.TARGET_EFFECT, 11),
    92: (Opcode.FOG, 3),
    93: (Opcode.BLOOM, 2),
    94: (Opcode.COLOR_CORRECTION, 3),
    95: (Opcode.DOF, 3),
    96: (Opcode.CHARA_ALPHA, 4),
    97: (Opcode.AUTO_CAPTURE_BEGIN, 1),
    98: (Opcode.MANUAL_CAPTURE, 1),
    99: (Opcode.TOON_EDGE, 3),
    100: (Opcode.SHIMMER, 3),
    101: (Opcode.ITEM_ALPHA, 4),
    102: (Opcode.MOVIE_CUT, 1),
    103: (Opcode.EDIT_CAMERA_BOX, 112),
    104: (Opcode.EDIT_STAGE_PARAM, 1),
    105: (Opcode.EDIT_CHANGE_FIELD, 1),
    106: (Opcode.MIKUDAYO_ADJUST, 7),
    107: (Opcode.LYRIC_2, 2),
    108: (Opcode.LYRIC_READ, 2),
    109: (Opcode.LYRIC_READ_2, 2),
    110: (Opcode.ANNOTATION, 5),
    111: (Opcode.STAGE_EFFECT, 2),
    112: (Opcode.SONG_EFFECT, 3),
    113: (Opcode.SONG_EFFECT_ATTACH, 3),
    114: (Opcode.LIGHT_AUTH, 2),
    115: (Opcode.FADE, 2),
    116: (Opcode.SET_STAGE_EFFECT_ENV, 2),
    117: (Opcode.RESERVE, 2),
    118: (Opcode.COMMON_EFFECT_AET_FRONT, 2),
    119: (Opcode.COMMON_EFFECT_AET_FRONT_LOW, 2),
    120: (Opcode.COMMON_EFFECT_PARTICLE, 2),
    121: (Opcode.SONG_EFFECT_ALPHA_SORT, 3),
    122: (Opcode.LOOK_CAMERA_FACE_LIMIT, 5),
    123: (Opcode.ITEM_LIGHT, 3),
    124: (Opcode.CHARA_EFFECT, 3),
    125: (Opcode.MARKER, 2),
    126: (Opcode.CHARA_EFFECT_CHARA_LIGHT, 3),
    128: (Opcode.ENABLE_FXAA, 2),
    129: (Opcode.ENABLE_TEMPORAL_AA, 2),
    130: (Opcode.ENABLE_REFLECTION, 2),
    131: (Opcode.BANK_BRANCH, 2),
    132: (Opcode.BANK_END, 2),
    141: (Opcode.VR_LIVE_MOVIE, 2),
    142: (Opcode.VR_CHEER, 2),
    143: (Opcode.VR_CHARA_PSMOVE, 2),
    144: (Opcode.VR_MOVE_PATH, 2),
    145: (Opcode.VR_SET_BASE, 2),
    146: (Opcode.VR_TECH_DEMO_EFFECT, 2),
    147: (Opcode.VR_TRANSFORM, 2),
    148: (Opcode.GAZE, 2),
    149: (Opcode.TECH_DEMO_GESUTRE, 2),
    150: (Opcode.VR_CHEMICAL_LIGHT_COLOR, 2),
    151: (Opcode.VR_LIVE_MOB, 5),
    152: (Opcode.VR_LIVE_HAIR_OSAGE, 9),
    153: (Opcode.VR_LIVE_LOOK_CAMERA, 9),
    154: (Opcode.VR_LIVE_CHEER, 5),
    155: (Opcode.VR_LIVE_GESTURE, 3),
    156: (Opcode.VR_LIVE_CLONE, 7),
    157: (Opcode.VR_LOOP_EFFECT, 7),
    158: (Opcode.VR_LIVE_ONESHOT_EFFECT, 6),
    159: (Opcode.VR_LIVE_PRESENT, 9),
    160: (Opcode.VR_LIVE_TRANSFORM, 5),
    161: (Opcode.VR_LIVE_FLY, 5),
    162: (Opcode.VR_LIVE_CHARA_VOICE, 2),
}

_FUTURE_TONE_TABLE: Dict[int, Tuple[Opcode, int]] = {
    0: (Opcode.END, 0),
    1: (Opcode.TIME, 1),
    2: (Opcode.MIKU_MOVE, 4),
    3: (Opcode.MIKU_ROT, 2),
    4: (Opcode.MIKU_DISP, 2),
    5: (Opcode.MIKU_SHADOW, 2),
    6: (Opcode.TARGET, 7),
    7: (Opcode.SET_MOTION, 4),
    8: (Opcode.SET_PLAYDATA, 2),
    9: (Opcode.EFFECT, 6),
    10: (Opcode.FADEIN_FIELD, 2),
    11: (Opcode.EFFECT_OFF, 1),
    12: (Opcode.SET_CAMERA, 6),
    13: (Opcode.DATA_CAMERA, 2),
    14: (Opcode.CHANGE_FIELD, 1),
    15: (Opcode.HIDE_FIELD, 1),
    16: (Opcode.MOVE_FIELD, 3),
    17: (Opcode.FADEOUT_FIELD, 2),
    18: (Opcode.EYE_ANIM, 3),
    19: (Opcode.MOUTH_ANIM, 5),
    20: (Opcode.HAND_ANIM, 5),
    21: (Opcode.LOOK_ANIM, 4),
    22: (Opcode.EXPRESSION, 4),
    23: (Opcode.LOOK_CAMERA, 5),
    24: (Opcode.LYRIC, 2),
    25: (Opcode.MUSIC_PLAY, 0),
    26: (Opcode.MODE_SELECT, 2),
    27: (Opcode.EDIT_MOTION, 4),
    28: (Opcode.BAR_TIME_SET, 2),
    29: (Opcode.SHADOWHEIGHT, 2),
    30: (Opcode.EDIT_FACE, 1),
    31: (Opcode.MOVE_CAMERA, 21),
    32: (Opcode.PV_END, 0),
    33: (Opcode.SHADOWPOS, 3),
    34: (Opcode.EDIT_LYRIC, 2),
    35: (Opcode.EDIT_TARGET, 5),
    36: (Opcode.EDIT_MOUTH, 1),
    37: (Opcode.SET_CHARA, 1),
    38: (Opcode.EDIT_MOVE, 7),
    39: (Opcode.EDIT_SHADOW, 1),
    40: (Opcode.EDIT_EYELID, 1),
    41: (Opcode.EDIT_EYE, 2),
    42: (Opcode.EDIT_ITEM, 1),
    43: (Opcode.EDIT_EFFECT, 2),
    44: (Opcode.EDIT_DISP, 1),
    45: (Opcode.EDIT_HAND_ANIM, 2),
    46: (Opcode.AIM, 3),
    47: (Opcode.HAND_ITEM, 3),
    48: (Opcode.EDIT_BLUSH, 1),
    49: (Opcode.NEAR_CLIP, 2),
    50: (Opcode.CLOTH_WET, 2),
    51: (Opcode.LIGHT_ROT, 3),
    52: (Opcode.SCENE_FADE, 6),
    53: (Opcode.TONE_TRANS, 6),
    54: (Opcode.SATURATE, 1),
    55: (Opcode.FADE_MODE, 1),
    56: (Opcode.AUTO_BLINK, 2),
    57: (Opcode.PARTS_DISP, 3),
    58: (Opcode.TARGET_FLYING_TIME, 1),
    59: (Opcode.CHARA_SIZE, 2),
    60: (Opcode.CHARA_HEIGHT_ADJUST, 2),
    61: (Opcode.ITEM_ANIM, 4),
    62: (Opcode.CHARA_POS_ADJUST, 4),
    63: (Opcode.SCENE_ROT, 1),
    64: (Opcode.EDIT_MOT_SMOOTH_LEN, 2),
    65: (Opcode.PV_BRANCH_MODE, 1),
    66: (Opcode.DATA_CAMERA_START, 2),
    67: (Opcode.MOVIE_PLAY, 1),
    68: (Opcode.MOVIE_DISP, 1),
    69: (Opcode.WIND, 3),
    70: (Opcode.OSAGE_STEP, 3),
    71: (Opcode.OSAGE_MV_CCL, 3),
    72: (Opcode.CHARA_COLOR, 2),
    73: (Opcode.SE_EFFECT, 1),
    74: (Opcode.EDIT_MOVE_XYZ, 9),
    75: (Opcode.EDIT_EYELID_ANIM, 3),
    76: (Opcode.EDIT_INSTRUMENT_ITEM, 2),
    77: (Opcode.EDIT_MOTION_LOOP, 4),
    78: (Opcode.EDIT_EXPRESSION, 2),
    79: (Opcode.EDIT_EYE_ANIM, 3),
    80: (Opcode.EDIT_MOUTH_ANIM, 2),
    81: (Opcode.EDIT_CAMERA, 24),
    82: (Opcode.EDIT_MODE_SELECT, 1),
    83: (Opcode.PV_END_FADEOUT, 2),
    84: (Opcode.TARGET_FLAG, 1),
    85: (Opcode.ITEM_ANIM_ATTACH, 3),
    86: (Opcode.SHADOW_RANGE, 1),
    87: (Opcode.HAND_SCALE, 3),
    88: (Opcode.LIGHT_POS, 4),
    89: (Opcode.FACE_TYPE, 1),
    90: (Opcode.SHADOW_CAST, 2),
    91: (Opcode.EDIT_MOTION_F, 6),
    92: (Opcode.FOG, 3),
    93: (Opcode.BLOOM, 2),
    94: (Opcode.COLOR_COLLE, 3),
    95: (Opcode.DOF, 3),
    96: (Opcode.CHARA_ALPHA, 4),
    97: (Opcode.AOTO_CAP, 1),
    98: (Opcode.MAN_CAP, 1),
    99: (Opcode.TOON, 3),
    100: (Opcode.SHIMMER, 3),
    101: (Opcode.ITEM_ALPHA, 4),
    102: (Opcode.MOVIE_CUT_CHG, 1),
    103: (Opcode.CHARA_LIGHT, 3),
    104: (Opcode.STAGE_LIGHT, 3),
    105: (Opcode.AGEAGE_CTRL, 8),
    106: (Opcode.PSE, 2),
}

_OPCODE_TABLES: Dict[Game, Dict[int, Tuple[Opcode, int]]] = {
    Game.F: _F_TABLE,
    Game.F2ND: _F2ND_TABLE,
    Game.X: _X_TABLE,
    Game.FUTURE_TONE: _FUTURE_TONE_TABLE,
}


def _build_name_index() -> Dict[Game, Dict[str, OpcodeMeta]]:
    name_index: Dict[Game, Dict[str, OpcodeMeta]] = {}
    for game, table in _OPCODE_TABLES.items():
        by_name: Dict[str, OpcodeMeta] = {}
        for opcode_id in sorted(table.keys()):
            opcode, arity = table[opcode_id]
            # First id wins if a table ever lists the same name twice.
            by_name.setdefault(opcode.name, OpcodeMeta(opcode_id=opcode_id, opcode=opcode, arity=arity))
        name_index[game] = by_name
    return name_index


_NAME_INDEX: Dict[Game, Dict[str, OpcodeMeta]] = _build_name_index()

SHARED_OPCODE_IDS: Dict[Opcode, int] = {
    Opcode.END: 0,
    Opcode.TIME: 1,
    Opcode.LYRIC: 24,
    Opcode.MODE_SELECT: 26,
}


def supported_games() -> List[Game]:
    return [game for game in Game if game in _OPCODE_TABLES]


def _table_for(game: Game) -> Dict[int, Tuple[Opcode, int]]:
    table = _OPCODE_TABLES.get(game)
    if table is None:
        raise UnsupportedGameError(game)
    return table


def resolve(game: Game, opcode_id: int) -> OpcodeMeta:
    table = _table_for(game)
    entry = table.get(int(opcode_id))
    if entry is None:
        raise UnknownOpcodeError(opcode_id)
    opcode, arity = entry
    return OpcodeMeta(opcode_id=int(opcode_id), opcode=opcode, arity=arity)


def resolve_by_name(game: Game, name: str) -> OpcodeMeta:
    _table_for(game)
    meta = _NAME_INDEX[game].get(str(name))
    if meta is None:
        raise UnknownOpcodeNameError(name)
    return meta


def shared_meta(opcode: Opcode) -> OpcodeMeta:
    """Meta for an opcode whose id and arity are the same in every supported game.

    Used for commands the merger synthesizes (TIME, LYRIC, MODE_SELECT, END).
    """
    opcode_id = SHARED_OPCODE_IDS.get(opcode)
    if opcode_id is None:
        raise ValueError(f"{opcode.name} does not have a game independent id")
    return resolve(Game.FUTURE_TONE, opcode_id)


def _run_unit_tests() -> None:
    assert resolve(Game.FUTURE_TONE, 6) == OpcodeMeta(opcode_id=6, opcode=Opcode.TARGET, arity=7)
    assert resolve(Game.F, 6).arity == 11
    assert resolve(Game.F2ND, 6).arity == 12

    # Highest id of each table must be reachable by name too.
    for game, table in _OPCODE_TABLES.items():
        highest_id = max(table.keys())
        highest_opcode, _ = table[highest_id]
        assert resolve_by_name(game, highest_opcode.name).opcode_id == highest_id

    for opcode, opcode_id in SHARED_OPCODE_IDS.items():
        for game in supported_games():
            assert resolve(game, opcode_id).opcode is opcode
        assert shared_meta(opcode).opcode_id == opcode_id

    try:
        resolve(Game.FUTURE_TONE, 9999)
    except UnknownOpcodeError as exc:
        assert exc.opcode_id == 9999
    else:
        raise AssertionError("Expected UnknownOpcodeError")

    try:
        resolve_by_name(Game.ARCADE, "TIME")
    except UnsupportedGameError:
        pass
    else:
        raise AssertionError("Expected UnsupportedGameError for Arcade")


if __name__ == "__main__":
    _run_unit_tests()
    print("opcode_table.py: ok")
