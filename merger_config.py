"""
merger_config.py

Typed settings for the DSC merger: the values the prompt, the window and the CLI start from.

Rules
- At most one UTF-8 JSON file is read. Nothing is written or created.
- No file is fine; every field has a built-in default.
- DSC_MERGER_* environment variables win over the file.
- Everything ends up validated by pydantic; any failure surfaces as ValueError (or OSError for unreadable files).

Lookup order
- DSC_MERGER_CONFIG_PATH, when set (the file must then exist)
- ./dsc_merger_config.json
- <user config dir>/DscMerger/DscMerger/dsc_merger_config.json
- <user config dir>/DscMerger/DscMerger/config.json

Sample dsc_merger_config.json
{
  "defaults": {"game": "FT", "output": "output.dsc", "pv_id": 0,
               "english_lyrics": false, "max_lyric_length": 75, "verbose": false},
  "window": {"width": 900, "height": 720}
}
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

from game_variant import Game, parse_game


CONFIG_PATH_ENV = "DSC_MERGER_CONFIG_PATH"
CONFIG_FILE_NAME = "dsc_merger_config.json"


class MergeDefaultsConfig(BaseModel):
    game: str = Field(default="FT", description="Target game: F, F2nd, X, FT or Arcade.")
    output: str = Field(default="output.dsc", description="Output DSC path.")
    pv_id: int = Field(default=0, ge=0, le=65535, description="PV id used in lyric key lines.")
    english_lyrics: bool = Field(default=False, description="Write lyric_en keys instead of lyric.")
    max_lyric_length: int = Field(default=75, ge=1, le=65535, description="Recommended lyric line byte length.")
    verbose: bool = Field(default=False, description="Print progress messages.")

    @field_validator("game")
    @classmethod
    def validate_game(cls, value: str) -> str:
        parse_game(value)
        return value.strip()

    @field_validator("output")
    @classmethod
    def validate_output(cls, value: str) -> str:
        trimmed = (value or "").strip()
        if not trimmed:
            raise ValueError("output must not be empty")
        return trimmed

    @property
    def game_variant(self) -> Game:
        return parse_game(self.game)


class WindowConfig(BaseModel):
    width: int = Field(default=900, ge=320, le=7680, description="Initial merger window width.")
    height: int = Field(default=720, ge=240, le=4320, description="Initial merger window height.")


class MergerConfig(BaseModel):
    defaults: MergeDefaultsConfig = Field(default_factory=MergeDefaultsConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)


def _default_config_candidates() -> List[Path]:
    user_directory = Path(user_config_dir("DscMerger", "DscMerger"))
    return [
        Path.cwd() / CONFIG_FILE_NAME,
        user_directory / CONFIG_FILE_NAME,
        user_directory / "config.json",
    ]


def _resolve_config_path() -> Optional[Path]:
    forced = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if forced:
        return Path(forced)
    return next((path for path in _default_config_candidates() if path.is_file()), None)


def _read_json_file_utf8(config_path: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as exception:
        raise ValueError(f"{config_path}: invalid JSON ({exception})") from exception
    except OSError as exception:
        raise OSError(f"{config_path}: cannot read config ({exception})") from exception

    if not isinstance(payload, dict):
        raise ValueError(f"{config_path}: top level must be an object")
    return payload


########################
# Environment overrides
########################

def _parse_env_bool(text: str) -> Optional[bool]:
    lowered = text.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None


def _parse_env_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


# (variable, section, key, parser). A parser returning None leaves the value alone.
_ENVIRONMENT_OVERRIDES: Tuple[Tuple[str, str, str, Callable[[str], Any]], ...] = (
    ("DSC_MERGER_GAME", "defaults", "game", str),
    ("DSC_MERGER_OUTPUT", "defaults", "output", str),
    ("DSC_MERGER_PV_ID", "defaults", "pv_id", _parse_env_int),
    ("DSC_MERGER_ENGLISH_LYRICS", "defaults", "english_lyrics", _parse_env_bool),
    ("DSC_MERGER_MAX_LYRIC_LENGTH", "defaults", "max_lyric_length", _parse_env_int),
    ("DSC_MERGER_VERBOSE", "defaults", "verbose", _parse_env_bool),
    ("DSC_MERGER_WINDOW_WIDTH", "window", "width", _parse_env_int),
    ("DSC_MERGER_WINDOW_HEIGHT", "window", "height", _parse_env_int),
)


def _apply_environment_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(config_dict)

    for env_name, section_name, key_name, parser in _ENVIRONMENT_OVERRIDES:
        raw_value = os.environ.get(env_name, "").strip()
        if not raw_value:
            continue
        parsed_value = parser(raw_value)
        if parsed_value is None:
            continue

        section = merged.get(section_name)
        section = dict(section) if isinstance(section, dict) else {}
        section[key_name] = parsed_value
        merged[section_name] = section

    return merged


def load_config(config_path: Optional[Path] = None) -> Tuple[MergerConfig, Optional[Path]]:
    """Return the validated config and the file it came from (None when built-in defaults were used)."""
    source_path = Path(config_path) if config_path is not None else _resolve_config_path()
    raw_config = {} if source_path is None else _read_json_file_utf8(source_path)

    try:
        config = MergerConfig.model_validate(_apply_environment_overrides(raw_config))
    except ValidationError as exception:
        origin = "built-in defaults" if source_path is None else str(source_path)
        raise ValueError(f"Config validation failed for {origin}:\n{exception}") from exception

    return config, source_path


@lru_cache(maxsize=1)
def get_config() -> Tuple[MergerConfig, Optional[Path]]:
    return load_config()


def main() -> int:
    """Print the effective config (or the load error) as JSON."""
    try:
        config, source_path = load_config()
    except (OSError, ValueError) as exception:
        report: Dict[str, Any] = {"ok": False, "error": str(exception)}
        exit_code = 2
    else:
        report = {"ok": True, "config_path": None if source_path is None else str(source_path), "config": config.model_dump()}
        exit_code = 0

    print(json.dumps(report, ensure_ascii=False, indent=2))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
