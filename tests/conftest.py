from __future__ import annotations

import struct
from pathlib import Path
from typing import Callable, List, Sequence

import pytest

import merger_config


FUTURE_TONE_MAGIC = 335874337
F_MAGIC = 302121504
PVSC_MAGIC = 1129535056


def pack_words(words: Sequence[int]) -> bytes:
    return struct.pack(f"<{len(words)}i", *words)


def future_tone_bytes(body_words: Sequence[int]) -> bytes:
    return pack_words([FUTURE_TONE_MAGIC, *body_words])


def pvsc_bytes(body_words: Sequence[int]) -> bytes:
    # 72 byte header: magic plus 17 zero words.
    return pack_words([PVSC_MAGIC] + [0] * 17 + list(body_words))


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    import os

    for env_name in list(os.environ):
        if env_name.startswith("DSC_MERGER_"):
            monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setattr(merger_config, "_default_config_candidates", lambda: [tmp_path / "missing_config.json"])
    merger_config.get_config.cache_clear()


@pytest.fixture
def write_future_tone_dsc(tmp_path: Path) -> Callable[[str, List[int]], Path]:
    def _write(file_name: str, body_words: List[int]) -> Path:
        dsc_path = tmp_path / file_name
        dsc_path.write_bytes(future_tone_bytes(body_words))
        return dsc_path

    return _write
