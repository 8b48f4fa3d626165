# -*- coding: utf-8 -*-
########################
# merge_application.py
########################
# Purpose:
# - One merge run: load every input, absorb it into a DscMerger, optionally add Challenge Time,
#   then dump and write the result for the selected game.
# - Shared by the command line, the interactive prompt and the Qt window.
#
########################
# Key Logic:
# - Inputs are TimelineSource values tagged with an InputKind. Each kind has one loader and all of them
#   produce a Timeline, so the merger never sees where commands came from.
# - Load order is all DSC inputs, then plaintext inputs, then subtitle inputs, each in the order given.
#   That order decides which duplicate survives and the order of commands within a tick.
# - Remove-targets is selected per chart path. Subtitle timelines never carry target commands.
# - The first failing input aborts the run. Nothing is written in that case.
#
# Design notes:
# - Progress goes through the MergeLogger only. This module never prints and never exits.
# - run() returns a MergeResult. Callers print its dump() when the request asks for one.
#
########################
# Interfaces:
# Public enums:
# - class InputKind(enum.Enum): DSC | PLAINTEXT | SUBTITLE
#
# Public dataclasses:
# - TimelineSource(kind: InputKind, path: Path, remove_targets: bool = False)
# - MergeRequest(game, dsc_inputs, plaintext_inputs, subtitle_inputs, output, ...)
#   - MergeRequest.sources() -> list[TimelineSource]
# - MergeResult(commands: tuple[Command, ...], encoded: bytes, output: Optional[Path])
#
# Public classes:
# - class MergeApplication(request: MergeRequest, logger: MergeLogger)
#   - load_source(source: TimelineSource) -> Timeline
#   - run(*, write_output: bool = True) -> MergeResult
#
########################

from __future__ import annotations

from dataclasses import dataclass, field
import enum
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Tuple

import dsc_codec
from dsc_merger import DscMerger
from dsc_models import ChallengeTime, Command, Timeline
from game_variant import Game
from lyric_compiler import DEFAULT_MAX_LYRIC_LENGTH, LyricSettings, compile_lyric_timeline
from merge_logger import MergeLogger
from merger_errors import NoInputFilesError
from subtitle_store import load_subtitle_file


DEFAULT_OUTPUT_PATH = Path("output.dsc")


class InputKind(enum.Enum):
    DSC = "dsc"
    PLAINTEXT = "plaintext"
    SUBTITLE = "subtitle"


@dataclass(frozen=True)
class TimelineSource:
    kind: InputKind
    path: Path
    remove_targets: bool = False


def _path_key(path: Path) -> str:
    return str(Path(path))


@dataclass(frozen=True)
class MergeRequest:
    game: Game
    dsc_inputs: Tuple[Path, ...] = ()
    plaintext_inputs: Tuple[Path, ...] = ()
    subtitle_inputs: Tuple[Path, ...] = ()
    remove_targets_inputs: FrozenSet[str] = field(default_factory=frozenset)
    output: Path = DEFAULT_OUTPUT_PATH
    pv_id: int = 0
    english_lyrics: bool = False
    max_lyric_length: int = DEFAULT_MAX_LYRIC_LENGTH
    dump: bool = False
    verbose: bool = False
    challenge_time: Optional[ChallengeTime] = None

    @classmethod
    def build(
        cls,
        *,
        game: Game,
        dsc_inputs: Sequence[Path] = (),
        plaintext_inputs: Sequence[Path] = (),
        subtitle_inputs: Sequence[Path] = (),
        remove_targets_inputs: Sequence[Path] = (),
        output: Path = DEFAULT_OUTPUT_PATH,
        pv_id: int = 0,
        english_lyrics: bool = False,
        max_lyric_length: int = DEFAULT_MAX_LYRIC_LENGTH,
        dump: bool = False,
        verbose: bool = False,
        challenge_time: Optional[ChallengeTime] = None,
    ) -> "MergeRequest":
        return cls(
            game=game,
            dsc_inputs=tuple(Path(path) for path in dsc_inputs),
            plaintext_inputs=tuple(Path(path) for path in plaintext_inputs),
            subtitle_inputs=tuple(Path(path) for path in subtitle_inputs),
            remove_targets_inputs=frozenset(_path_key(Path(path)) for path in remove_targets_inputs),
            output=Path(output),
            pv_id=int(pv_id),
            english_lyrics=bool(english_lyrics),
            max_lyric_length=int(max_lyric_length),
            dump=bool(dump),
            verbose=bool(verbose),
            challenge_time=challenge_time,
        )

    @property
    def has_inputs(self) -> bool:
        return bool(self.dsc_inputs or self.plaintext_inputs or self.subtitle_inputs)

    def removes_targets(self, path: Path) -> bool:
        return _path_key(path) in self.remove_targets_inputs

    def lyric_settings(self) -> LyricSettings:
        return LyricSettings(
            pv_id=self.pv_id,
            english=self.english_lyrics,
            max_line_length=self.max_lyric_length,
        )

    def sources(self) -> List[TimelineSource]:
        sources: List[TimelineSource] = []
        for path in self.dsc_inputs:
            sources.append(TimelineSource(InputKind.DSC, path, self.removes_targets(path)))
        for path in self.plaintext_inputs:
            sources.append(TimelineSource(InputKind.PLAINTEXT, path, self.removes_targets(path)))
        for path in self.subtitle_inputs:
            sources.append(TimelineSource(InputKind.SUBTITLE, path, False))
        return sources


@dataclass(frozen=True)
class MergeResult:
    commands: Tuple[Command, ...]
    encoded: bytes
    output: Optional[Path]

    def dump(self) -> str:
        return dsc_codec.dump(self.commands)


_LOADING_MESSAGES = {
    InputKind.DSC: 'Loading DSC file: "{path}"...',
    InputKind.PLAINTEXT: 'Loading plaintext/dumped DSC file: "{path}"...',
    InputKind.SUBTITLE: 'Loading subtitle file: "{path}"...',
}


class MergeApplication:
    def __init__(self, request: MergeRequest, logger: MergeLogger) -> None:
        self._request = request
        self._logger = logger

    @property
    def request(self) -> MergeRequest:
        return self._request

    def load_source(self, source: TimelineSource) -> Timeline:
        game = self._request.game

        if source.kind is InputKind.DSC:
            return dsc_codec.load_dsc_file(game, source.path, remove_targets=source.remove_targets)

        if source.kind is InputKind.PLAINTEXT:
            return dsc_codec.load_plaintext_file(game, source.path, remove_targets=source.remove_targets)

        entries = load_subtitle_file(source.path)
        return compile_lyric_timeline(
            entries,
            self._request.lyric_settings(),
            self._logger,
            source_path=source.path,
        )

    def run(self, *, write_output: bool = True) -> MergeResult:
        request = self._request
        if not request.has_inputs:
            raise NoInputFilesError()

        self._logger.log(f"Merging charts for target game: Project DIVA {request.game.display_name}.")

        merger = DscMerger()
        for source in request.sources():
            self._logger.log(_LOADING_MESSAGES[source.kind].format(path=source.path))
            merger.add_timeline(self.load_source(source))

        self._logger.log("Merging DSC commands...")
        if request.challenge_time is not None:
            merger.add_challenge_time(request.challenge_time)

        commands = tuple(merger.flatten())

        if not write_output:
            return MergeResult(commands=commands, encoded=dsc_codec.encode(request.game, commands), output=None)

        self._logger.log(f'Writing merged DSC to file: "{request.output}"...')
        encoded = dsc_codec.write_dsc_file(request.game, request.output, commands)
        return MergeResult(commands=commands, encoded=encoded, output=request.output)
