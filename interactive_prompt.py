"""
interactive_prompt.py

Terminal question flow used when dscmerge.py is started without arguments.

Flow
- Game, then input files (any number of DSC, plaintext and subtitle paths), then which charts lose their targets.
- Lyric settings are only asked for when at least one subtitle file was added.
- Challenge Time, verbosity and output path come last.
- Every prompt offers 'a' to abort. Aborting prints "Aborted." and returns 0.

Input and output functions are injectable so the flow can be driven from tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from dsc_models import ChallengeTime, ChallengeTimeDifficulty
from game_variant import GAME_MAP, Game
from merge_application import MergeApplication, MergeRequest
from merge_logger import ConsoleLogger
from merger_config import MergerConfig
from merger_errors import MergerError


class PromptAborted(Exception):
    pass


@dataclass
class _InputFiles:
    dsc: List[str] = field(default_factory=list)
    plaintext: List[str] = field(default_factory=list)
    subtitle: List[str] = field(default_factory=list)


_FILE_ACTIONS = ("Add DSC file", "Add plaintext file", "Add subtitle file", "Continue")


class InteractivePrompt:
    def __init__(
        self,
        *,
        config: Optional[MergerConfig] = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
        wait_for_exit: bool = True,
    ) -> None:
        self._config = config if config is not None else MergerConfig()
        self._input = input_func
        self._output = output_func
        self._wait_for_exit = bool(wait_for_exit)

    def _ask(self, message: str, default: Optional[str] = None) -> str:
        suffix = f" [{default}]" if default is not None else ""
        answer = self._input(f"{message}{suffix} ").strip()
        if answer.lower() == "a":
            raise PromptAborted()
        if not answer and default is not None:
            return default
        return answer

    def _select(self, message: str, choices: Sequence[str]) -> int:
        while True:
            self._output(message)
            for index, choice in enumerate(choices, start=1):
                self._output(f"  {index}) {choice}")
            self._output("  a) Abort")
            answer = self._ask("Choice:")
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return int(answer) - 1
            self._output("Please enter one of the listed numbers.")

    def _confirm(self, message: str, default: bool = False) -> bool:
        default_text = "y" if default else "n"
        while True:
            answer = self._ask(f"{message} (y/n)", default_text).lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self._output("Please answer y or n.")

    def _ask_int(self, message: str, default: int, *, error_text: str) -> int:
        answer = self._ask(message, str(default))
        try:
            value = int(answer)
        except ValueError:
            raise ValueError(error_text) from None
        if value < 0 or value > 65535:
            raise ValueError(error_text)
        return value

    def prompt_game(self) -> Game:
        index = self._select(
            "Select the game the chart is designed for.",
            [name for name, _game in GAME_MAP],
        )
        return GAME_MAP[index][1]

    def prompt_input_files(self) -> _InputFiles:
        input_files = _InputFiles()
        targets = (input_files.dsc, input_files.plaintext, input_files.subtitle)

        while True:
            action_index = self._select("Select an action:", _FILE_ACTIONS)
            if action_index == len(_FILE_ACTIONS) - 1:
                return input_files

            path_text = self._ask("Enter the path to the file:")
            if path_text:
                targets[action_index].append(path_text)

    def prompt_remove_targets_files(self, chart_inputs: Sequence[str]) -> List[str]:
        if not chart_inputs:
            return []

        self._output("If you want to remove targets from certain charts, select them here.")
        for index, path_text in enumerate(chart_inputs, start=1):
            self._output(f"  {index}) {path_text}")
        answer = self._ask("Numbers separated by commas (empty for none):", "")

        selected: List[str] = []
        for token in answer.replace(" ", "").split(","):
            if not token:
                continue
            if not token.isdigit() or not 1 <= int(token) <= len(chart_inputs):
                raise ValueError(f"Invalid chart number: {token}")
            path_text = chart_inputs[int(token) - 1]
            if path_text not in selected:
                selected.append(path_text)
        return selected

    def prompt_challenge_time(self) -> Optional[ChallengeTime]:
        if not self._confirm("Does this chart have Challenge Time?", False):
            return None

        difficulty_index = self._select("Select the difficulty of the chart.", ["Easy", "Normal"])
        difficulty = list(ChallengeTimeDifficulty)[difficulty_index]
        start_text = self._ask("Enter the start time of the Challenge Time section (MM:SS.mmm):", "00:00.000")
        end_text = self._ask("Enter the end time of the Challenge Time section (MM:SS.mmm):", "00:00.000")
        return ChallengeTime.build(start_text, end_text, difficulty)

    def build_request(self) -> MergeRequest:
        defaults = self._config.defaults

        game = self.prompt_game()
        input_files = self.prompt_input_files()
        remove_targets_files = self.prompt_remove_targets_files(input_files.dsc + input_files.plaintext)

        pv_id = int(defaults.pv_id)
        english_lyrics = bool(defaults.english_lyrics)
        max_lyric_length = int(defaults.max_lyric_length)

        if input_files.subtitle:
            self._output(
                "It looks like you're adding lyrics. To make things easier, tell me a few things about your song!"
            )
            pv_id = self._ask_int("Enter the ID of your PV:", pv_id, error_text="Invalid PV ID.")
            english_lyrics = self._confirm("Do the subtitles contain English lyrics (lyric_en)?", english_lyrics)
            max_lyric_length = self._ask_int(
                "What is the maximum allowed length for a lyric line?",
                max_lyric_length,
                error_text="Invalid lyric length.",
            )

        challenge_time = self.prompt_challenge_time()
        verbose = self._confirm("Do you want to see verbose output?", bool(defaults.verbose))
        output_text = self._ask("Finally, enter the path to the output file:", defaults.output)

        return MergeRequest.build(
            game=game,
            dsc_inputs=[Path(path) for path in input_files.dsc],
            plaintext_inputs=[Path(path) for path in input_files.plaintext],
            subtitle_inputs=[Path(path) for path in input_files.subtitle],
            remove_targets_inputs=[Path(path) for path in remove_targets_files],
            output=Path(output_text),
            pv_id=pv_id,
            english_lyrics=english_lyrics,
            max_lyric_length=max_lyric_length,
            verbose=verbose,
            challenge_time=challenge_time,
        )

    def _press_enter_to_exit(self) -> None:
        if not self._wait_for_exit:
            return
        self._output("Press ENTER to exit...")
        try:
            self._input("")
        except EOFError:
            return

    def run(self) -> int:
        try:
            request = self.build_request()
        except (PromptAborted, EOFError, KeyboardInterrupt):
            self._output("Aborted.")
            return 0
        except (MergerError, ValueError) as exception:
            self._output(f"Error: {exception}")
            return 1

        application = MergeApplication(request, ConsoleLogger(verbose=request.verbose))
        exit_code = 0
        try:
            application.run()
            self._output("Done!")
        except MergerError as exception:
            self._output(f"Error: {exception}")
            exit_code = 1

        self._press_enter_to_exit()
        return exit_code
