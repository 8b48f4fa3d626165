"""
dscmerge.py

Entrypoint for the DSC merger. Merges binary charts, plaintext dumps and lyric subtitles into one DSC file.

Modes
- Command line: any arguments other than --gui run one merge and exit.
- Interactive: running with no arguments asks for every setting on the terminal.
- Window: --gui opens the Qt merger window.

Exit codes
- 0 on success, 1 when the merge fails, 2 for invalid command line values or config.

Examples
- python dscmerge.py -g FT -i base.dsc -i effects.dsc -o merged.dsc
- python dscmerge.py -g X -i chart.dsc --remove-targets chart.dsc -s lyrics.srt --pv-id 812 -v
- python dscmerge.py -g FT -p dumped.txt --challenge-difficulty easy --challenge-start 01:02.000 --challenge-end 01:30.500
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dsc_models import ChallengeTime
from game_variant import Game, parse_game
from merge_application import MergeApplication, MergeRequest
from merge_logger import ConsoleLogger
from merger_config import MergerConfig, get_config, load_config
from merger_errors import MergerError


def _build_argument_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(
        prog="dscmerge",
        description="Merge Project DIVA DSC charts, plaintext dumps and lyric subtitles into one DSC file.",
    )
    argument_parser.add_argument("-i", "--input", action="append", default=[], metavar="PATH", help="Binary DSC input.")
    argument_parser.add_argument(
        "-p", "--plaintext-input", action="append", default=[], metavar="PATH", help="Plaintext or dumped DSC input."
    )
    argument_parser.add_argument(
        "-s", "--subtitle-input", action="append", default=[], metavar="PATH", help="Lyric subtitle input (.srt, .ass)."
    )
    argument_parser.add_argument("-o", "--output", default=None, metavar="PATH", help="Output DSC path.")
    argument_parser.add_argument("-g", "--game", default=None, help="Target game: F, F2nd, X, FT or Arcade.")
    argument_parser.add_argument(
        "--remove-targets",
        action="append",
        default=[],
        metavar="PATH",
        help="Drop target commands from this DSC or plaintext input. Repeatable.",
    )
    argument_parser.add_argument("--pv-id", type=int, default=None, help="PV id used in lyric key lines.")
    argument_parser.add_argument(
        "--english-lyrics", action="store_true", default=None, help="Write lyric_en keys instead of lyric."
    )
    argument_parser.add_argument(
        "--max-lyric-length", type=int, default=None, help="Recommended lyric line byte length (default 75)."
    )
    argument_parser.add_argument("--challenge-difficulty", default=None, help="Challenge Time difficulty: easy or normal.")
    argument_parser.add_argument("--challenge-start", default=None, metavar="MM:SS.mmm", help="Challenge Time start.")
    argument_parser.add_argument("--challenge-end", default=None, metavar="MM:SS.mmm", help="Challenge Time end.")
    argument_parser.add_argument("--dump", action="store_true", help="Print the merged commands.")
    argument_parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Print progress messages.")
    argument_parser.add_argument("--gui", action="store_true", help="Open the merger window.")
    argument_parser.add_argument("--config", default=None, metavar="PATH", help="Config JSON path.")
    return argument_parser


def _challenge_time_from_args(parsed_args: argparse.Namespace) -> Optional[ChallengeTime]:
    values = (parsed_args.challenge_difficulty, parsed_args.challenge_start, parsed_args.challenge_end)
    if all(value is None for value in values):
        return None
    if any(value is None for value in values):
        raise ValueError("--challenge-difficulty, --challenge-start and --challenge-end must be given together")
    return ChallengeTime.build(parsed_args.challenge_start, parsed_args.challenge_end, parsed_args.challenge_difficulty)


def build_request(parsed_args: argparse.Namespace, config: MergerConfig) -> MergeRequest:
    defaults = config.defaults

    game: Game = parse_game(parsed_args.game) if parsed_args.game is not None else defaults.game_variant

    return MergeRequest.build(
        game=game,
        dsc_inputs=[Path(path) for path in parsed_args.input],
        plaintext_inputs=[Path(path) for path in parsed_args.plaintext_input],
        subtitle_inputs=[Path(path) for path in parsed_args.subtitle_input],
        remove_targets_inputs=[Path(path) for path in parsed_args.remove_targets],
        output=Path(parsed_args.output if parsed_args.output is not None else defaults.output),
        pv_id=parsed_args.pv_id if parsed_args.pv_id is not None else defaults.pv_id,
        english_lyrics=parsed_args.english_lyrics if parsed_args.english_lyrics is not None else defaults.english_lyrics,
        max_lyric_length=(
            parsed_args.max_lyric_length if parsed_args.max_lyric_length is not None else defaults.max_lyric_length
        ),
        dump=bool(parsed_args.dump),
        verbose=parsed_args.verbose if parsed_args.verbose is not None else defaults.verbose,
        challenge_time=_challenge_time_from_args(parsed_args),
    )


def run_request(request: MergeRequest) -> int:
    logger = ConsoleLogger(verbose=request.verbose)
    application = MergeApplication(request, logger)

    try:
        result = application.run()
    except MergerError as exception:
        print(f"Error: {exception}")
        return 1

    if request.dump:
        print(result.dump())

    print("Done!")
    return 0


def _run_gui(config: MergerConfig) -> int:
    from merger_window import run_window

    return run_window(config)


def main(argv: Optional[Sequence[str]] = None) -> int:
    argument_list: List[str] = list(sys.argv[1:] if argv is None else argv)
    parsed_args = _build_argument_parser().parse_args(argument_list)

    try:
        if parsed_args.config is not None:
            config, _config_path = load_config(Path(parsed_args.config))
        else:
            config, _config_path = get_config()
    except (OSError, ValueError) as exception:
        print(f"Error: {exception}")
        return 2

    if not argument_list:
        from interactive_prompt import InteractivePrompt

        return InteractivePrompt(config=config).run()

    if parsed_args.gui:
        return _run_gui(config)

    try:
        request = build_request(parsed_args, config)
    except (MergerError, ValueError) as exception:
        print(f"Error: {exception}")
        return 2

    return run_request(request)


if __name__ == "__main__":
    raise SystemExit(main())
