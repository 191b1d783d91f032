"""CLI interface for aocgen."""

from __future__ import annotations

import argparse
import sys

from aocgen.agents.generator import GeneratorAgent
from aocgen.challenges import find_challenge, list_rows, load_challenges
from aocgen.config import Config
from aocgen.downloader import Downloader
from aocgen.errors import AocgenError
from aocgen.orchestrator import Orchestrator
from aocgen.runtimes import solution_filename, supported_languages

_LANG_HELP = "Programming language, one of: " + ", ".join(supported_languages())


def _add_challenge_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--day", type=int, required=True, help="Day of the challenge")
    parser.add_argument("--part", type=int, default=1, help="Part of the challenge")
    parser.add_argument("--year", type=int, required=True, help="Year of the challenge")


def _add_common_args(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    parser.add_argument(
        "--cache-dir", type=str, default=argparse.SUPPRESS if suppress else None,
        help="Challenge cache directory",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", default=argparse.SUPPRESS if suppress else False,
        help="No progress output",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aocgen",
        description="Generate and evaluate puzzle solutions in many languages",
    )
    _add_common_args(parser)
    # Accepted after the subcommand too; SUPPRESS keeps a flag given before
    # it from being reset by the subcommand's defaults.
    common = argparse.ArgumentParser(add_help=False)
    _add_common_args(common, suppress=True)
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("list", parents=[common], help="List cached challenges")

    download_parser = subparsers.add_parser("download", parents=[common], help="Download a challenge")
    _add_challenge_args(download_parser)
    download_parser.add_argument("--session", type=str, default=None, help="Session token for the puzzle site")

    generate_parser = subparsers.add_parser("generate", parents=[common], help="Generate a solution with a model")
    _add_challenge_args(generate_parser)
    generate_parser.add_argument("--lang", type=str, required=True, help=_LANG_HELP)
    generate_parser.add_argument("--model", type=str, default=None, help="AI model to use")
    generate_parser.add_argument("--model-api", type=str, default=None, help="API endpoint for the AI model")

    eval_parser = subparsers.add_parser("eval", parents=[common], help="Evaluate a solution file")
    _add_challenge_args(eval_parser)
    eval_parser.add_argument("--lang", type=str, required=True, help=_LANG_HELP)
    eval_parser.add_argument("--file", type=str, default=None, help="Solution file (default <name>.<ext>)")
    eval_parser.add_argument("--timeout", type=float, default=None, help="Timeout in seconds")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    overrides = {
        "cache_dir": args.cache_dir,
        "session": getattr(args, "session", None),
        "model": getattr(args, "model", None),
        "model_api": getattr(args, "model_api", None),
        "evaluation_timeout": getattr(args, "timeout", None),
    }
    if args.quiet:
        overrides["verbose"] = False

    try:
        config = Config.from_env(**overrides)
        handler = _COMMANDS[args.command]
        sys.exit(handler(config, args))
    except (AocgenError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_list(config: Config, args: argparse.Namespace) -> int:
    try:
        challenges = load_challenges(config.challenges_path)
    except FileNotFoundError:
        challenges = []
    if not challenges:
        print("No challenges found. Use the 'download' command to get some challenges.")
        return 0
    for row in list_rows(challenges):
        print(row)
    return 0


def _cmd_download(config: Config, args: argparse.Namespace) -> int:
    Downloader(config).download(args.day, args.year, args.part)
    print("Challenge downloaded and saved successfully!")
    return 0


def _cmd_generate(config: Config, args: argparse.Namespace) -> int:
    challenge = find_challenge(load_challenges(config.challenges_path), args.day, args.part, args.year)
    GeneratorAgent(config).write_solution(challenge, args.lang)
    print("Challenge files created successfully!")
    return 0


def _cmd_eval(config: Config, args: argparse.Namespace) -> int:
    challenge = find_challenge(load_challenges(config.challenges_path), args.day, args.part, args.year)
    path = args.file or solution_filename(challenge.name, args.lang)
    result = Orchestrator(config).evaluate_challenge(challenge, path, args.lang)
    if not result.ok and result.output:
        print(f"Output: {result.output}", file=sys.stderr)
    result.raise_for_error()
    if result.matched:
        print(f"Solution is correct!\nOutput: {result.output}")
    else:
        print(f"Solution is incorrect.\nOutput: {result.output}")
    return 0


_COMMANDS = {
    "list": _cmd_list,
    "download": _cmd_download,
    "generate": _cmd_generate,
    "eval": _cmd_eval,
}
