"""
Command-Line Interface

CLI for running and checking questionnaire definitions from the command line.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .checks import check_questionnaire, outline
from .config import RunnerConfig
from .definition import load_questionnaire
from .errors import QuestreeError
from .persistence import read_answer_log
from .runner import QuestionnaireRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="questree",
        description="questree - interactive tree shaped questionnaires",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a questionnaire")
    run_parser.add_argument(
        "--persistence-file", "-p",
        type=str,
        default=None,
        help="Answer log of the session (default: questree.tmp or $QUESTREE_PERSISTENCE_FILE)",
    )
    run_parser.add_argument(
        "--autofill",
        action="store_true",
        default=None,
        help="Fast-forward through answers of an earlier session",
    )
    run_parser.add_argument(
        "--import",
        dest="import_log",
        type=str,
        default=None,
        help="Answer log to replay instead of the persistence file",
    )
    run_parser.add_argument(
        "--output", "-O",
        type=str,
        default=None,
        help="Write the result as JSON to this file",
    )
    run_parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Title shown at the start (default: title of the definition)",
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check a questionnaire definition")

    # Outline command
    outline_parser = subparsers.add_parser("outline", help="Print the entries of a questionnaire")

    for p in [run_parser, check_parser, outline_parser]:
        p.add_argument("definition", type=str, help="Path to the questionnaire definition (JSON)")
        p.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose output",
        )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI. Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = RunnerConfig.from_env(
        persistence_file=getattr(args, "persistence_file", None),
        autofill=getattr(args, "autofill", None),
        title=getattr(args, "title", None),
    )
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        questionnaire = load_questionnaire(args.definition)
        if args.command == "run":
            return run_questionnaire(questionnaire, config, args)
        if args.command == "check":
            return run_check(questionnaire, args)
        return run_outline(questionnaire)
    except QuestreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


def run_questionnaire(questionnaire, config: RunnerConfig, args) -> int:
    """Run the run command."""
    imported = read_answer_log(args.import_log) if args.import_log else None
    runner = QuestionnaireRunner(questionnaire, config=config, imported_data=imported)
    result = runner.run()

    print(f"\nStatus: {result.status.value}")
    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        print(f"Result written to {output}")
    return 0 if result.is_finished else 1


def run_check(questionnaire, args) -> int:
    """Run the check command."""
    problems = check_questionnaire(questionnaire)
    if not problems:
        print(f"{args.definition}: OK ({questionnaire.pos_count} positions)")
        return 0
    for problem in problems:
        print(f"{args.definition}: {problem}")
    return 1


def run_outline(questionnaire) -> int:
    """Run the outline command."""
    print(questionnaire.title)
    for line in outline(questionnaire):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
