"""
Command line entry point.

This script either:
- batch-evaluates a file (or archive) of expressions into a results file,
- replays a sequence of keys on the calculator and prints the final state,
- or runs an interactive keypad session on the terminal.
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel, FilePath, ValidationError

from calcpad.batch.evaluator import BatchEvaluator
from calcpad.common.logger import logger
from calcpad.common.models import CalculatorState
from calcpad.keypad.keymap import map_key
from calcpad.keypad.state import Calculator

QUIT_COMMANDS = ("q", "quit", "exit")


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath, optional
        Path to a file or archive containing one expression per line.
    keys : str, optional
        Key sequence to replay on the calculator.
    """

    file_path: Optional[FilePath] = None
    keys: Optional[str] = None


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="calcpad",
        description="Keypad calculator: batch evaluation, key replay or interactive session",
    )

    parser.add_argument(
        "file_path",
        nargs="?",
        help="Path to a .txt file (or .zip/.tar.xz/.7z archive) of expressions to evaluate",
    )
    parser.add_argument(
        "--keys",
        help='Keys to press, e.g. "12+3=" or "1 2 Backspace 5 Enter"',
    )

    args = parser.parse_args(argv)
    if args.file_path and args.keys:
        parser.error("file_path and --keys are mutually exclusive")

    try:
        return CliArgs(file_path=args.file_path, keys=args.keys)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path for a batch input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations.tar.xz
    output: resources/operations_tar_xz_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    stem = input_path.name
    for suffix in input_path.suffixes:
        stem = stem[: -len(suffix)]
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def parse_keys(sequence: str) -> List[str]:
    """
    Turn a typed key sequence into logical keys.

    Whitespace separated chunks that name a key ("Enter", "DEL", "7") are used
    as is; any other chunk is split into single characters. Characters that are
    not calculator keys are ignored.

    :param str sequence: Key sequence
    :return: Logical keys in order
    :rtype: List[str]
    """
    keys: List[str] = []
    for chunk in sequence.split():
        key = map_key(chunk)
        if key is not None:
            keys.append(key)
            continue
        for char in chunk:
            key = map_key(char)
            if key is None:
                logger.debug("Ignoring unknown key %r", char)
                continue
            keys.append(key)
    return keys


def render(state: CalculatorState) -> str:
    """Format the expression line and the display line."""
    return f"{state.expr}\n{state.display}"


def run_keys(sequence: str, out: Optional[TextIO] = None) -> CalculatorState:
    """Replay a key sequence on a fresh calculator and print the final state."""
    calculator = Calculator()
    state = calculator.press_all(parse_keys(sequence))
    print(render(state), file=out)
    return state


def run_interactive(stdin: Optional[TextIO] = None, out: Optional[TextIO] = None) -> CalculatorState:
    """
    Run a keypad session reading key sequences line by line.

    The session ends on EOF or on one of ``q``, ``quit`` or ``exit``.
    """
    calculator = Calculator()
    print(render(calculator.state), file=out)
    for line in stdin or sys.stdin:
        if line.strip().lower() in QUIT_COMMANDS:
            break
        calculator.press_all(parse_keys(line))
        print(render(calculator.state), file=out)
    return calculator.state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function used by the ``calcpad`` console script.
    """
    cli_args = parse_args(argv)

    if cli_args.file_path is not None:
        input_path: Path = Path(cli_args.file_path)
        output_path: Path = build_output_path(input_path)
        try:
            BatchEvaluator().run(input_path, output_path)
        except ValueError as exc:
            logger.error(f"📄❌ {exc}")
            sys.exit(1)
        print(output_path)
    elif cli_args.keys is not None:
        run_keys(cli_args.keys)
    else:
        run_interactive()


if __name__ == "__main__":
    main()
