"""Test the command line entry point."""
import io
from pathlib import Path

import pytest

from calcpad.main import build_output_path, main, parse_args, parse_keys, run_interactive, run_keys


@pytest.mark.parametrize("input_path,expected", [
    ("resources/ops.txt", "resources/ops_txt_results.txt"),
    ("resources/ops.tar.xz", "resources/ops_tar_xz_results.txt"),
    ("ops.7z", "ops_7z_results.txt"),
])
def test_build_output_path(input_path, expected) -> None:
    """The results file sits next to the input, named after its extensions."""
    assert build_output_path(Path(input_path)) == Path(expected)


@pytest.mark.parametrize("sequence,expected", [
    ("12+3=", ["1", "2", "＋", "3", "="]),
    ("1 2 Backspace 5 Enter", ["1", "2", "DEL", "5", "="]),
    ("7 * 8 Escape", ["7", "×", "8", "C"]),
    ("4x%", ["4", "%"]),
    ("", []),
])
def test_parse_keys(sequence, expected) -> None:
    """Named keys and runs of characters become logical keys."""
    assert parse_keys(sequence) == expected


def test_parse_args_missing_file(tmp_path) -> None:
    """A file path that does not exist is rejected."""
    with pytest.raises(SystemExit):
        parse_args([str(tmp_path / "missing.txt")])


def test_parse_args_exclusive(tmp_path) -> None:
    """A file and a key sequence cannot be combined."""
    input_file = tmp_path / "ops.txt"
    input_file.write_text("1+1\n")
    with pytest.raises(SystemExit):
        parse_args([str(input_file), "--keys", "1"])


def test_run_keys(capsys) -> None:
    """The final expression and display are printed."""
    state = run_keys("12+3=")
    assert state.display == "15"
    assert capsys.readouterr().out == "15\n15\n"


def test_run_interactive() -> None:
    """Each input line is pressed and the state printed, until quit."""
    stdin = io.StringIO("7*\n6\n=\nq\n9\n")
    out = io.StringIO()

    state = run_interactive(stdin=stdin, out=out)

    assert state.display == "42"
    assert out.getvalue().splitlines() == ["", "0", "7×", "×", "7×6", "6", "42", "42"]


def test_main_batch(tmp_path, capsys) -> None:
    """Batch mode writes the results file and prints its path."""
    input_file = tmp_path / "ops.txt"
    input_file.write_text("2 + 3 * 4\n0.1 + 0.2\n")

    main([str(input_file)])

    output_file = tmp_path / "ops_txt_results.txt"
    assert output_file.read_text(encoding="utf-8") == "2 + 3 * 4 = 14\n0.1 + 0.2 = 0.3\n"
    assert capsys.readouterr().out.strip() == str(output_file)


def test_main_batch_unsupported_archive(tmp_path) -> None:
    """An unreadable input exits with status 1."""
    input_file = tmp_path / "ops.rar"
    input_file.write_text("1+1")

    with pytest.raises(SystemExit) as exc_info:
        main([str(input_file)])
    assert exc_info.value.code == 1


def test_main_keys(capsys) -> None:
    """--keys replays the sequence."""
    main(["--keys", "5/0="])
    assert capsys.readouterr().out == "\nErr\n"


def test_main_batch_corrupt_archive(tmp_path) -> None:
    """A corrupt archive exits with status 1 instead of a traceback."""
    input_file = tmp_path / "ops.zip"
    input_file.write_bytes(b"not a zip")

    with pytest.raises(SystemExit) as exc_info:
        main([str(input_file)])
    assert exc_info.value.code == 1
