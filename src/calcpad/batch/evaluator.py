"""Evaluate files of expressions, one per line."""
from pathlib import Path
import tarfile
import tempfile
from typing import Callable, Dict, List, Optional
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, Field, FilePath

from calcpad.common.compute import compute
from calcpad.common.logger import logger
from calcpad.common.models import OperationResult
from calcpad.common.symbols import ERROR_MARKER, SUB
from calcpad.keypad.keymap import translate_expression


def _first_txt(names: List[str], archive_path: Path) -> str:
    txt_files = [name for name in names if name.endswith(".txt")]
    if not txt_files:
        raise ValueError(f"📄❌ No .txt file found in {archive_path.name}")
    return txt_files[0]


def _read_zip(archive_path: Path, workdir: Path) -> str:
    with zipfile.ZipFile(archive_path, "r") as zf:
        member = _first_txt(zf.namelist(), archive_path)
        zf.extract(member, path=workdir)
    return (workdir / member).read_text(encoding="utf-8")


def _read_tar_xz(archive_path: Path, workdir: Path) -> str:
    with tarfile.open(archive_path, "r:xz") as tf:
        member = _first_txt(tf.getnames(), archive_path)
        tf.extract(member, path=workdir, filter="data")
    return (workdir / member).read_text(encoding="utf-8")


def _read_7z(archive_path: Path, workdir: Path) -> str:
    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
        member = _first_txt(archive.getnames(), archive_path)
        archive.extract(path=workdir, targets=[member])
    return (workdir / member).read_text(encoding="utf-8")


# Archive suffix -> reader returning the text of the first .txt member
ARCHIVE_READERS: Dict[str, Callable[[Path, Path], str]] = {
    ".zip": _read_zip,
    ".tar.xz": _read_tar_xz,
    ".7z": _read_7z,
}


class BatchEvaluator(BaseModel):
    """
    Evaluate every expression of an input file and write the results to an output file.

    The input is either a plain ``.txt`` file or an archive (``.zip``, ``.tar.xz``,
    ``.7z``) whose first ``.txt`` member is used. Expressions may use ASCII
    operators (``3 + 4 * 2``) or the calculator glyphs. Blank lines are skipped.
    Each output line has the form ``<expression> = <result>``; expressions that
    cannot be evaluated get the error marker instead of aborting the run.
    """

    model_config = ConfigDict(frozen=True)

    round_digits: Optional[int] = Field(
        default=None, ge=0, le=15, description="Override for the configured rounding precision"
    )

    def load_expressions(self, input_file: FilePath) -> List[str]:
        """
        Read the non-blank expression lines of a text file or archive.

        :param FilePath input_file: Path to the input file or archive

        :return: Stripped, non-empty lines
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        input_file = Path(input_file)
        if input_file.suffix == ".txt":
            content = input_file.read_text(encoding="utf-8")
        else:
            content = self._extract_archive(input_file)
        return [line.strip() for line in content.splitlines() if line.strip()]

    def _extract_archive(self, archive_path: Path) -> str:
        """
        Return the content of the first .txt file found in a supported archive.

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found or format is unsupported,
            or the archive is corrupt
        """
        suffix = archive_path.suffix
        if archive_path.suffixes[-2:-1] == [".tar"]:
            suffix = ".tar" + suffix
        reader = ARCHIVE_READERS.get(suffix)
        if reader is None:
            raise ValueError(f"📄❌ Unsupported archive format: {suffix}")
        # Extract into a temporary directory that is removed afterwards
        with tempfile.TemporaryDirectory() as tmpdir:
            try:
                return reader(archive_path, Path(tmpdir))
            except (zipfile.BadZipFile, tarfile.TarError, py7zr.Bad7zFile) as exc:
                raise ValueError(f"📄❌ Unreadable archive: {archive_path.name}") from exc

    def evaluate(self, expression: str) -> OperationResult:
        """Evaluate a single expression line."""
        text = translate_expression(expression).strip()
        if text.startswith(SUB):
            # Leading minus, entered the way the keypad seeds it
            text = "0" + text
        result = compute(text, round_digits=self.round_digits)
        if result == ERROR_MARKER:
            logger.error(f"🧮❌ Invalid arithmetic expression, could not evaluate: {expression!r}")
        return OperationResult(expression=expression, result=result)

    def run(self, input_file: FilePath, output_file: Path) -> List[OperationResult]:
        """
        Evaluate all expressions of ``input_file`` and write them to ``output_file``.

        :param FilePath input_file: Path to the input file or archive
        :param Path output_file: Path where results will be written

        :return: Results in input order
        :rtype: List[OperationResult]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        expressions = self.load_expressions(input_file)
        logger.info(f"📄 Evaluating {len(expressions)} expressions from {input_file}")

        results: List[OperationResult] = []
        with Path(output_file).open("w", encoding="utf-8") as f_out:
            for expression in expressions:
                operation = self.evaluate(expression)
                results.append(operation)
                f_out.write(operation.to_line() + "\n")
                # Keep partial results on disk if the run is interrupted
                f_out.flush()

        logger.info(f"✅ Results written to {output_file}")
        return results
