"""Reading target lists."""

from __future__ import annotations

from pathlib import Path

from appcheck.core.exceptions import TargetListError


def parse_targets(text: str) -> list[str]:
    """Split text into target identifiers, one per line.

    Only the line terminator is removed: blank lines stay as empty
    identifiers and surrounding whitespace is kept verbatim. A trailing
    newline does not add an extra empty target.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_targets(path: Path) -> list[str]:
    """Read the target list from a line-oriented text file.

    Raises:
        TargetListError: The file is missing or cannot be read.
    """
    if not path.exists():
        raise TargetListError(f"Target file '{path}' does not exist")
    if not path.is_file():
        raise TargetListError(f"Target file '{path}' is not a regular file")

    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TargetListError(f"Error reading target file '{path}': {e}") from e

    return parse_targets(text)
