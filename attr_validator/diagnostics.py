"""Token dumps for inspecting why a file was scanned the way it was."""

from __future__ import annotations

from pathlib import Path

from attr_validator.discovery import is_source_file
from attr_validator.exceptions import InvalidPathError
from attr_validator.lexer import tokenize_file
from attr_validator.report import Report


def debug_file(path: str | Path) -> list[dict[str, str]]:
    """Return the significant tokens of one PHP file as ``{"name", "text"}``."""
    path = Path(path)
    if not path.is_file():
        raise InvalidPathError(str(path), "is not valid")
    if not is_source_file(path):
        raise InvalidPathError(str(path), "is not a valid php file")
    return [
        {"name": token.name, "text": token.text}
        for token in tokenize_file(path)
        if not token.is_ignorable()
    ]


def debug_suspect_files(report: Report) -> dict[str, list[dict[str, str]]]:
    """Token dumps for every suspect file of ``report``, keyed by path."""
    return {record.source_path: debug_file(record.source_path) for record in report.suspects}
