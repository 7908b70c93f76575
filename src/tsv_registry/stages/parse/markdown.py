"""
Pipe-table extraction from markdown.

Only the first table of the document is read. Cells are split on `|`,
trimmed and empty pieces are discarded, so escaped pipes and intentionally
blank cells are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from tsv_registry.core import InputDataError, ParseError

_LINE_SPLIT = re.compile(r"\r?\n")

DELIMITER_MARKER = "---"
BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class MarkdownTable:
    headers: tuple[str, ...]
    rows: list[dict[str, str]] = field(default_factory=list)


def split_cells(line: str) -> list[str]:
    return [c.strip() for c in line.split("|") if c.strip()]


def _is_table_line(line: str) -> bool:
    return line.strip().startswith("|")


def find_table_start(lines: list[str]) -> int | None:
    """
    Index of the header line: the first `|` line directly followed by another.
    """
    for i in range(len(lines) - 1):
        if _is_table_line(lines[i]) and _is_table_line(lines[i + 1]):
            return i
    return None


def parse_markdown_table(md_text: str) -> MarkdownTable:
    lines = _LINE_SPLIT.split(md_text.removeprefix(BOM))

    start = find_table_start(lines)
    if start is None:
        raise ParseError("No markdown table found in registry input")

    if DELIMITER_MARKER not in lines[start + 1]:
        raise ParseError("Markdown delimiter line not found after header")

    headers = tuple(split_cells(lines[start]))

    rows: list[dict[str, str]] = []
    for line in lines[start + 2 :]:
        if not _is_table_line(line):
            break

        cells = split_cells(line)
        if not cells:
            continue
        cells.extend([""] * (len(headers) - len(cells)))

        # zip() drops cells beyond the header count
        rows.append(dict(zip(headers, cells)))

    return MarkdownTable(headers=headers, rows=rows)


def read_registry_markdown(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise InputDataError(f"Registry input not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputDataError(f"Failed reading registry input: {path}: {e}") from e
