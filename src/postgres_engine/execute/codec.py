"""
psql output codec.

psql is asked for tuples-only, unaligned output with ASCII record/unit
separators between rows and fields, which cannot collide with ordinary text.
`decode_rows` turns the captured stdout back into rows of column strings.

Empty output decodes to zero rows (never one empty row): existence checks rely
on that distinction.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from src.constants import FIELD_SEPARATOR, ROW_SEPARATOR


def output_format_args() -> tuple[str, ...]:
    """psql flags for the delimiter contract: tuples-only, unaligned, 0x1E rows, 0x1F fields."""
    return ("-t", "-A", "-R", ROW_SEPARATOR, "-F", FIELD_SEPARATOR)


def _chomp(text: str) -> str:
    """Remove a single trailing line ending."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


@dataclass(frozen=True)
class ExecutionResult:
    """
    Rows decoded from psql output.

    Decoding is lazy and restartable: every iteration splits the raw text
    again, so the result can be walked any number of times.
    """

    raw_text: str = ""

    def __iter__(self) -> Iterator[list[str]]:
        body = _chomp(self.raw_text)
        if not body:
            return
        for row in body.split(ROW_SEPARATOR):
            yield row.split(FIELD_SEPARATOR)

    def __len__(self) -> int:
        body = _chomp(self.raw_text)
        return body.count(ROW_SEPARATOR) + 1 if body else 0

    def __bool__(self) -> bool:
        return len(self) > 0

    @property
    def rows(self) -> list[list[str]]:
        """All rows, materialised."""
        return list(self)


def decode_rows(raw_text: str | None) -> ExecutionResult:
    """Decode captured psql stdout into an ExecutionResult."""
    return ExecutionResult(raw_text or "")
