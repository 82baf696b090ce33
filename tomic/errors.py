"""Compile error types, their descriptions, and loggers that collect and dump them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, TextIO


class ErrorType(IntEnum):
    """Kinds of compile errors, ordered as they are sorted in dumps."""

    ERR_UNKNOWN = 0
    ERR_UNEXPECTED_TOKEN = 1
    ERR_REDEFINED_SYMBOL = 2
    ERR_UNDEFINED_SYMBOL = 3
    ERR_ARGUMENT_COUNT_MISMATCH = 4
    ERR_ARGUMENT_TYPE_MISMATCH = 5
    ERR_RETURN_TYPE_MISMATCH = 6
    ERR_MISSING_RETURN_STATEMENT = 7
    ERR_ASSIGN_TO_CONST = 8
    ERR_MISSING_SEMICOLON = 9
    ERR_MISSING_RIGHT_PARENTHESIS = 10
    ERR_MISSING_RIGHT_BRACKET = 11
    ERR_MISSING_RIGHT_BRACE = 12
    ERR_PRINTF_EXTRA_ARGUMENTS = 13
    ERR_ILLEGAL_BREAK = 14
    ERR_ILLEGAL_CONTINUE = 15


class StandardErrorMapper:
    """Maps error types to the single-letter codes of the judge format."""

    _DESCRIPTIONS = {
        ErrorType.ERR_UNKNOWN: "Unknown error",
        ErrorType.ERR_UNEXPECTED_TOKEN: "a",
        ErrorType.ERR_REDEFINED_SYMBOL: "b",
        ErrorType.ERR_UNDEFINED_SYMBOL: "c",
        ErrorType.ERR_ARGUMENT_COUNT_MISMATCH: "d",
        ErrorType.ERR_ARGUMENT_TYPE_MISMATCH: "e",
        ErrorType.ERR_RETURN_TYPE_MISMATCH: "f",
        ErrorType.ERR_MISSING_RETURN_STATEMENT: "g",
        ErrorType.ERR_ASSIGN_TO_CONST: "h",
        ErrorType.ERR_MISSING_SEMICOLON: "i",
        ErrorType.ERR_MISSING_RIGHT_PARENTHESIS: "j",
        ErrorType.ERR_MISSING_RIGHT_BRACKET: "k",
        ErrorType.ERR_MISSING_RIGHT_BRACE: "z",
        ErrorType.ERR_PRINTF_EXTRA_ARGUMENTS: "l",
        ErrorType.ERR_ILLEGAL_BREAK: "m",
        ErrorType.ERR_ILLEGAL_CONTINUE: "m",
    }

    def description(self, error_type: ErrorType) -> str:
        return self._DESCRIPTIONS[ErrorType(error_type)]


class VerboseErrorMapper:
    """Maps error types to human-readable descriptions."""

    _DESCRIPTIONS = {
        ErrorType.ERR_UNKNOWN: "Unknown error",
        ErrorType.ERR_UNEXPECTED_TOKEN: "Unexpected token",
        ErrorType.ERR_REDEFINED_SYMBOL: "Redefined symbol",
        ErrorType.ERR_UNDEFINED_SYMBOL: "Undefined symbol",
        ErrorType.ERR_ARGUMENT_COUNT_MISMATCH: "Argument count mismatch",
        ErrorType.ERR_ARGUMENT_TYPE_MISMATCH: "Argument type mismatch",
        ErrorType.ERR_RETURN_TYPE_MISMATCH: "Return type mismatch",
        ErrorType.ERR_MISSING_RETURN_STATEMENT: "Missing return statement",
        ErrorType.ERR_ASSIGN_TO_CONST: "Assign to const",
        ErrorType.ERR_MISSING_SEMICOLON: "Missing ;",
        ErrorType.ERR_MISSING_RIGHT_PARENTHESIS: "Missing )",
        ErrorType.ERR_MISSING_RIGHT_BRACKET: "Missing ]",
        ErrorType.ERR_MISSING_RIGHT_BRACE: "Missing }",
        ErrorType.ERR_PRINTF_EXTRA_ARGUMENTS: "Extra arguments for printf",
        ErrorType.ERR_ILLEGAL_BREAK: "Illegal break",
        ErrorType.ERR_ILLEGAL_CONTINUE: "Illegal continue",
    }

    def description(self, error_type: ErrorType) -> str:
        return self._DESCRIPTIONS[ErrorType(error_type)]


@dataclass(frozen=True)
class _StandardEntry:
    line: int
    error_type: ErrorType


@dataclass(frozen=True)
class _VerboseEntry:
    line: int
    column: int
    error_type: ErrorType
    message: str


def _unique_adjacent(items):
    previous = object()
    for item in items:
        if item != previous:
            yield item
        previous = item


class StandardErrorLogger:
    """Collects errors by line and type; dumps one "line code" row per distinct error."""

    def __init__(self, mapper) -> None:
        if mapper is None:
            raise ValueError("an error mapper is required")
        self._mapper = mapper
        self._entries: list[_StandardEntry] = []

    def log(self, line: int, column: int, error_type: ErrorType, fmt: Optional[str] = None, *args) -> None:
        """Record an error; column and message are not kept."""
        self._entries.append(_StandardEntry(line, ErrorType(error_type)))

    def dumps(self, writer: TextIO) -> None:
        """Write errors sorted by line then type, without duplicates or unknown errors."""
        self._entries.sort(key=lambda e: (e.line, e.error_type))
        for entry in _unique_adjacent(self._entries):
            if entry.error_type == ErrorType.ERR_UNKNOWN:
                continue
            writer.write(f"{entry.line} {self._mapper.description(entry.error_type)}\n")

    def count(self) -> int:
        """Number of errors logged, duplicates included."""
        return len(self._entries)


class VerboseErrorLogger:
    """Collects errors with position and message; dumps them in a readable form."""

    def __init__(self, mapper) -> None:
        self._mapper = mapper
        self._entries: list[_VerboseEntry] = []

    def log(self, line: int, column: int, error_type: ErrorType, fmt: Optional[str] = None, *args) -> None:
        """Record an error with its formatted message."""
        message = fmt % args if fmt else ""
        self._entries.append(_VerboseEntry(line, column, ErrorType(error_type), message))

    def dumps(self, writer: TextIO) -> None:
        """Write errors sorted by line, column and type, without exact duplicates."""
        self._entries.sort(key=lambda e: (e.line, e.column, e.error_type))
        for entry in _unique_adjacent(self._entries):
            writer.write(
                f"Line {entry.line}, Column {entry.column}: "
                f"{self._mapper.description(entry.error_type)}\n"
            )
            writer.write(f"    {entry.message}\n")

    def count(self) -> int:
        """Number of errors logged, duplicates included."""
        return len(self._entries)