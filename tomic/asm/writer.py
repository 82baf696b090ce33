"""Writers that emit assembly text, with or without comments."""

from __future__ import annotations

from typing import TextIO


class StandardAsmWriter:
    """Writes plain assembly; everything pushed inside a comment is dropped."""

    def __init__(self, out: TextIO) -> None:
        if out is None:
            raise ValueError("an output stream is required")
        self._out = out
        self._commenting = False

    def _emit(self, text: str) -> None:
        if not self._commenting:
            self._out.write(text)

    def push(self, text) -> None:
        """Write ``text`` as is."""
        self._emit(str(text))

    def push_next(self, text) -> None:
        """Write a space followed by ``text``."""
        self._emit(" " + str(text))

    def push_space(self) -> None:
        self._emit(" ")

    def push_spaces(self, repeat: int) -> None:
        self._emit(" " * repeat)

    def push_new_line(self) -> None:
        self._emit("\n")

    def push_new_lines(self, repeat: int) -> None:
        self._emit("\n" * repeat)

    def push_comment(self, text) -> None:
        """Comments are not written."""

    def comment_begin(self) -> None:
        self._commenting = True

    def comment_end(self) -> None:
        self._commenting = False


class VerboseAsmWriter:
    """Writes assembly with ``;`` line comments."""

    def __init__(self, out: TextIO) -> None:
        if out is None:
            raise ValueError("an output stream is required")
        self._out = out

    def push(self, text) -> None:
        """Write ``text`` as is."""
        self._out.write(str(text))

    def push_next(self, text) -> None:
        """Write a space followed by ``text``."""
        self._out.write(" " + str(text))

    def push_space(self) -> None:
        self._out.write(" ")

    def push_spaces(self, repeat: int) -> None:
        self._out.write(" " * repeat)

    def push_new_line(self) -> None:
        self._out.write("\n")

    def push_new_lines(self, repeat: int) -> None:
        self._out.write("\n" * repeat)

    def push_comment(self, text) -> None:
        self.comment_begin()
        self._out.write(str(text))
        self.comment_end()

    def comment_begin(self) -> None:
        self._out.write("; ")

    def comment_end(self) -> None:
        self.push_new_line()