#! /usr/bin/env python3
#
# Copyright (C) 2026  The qcscalepy authors
# This file is part of the qcscalepy python module.
# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation
# files (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES
# OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
# CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
# TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
# SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
#
"""
qcio.py: Whole-file reading and writing of QC and VRD text.

Files are read completely into memory as a list of lines together with the
newline convention they used, transformed, and written back in one go.
Undecodable bytes survive the round trip unchanged.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from .qcexceptions import EmptyFileError, FileAccessError
from .qchelpers import detect_newline

ENCODING = "utf-8"
ERRORS = "surrogateescape"


@dataclass
class TextDocument:
    """
    The lines of a text file without line terminators.

    Attributes:
        lines: Line contents in file order.
        newline: "\\r\\n" or "\\n", used for every line when written back.
        trailing_newline: Whether the last line was terminated.
    """

    lines: List[str] = field(default_factory=list)
    newline: str = "\n"
    trailing_newline: bool = True

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        newline = detect_newline(text)
        normalized = text.replace("\r\n", "\n")
        trailing = normalized.endswith("\n")
        lines = normalized.split("\n")
        if trailing:
            lines.pop()
        return cls(lines, newline, trailing)

    def to_text(self) -> str:
        text = self.newline.join(self.lines)
        if self.trailing_newline and self.lines:
            text += self.newline
        return text

    def replaced(self, lines: List[str]) -> "TextDocument":
        """Returns a copy of this document holding different lines."""
        return TextDocument(list(lines), self.newline, self.trailing_newline)


def read_document(path: Union[str, Path]) -> TextDocument:
    """
    Reads a whole text file.

    Raises:
        FileNotFoundError: If the file does not exist.
        FileAccessError: If the file exists but cannot be opened or read.
        EmptyFileError: If the file holds nothing but whitespace.
    """
    filepath = Path(path).expanduser()
    try:
        with open(filepath, "r", encoding=ENCODING, errors=ERRORS, newline="") as f:
            text = f.read()
    except FileNotFoundError:
        raise
    except OSError as e:
        raise FileAccessError(f"Cannot read '{filepath}': {e}") from e
    if not text.strip():
        raise EmptyFileError(f"File '{filepath}' is empty")
    return TextDocument.from_text(text)


def write_document(path: Union[str, Path], document: TextDocument) -> None:
    """
    Overwrites a file with the document's lines.

    Raises:
        FileAccessError: If the file cannot be written.
    """
    filepath = Path(path).expanduser()
    try:
        with open(filepath, "w", encoding=ENCODING, errors=ERRORS, newline="") as f:
            f.write(document.to_text())
    except OSError as e:
        raise FileAccessError(f"Cannot write '{filepath}': {e}") from e
