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
qcexceptions.py: Exception types raised by qcscalepy.

Each exception carries the process exit code the console script reports
when it terminates a run.
"""

from typing import Optional

from .constants import (
    EXIT_DECLINED,
    EXIT_EMPTY_FILE,
    EXIT_FAILURE,
    EXIT_FILE_LOCKED,
    EXIT_MARKER_MISMATCH,
    EXIT_NO_INPUT_FILES,
)


class QCScaleError(Exception):
    """Base class for all qcscalepy errors."""

    exit_code: int = EXIT_FAILURE


class ScaleInputError(QCScaleError, ValueError):
    """A requested scale value was not numeric, zero, or unchanged."""


class NoInputFilesError(QCScaleError):
    """No QC file could be found to work on."""

    exit_code = EXIT_NO_INPUT_FILES


class EmptyFileError(QCScaleError):
    """An input file exists but holds no content."""

    exit_code = EXIT_EMPTY_FILE


class FileAccessError(QCScaleError):
    """An input file could not be opened, read or written."""

    exit_code = EXIT_FILE_LOCKED


class UserDeclinedError(QCScaleError):
    """The user answered no to a confirmation required to continue."""

    exit_code = EXIT_DECLINED


class MarkerMismatchError(QCScaleError):
    """
    The normalization marker block of a VRD file no longer lines up with
    the <trigger> lines it describes, usually because the file was edited
    by hand after the block was written.
    """

    exit_code = EXIT_MARKER_MISMATCH

    def __init__(
        self,
        helper: Optional[str] = None,
        index: Optional[int] = None,
        lineno: Optional[int] = None,
    ):
        self.helper = helper
        self.index = index
        self.lineno = lineno
        where = f"line {lineno}: " if lineno is not None else ""
        if helper is None:
            # No helper to blame: the block itself lost its records
            message = f"{where}the normalization marker block holds no records"
        else:
            message = (
                f"{where}<trigger> #{index} of helper '{helper}' has no "
                f"matching record in the normalization marker block"
            )
        super().__init__(message)
