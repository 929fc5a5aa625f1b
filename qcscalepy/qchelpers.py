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
qchelpers.py: Numeric formatting and text helpers shared by the QC and VRD rewriters.

This module provides the precision-preserving number scaler used for every
rewritten field, formatting of scale values for directives and filename
suffixes, newline detection, and a streaming tracker for // and /* */
comment regions.
"""

import decimal
from decimal import Decimal
from typing import Optional, Union

from .constants import NORMALIZED_MIN_DECIMALS

Number = Union[str, int, float, Decimal]


def as_decimal(x: Number) -> Decimal:
    """
    Converts a number or numeric string into a Decimal without picking up
    binary floating point noise (floats go through their shortest repr).

    Raises:
        ValueError: If the input is not a finite number.
    """
    if isinstance(x, Decimal):
        value = x
    else:
        try:
            value = Decimal(str(x).strip())
        except decimal.InvalidOperation:
            raise ValueError(f"Not a number: {x!r}")
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {x!r}")
    return value


def decimal_places(literal: str) -> int:
    """
    Returns the number of fractional digits written in a decimal literal.
    Exponent notation is taken into account, so "1.5e-05" has 6.

    Args:
        literal: The number as it appears in the source text.

    Returns:
        The fractional digit count, 0 for integer literals.
    """
    exponent = as_decimal(literal).as_tuple().exponent
    return max(0, -int(exponent))


def scale_num(original: str, factor: Number, decimals: Optional[int] = None) -> str:
    """
    Scales a numeric literal by a factor, keeping the literal's precision.

    The result is rounded half-up and written in fixed point with the same
    number of fractional digits as the original, or with `decimals` digits
    when given. When the original carried a minus sign and the result does
    not, the sign column is kept as a single leading space so that columns
    of numbers stay aligned.

    Args:
        original: The decimal literal to scale (e.g. "1.50", "-0.5", "2e-3").
        factor: The multiplier.
        decimals: Optional fixed number of fractional digits for the output.

    Returns:
        The scaled literal, e.g. scale_num("1.50", 2) == "3.00" and
        scale_num("-0.5", -2, decimals=2) == " 1.00".
    """
    text = original.strip()
    places = decimal_places(text) if decimals is None else decimals
    quantum = Decimal(1).scaleb(-places)
    with decimal.localcontext() as ctx:
        ctx.prec = 50
        result = (as_decimal(text) * as_decimal(factor)).quantize(
            quantum, rounding=decimal.ROUND_HALF_UP
        )
    if result.is_zero():
        result = result.copy_abs()
    s = f"{result:.{places}f}"
    if text.startswith("-") and not result.is_signed():
        return " " + s
    return s


def format_scale_value(value: Number) -> str:
    """
    Formats a scale value compactly, trimming trailing zeros and a dangling
    decimal point: 2.0 -> "2", 0.50 -> "0.5", -1.250 -> "-1.25".
    """
    s = f"{as_decimal(value):f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in ("-0", ""):
        return "0"
    return s


def display_factor(value: Number) -> str:
    """Rounds a factor to at most 3 fractional digits for display."""
    rounded = as_decimal(value).quantize(
        Decimal("0.001"), rounding=decimal.ROUND_HALF_UP
    )
    return format_scale_value(rounded)


def normalize_value(
    literal: str, previous_scale: Number, min_decimals: int = NORMALIZED_MIN_DECIMALS
) -> str:
    """
    Converts a value authored at `previous_scale` into its scale 1 baseline.

    The value is divided by the previous scale and written with at least
    `min_decimals` fractional digits, so integer literals such as "1" become
    "1.000000" and later rescales by fractional factors do not lose
    precision. Literals with more digits keep all of them.
    """
    previous = as_decimal(previous_scale)
    text = literal.strip()
    places = max(decimal_places(text), min_decimals)
    if previous == 1:
        return scale_num(text, 1, decimals=places).strip()
    with decimal.localcontext() as ctx:
        ctx.prec = 50
        inverse = Decimal(1) / previous
    return scale_num(text, inverse, decimals=places).strip()


def is_zero_triple(values) -> bool:
    """True when every component of a coordinate triple is numerically zero."""
    return all(as_decimal(v).is_zero() for v in values)


def detect_newline(text: str) -> str:
    """Returns "\\r\\n" if the text uses CRLF anywhere, otherwise "\\n"."""
    return "\r\n" if "\r\n" in text else "\n"


class CommentTracker:
    """
    Streaming classifier for comment regions in QC/VRD text.

    Feed lines in file order to `is_inert`. A line is inert when it starts
    with //, starts with /*, or lies inside an unterminated /* */ block
    carried over from earlier lines.
    """

    def __init__(self):
        self.in_block = False

    @staticmethod
    def _leaves_block_open(text: str) -> bool:
        """Scans text outside a block comment and reports whether one is left open."""
        pos = 0
        inside = False
        while True:
            if inside:
                end = text.find("*/", pos)
                if end < 0:
                    return True
                inside = False
                pos = end + 2
            else:
                start = text.find("/*", pos)
                line_comment = text.find("//", pos)
                if start < 0 or 0 <= line_comment < start:
                    return False
                inside = True
                pos = start + 2

    def is_inert(self, line: str) -> bool:
        """
        Classifies one line and advances the block comment state.

        Args:
            line: The line text without its newline.

        Returns:
            True if no directive on this line should be matched or rewritten.
        """
        if self.in_block:
            end = line.find("*/")
            if end >= 0:
                self.in_block = self._leaves_block_open(line[end + 2 :])
            return True
        stripped = line.lstrip()
        if stripped.startswith("//"):
            return True
        self.in_block = self._leaves_block_open(line)
        return stripped.startswith("/*")
