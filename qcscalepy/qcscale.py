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
qcscale.py: Resolving the previous and new model scale.

The previous scale is read from the QC's $scale directive. A new scale is
accepted once it is numeric, not zero and actually different, and the
relative factor between the two is derived from it.
"""

import decimal
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional

from .constants import DEFAULT_CONFIG, DEFAULT_SCALE, ScaleConfig
from .qcexceptions import ScaleInputError
from .qchelpers import CommentTracker, as_decimal, display_factor, format_scale_value
from .qclines import ScaleDirective


@dataclass(frozen=True)
class ScaleRequest:
    """A validated change from `previous` to `new` scale."""

    previous: Decimal
    new: Decimal

    @property
    def relative(self) -> Decimal:
        """Factor turning values authored at the previous scale into the new one."""
        with decimal.localcontext() as ctx:
            ctx.prec = 50
            return self.new / self.previous

    @property
    def display_relative(self) -> str:
        return display_factor(self.relative)

    @property
    def display_new(self) -> str:
        return format_scale_value(self.new)

    def has_rounding_risk(self, config: ScaleConfig = DEFAULT_CONFIG) -> bool:
        """True when the new scale is small enough to make rounding visible."""
        return abs(self.new) < config.rounding_advisory


def find_scale_directive(
    lines: List[str], config: ScaleConfig = DEFAULT_CONFIG
) -> Optional[int]:
    """Returns the index of the first $scale line outside comments, or None."""
    tracker = CommentTracker()
    for idx, line in enumerate(lines):
        if tracker.is_inert(line):
            continue
        if ScaleDirective.from_str(line, config) is not None:
            return idx
    return None


def read_previous_scale(
    lines: List[str], config: ScaleConfig = DEFAULT_CONFIG
) -> Decimal:
    """
    Returns the scale currently set by the QC's $scale directive.

    Falls back to 1 when there is no directive or its argument is malformed
    (not a number, or within the zero boundary).
    """
    idx = find_scale_directive(lines, config)
    if idx is None:
        return DEFAULT_SCALE
    directive = ScaleDirective.from_str(lines[idx], config)
    if directive is None or directive.value is None:
        return DEFAULT_SCALE
    if abs(directive.value) < config.zero_boundary:
        return DEFAULT_SCALE
    return directive.value


def validate_new_scale(
    text: str, previous: Decimal, config: ScaleConfig = DEFAULT_CONFIG
) -> ScaleRequest:
    """
    Validates a user supplied scale.

    Args:
        text: The scale as typed by the user.
        previous: The scale currently in effect.

    Returns:
        The resulting ScaleRequest.

    Raises:
        ScaleInputError: If the value is not a number, is zero, or does not
                         differ from the previous scale.
    """
    try:
        new = as_decimal(text.strip().replace(",", "."))
    except ValueError:
        raise ScaleInputError(f"'{text.strip()}' is not a number")
    if abs(new) < config.zero_boundary:
        raise ScaleInputError("Scale can not be zero")
    if abs(new - previous) < config.zero_boundary:
        raise ScaleInputError(
            f"Scale is already {format_scale_value(previous)}, nothing to change"
        )
    return ScaleRequest(previous=previous, new=new)


def prompt_new_scale(
    previous: Decimal,
    ask: Callable[[str], str],
    on_error: Callable[[str], None],
    config: ScaleConfig = DEFAULT_CONFIG,
) -> ScaleRequest:
    """
    Asks for a new scale until a valid one is entered.

    Args:
        previous: The scale currently in effect.
        ask: Called with a prompt string, returns the user's answer.
        on_error: Called with the reason an answer was rejected.
    """
    question = f"New scale (current {format_scale_value(previous)})"
    while True:
        try:
            return validate_new_scale(ask(question), previous, config)
        except ScaleInputError as e:
            on_error(str(e))
