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
qcpprint.py: Console reporting for qcscalepy using the 'rich' library.

Warnings are yellow, errors red, and values that were rewritten are shown
old -> new with the new value highlighted. Every function takes a
`nocolour` flag which prints the same text without styling.
"""

from typing import List, Tuple

from rich import print as rich_print  # type: ignore # For styled console output
from rich.markup import escape
from rich.text import Text

from .qcfile import DIRECTIVE_REPLACED, EyeballChange, QCResult
from .qchelpers import format_scale_value
from .qcscale import ScaleRequest
from .vrdfile import VRDResult

OLD_TAG = "[#F27759]"
NEW_TAG = "[bold #B7E67A]"
KEY_TAG = "[bold #7096FF]"


def pprint_text(markup: str, nocolour: bool = False):
    """Prints a Rich markup string, or its plain text when `nocolour` is set."""
    if nocolour:
        print(Text.from_markup(markup).plain)
    else:
        rich_print(markup)


def pprint_info(message: str, nocolour: bool = False):
    pprint_text(f"[white]{escape(message)}[/white]", nocolour)


def pprint_warning(message: str, nocolour: bool = False):
    pprint_text(f"[bold yellow]Warning:[/bold yellow] [yellow]{escape(message)}[/yellow]", nocolour)


def pprint_error(message: str, nocolour: bool = False):
    pprint_text(f"[bold red]Error:[/bold red] [red]{escape(message)}[/red]", nocolour)


def pprint_value_change(old: str, new: str) -> str:
    """Formats an old -> new value pair, highlighting the new value if it differs."""
    if old == new:
        return f"[white]{escape(old)}[/white]"
    return f"{OLD_TAG}{escape(old)}[/] -> {NEW_TAG}{escape(new)}[/]"


def pprint_eyeball_change(change: EyeballChange, nocolour: bool = False):
    """Prints the fields of one rescaled eyeball line."""
    before, after = change.before, change.after
    fields = [
        ("pos", " ".join(before.position), " ".join(after.position)),
        ("diameter", before.diameter, after.diameter),
        ("angle", before.angle, after.angle),
        ("iris scale", before.iris_scale, after.iris_scale),
    ]
    if before.pupil is not None and after.pupil is not None:
        fields.insert(2, ("pupil", before.pupil, after.pupil))
    s = [f"[#404040]{change.lineno:4d} | [/]{KEY_TAG}{escape(before.name)}[/]"]
    s += [f"{label}: {pprint_value_change(old, new)}" for label, old, new in fields]
    pprint_text("  ".join(s), nocolour)


def pprint_flex_references(refs: List[Tuple[int, str]], nocolour: bool = False):
    pprint_warning(
        "$scale does not affect flex animation (.vta) files. These flexes will "
        "keep their original size:",
        nocolour,
    )
    for lineno, name in refs:
        pprint_text(f"[#404040]{lineno:4d} | [/][yellow]{escape(name)}[/yellow]", nocolour)


def pprint_eyelid_splits(splits: List[Tuple[int, str]], nocolour: bool = False):
    pprint_warning(
        "Eyelid 'split' values are not affected by $scale and can not be "
        "corrected automatically:",
        nocolour,
    )
    for lineno, value in splits:
        pprint_text(f"[#404040]{lineno:4d} | [/][yellow]split {escape(value)}[/yellow]", nocolour)


def pprint_qc_result(result: QCResult, request: ScaleRequest, nocolour: bool = False):
    """Summarizes the changes made to a QC file."""
    verb = "Updated" if result.directive_action == DIRECTIVE_REPLACED else "Added"
    pprint_text(
        f"{verb} {KEY_TAG}$scale[/] on line {result.directive_lineno}: "
        f"{pprint_value_change(format_scale_value(request.previous), request.display_new)}",
        nocolour,
    )
    if result.eyeball_changes:
        pprint_text(
            f"Rescaled {len(result.eyeball_changes)} eyeball(s) by "
            f"x{escape(request.display_relative)}:",
            nocolour,
        )
        for change in result.eyeball_changes:
            pprint_eyeball_change(change, nocolour)
        pprint_info("Eyeball values are written with 3 decimals.", nocolour)
    if result.rename is not None:
        if result.rename.changed:
            pprint_text(
                f"Renamed {KEY_TAG}$modelname[/] on line {result.rename.lineno}: "
                f"{pprint_value_change(result.rename.old_path, result.rename.new_path)}",
                nocolour,
            )
        else:
            pprint_info(f"$modelname already is {result.rename.old_path}", nocolour)


def pprint_vrd_result(result: VRDResult, nocolour: bool = False):
    """Summarizes the rescale of a VRD file and warns about suspicious content."""
    if result.no_rest_positions and result.first_run:
        pprint_warning(
            "No <basepos> lines were found, this does not look like a procedural "
            "bones file. It was left unchanged.",
            nocolour,
        )
        return
    if result.no_rest_positions:
        pprint_warning("No <basepos> lines were found in the procedural bones file.", nocolour)
    if result.marker_written:
        pprint_info(
            "Stored scale 1 values in a normalization block at the end of the file.",
            nocolour,
        )
    pprint_text(
        f"Rescaled {KEY_TAG}{result.rest_count}[/] <basepos> and "
        f"{KEY_TAG}{result.nonzero_translation_count}[/] <trigger> translation(s) "
        f"to scale {NEW_TAG}{escape(format_scale_value(result.scale))}[/]",
        nocolour,
    )
    if result.all_translations_zero:
        pprint_warning(
            "All <trigger> translations are 0 0 0, there is nothing to scale there. "
            "Rotations are not affected by scale.",
            nocolour,
        )

