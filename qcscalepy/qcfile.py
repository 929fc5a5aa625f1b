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
qcfile.py: Rewriting a QC file for a new $scale.

studiomdl applies $scale to meshes, bones and attachments but not to
eyeball definitions, so those are multiplied by the relative scale here.
The module also places the $scale directive, optionally tags the
$modelname with a scale suffix and detects flex (.vta) data that $scale
cannot correct.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import DEFAULT_CONFIG, ScaleConfig
from .qchelpers import CommentTracker, Number, as_decimal, format_scale_value, scale_num
from .qclines import EyeballLine, ModelNameLine, ScaleDirective
from .qcscale import ScaleRequest, find_scale_directive

# Directive placement outcomes
DIRECTIVE_REPLACED = "replaced"
DIRECTIVE_INSERTED = "inserted"
DIRECTIVE_REPLACED_BLANK = "replaced blank line"


@dataclass
class EyeballChange:
    """An eyeball line before and after rescaling. `lineno` is 1-based."""

    lineno: int
    before: EyeballLine
    after: EyeballLine


@dataclass
class ModelRename:
    """The $modelname path before and after the scale suffix was applied."""

    lineno: int
    old_path: str
    new_path: str

    @property
    def changed(self) -> bool:
        return self.old_path != self.new_path


@dataclass
class QCResult:
    """Everything a QC rewrite changed."""

    lines: List[str]
    directive_action: str
    directive_lineno: int
    eyeball_changes: List[EyeballChange] = field(default_factory=list)
    rename: Optional[ModelRename] = None


def find_flex_references(
    lines: List[str], config: ScaleConfig = DEFAULT_CONFIG
) -> List[Tuple[int, str]]:
    """
    Finds references to .vta flex animation files outside comments.

    Returns:
        A list of (1-based line number, file name) tuples.
    """
    found: List[Tuple[int, str]] = []
    tracker = CommentTracker()
    for lineno, line in enumerate(lines, 1):
        if tracker.is_inert(line):
            continue
        for m in config.flex_re.finditer(line):
            found.append((lineno, m.group(0)))
    return found


def find_eyelid_splits(
    lines: List[str], config: ScaleConfig = DEFAULT_CONFIG
) -> List[Tuple[int, str]]:
    """
    Finds eyelid definitions with a non-zero `split` value outside comments.
    The split is a height in model units that $scale does not correct and
    that can not be rewritten here either, since it has to match the flex data.

    Returns:
        A list of (1-based line number, split value) tuples.
    """
    found: List[Tuple[int, str]] = []
    tracker = CommentTracker()
    for lineno, line in enumerate(lines, 1):
        if tracker.is_inert(line):
            continue
        m = config.eyelid_split_re.match(line)
        if m and not as_decimal(m.group("value")).is_zero():
            found.append((lineno, m.group("value")))
    return found


def place_scale_directive(
    lines: List[str], new_scale: Number, config: ScaleConfig = DEFAULT_CONFIG
) -> Tuple[List[str], str, int]:
    """
    Sets the $scale directive to a new value.

    An existing directive outside comments has its argument replaced in
    place. Otherwise a new directive goes directly above the first live
    line, taking the place of a blank line right before it if there is one,
    or at the top of the file when it holds nothing but comments.

    Returns:
        The new lines, the action taken and the directive's 0-based index.
    """
    result = list(lines)
    value_text = format_scale_value(new_scale)
    idx = find_scale_directive(result, config)
    if idx is not None:
        directive = ScaleDirective.from_str(result[idx], config)
        result[idx] = directive.with_value(value_text)
        return result, DIRECTIVE_REPLACED, idx

    new_line = f"{config.scale_keyword} {value_text}"
    tracker = CommentTracker()
    first_live: Optional[int] = None
    for i, line in enumerate(result):
        if tracker.is_inert(line) or not line.strip():
            continue
        first_live = i
        break

    if first_live is None:
        result.insert(0, new_line)
        return result, DIRECTIVE_INSERTED, 0
    if first_live > 0 and not result[first_live - 1].strip():
        result[first_live - 1] = new_line
        return result, DIRECTIVE_REPLACED_BLANK, first_live - 1
    result.insert(first_live, new_line)
    return result, DIRECTIVE_INSERTED, first_live


def rescale_eyeball(
    eye: EyeballLine, factor: Number, config: ScaleConfig = DEFAULT_CONFIG
) -> EyeballLine:
    """
    Returns a copy of an eyeball with every length multiplied by `factor`.
    The angle is a rotation and stays as written; all scaled fields are
    written with the fixed eyeball precision.
    """
    places = config.eye_decimals

    def scaled(value: str) -> str:
        return scale_num(value, factor, decimals=places).strip()

    return EyeballLine(
        lead=eye.lead,
        name=eye.name,
        bone=eye.bone,
        x=scaled(eye.x),
        y=scaled(eye.y),
        z=scaled(eye.z),
        material=eye.material,
        diameter=scaled(eye.diameter),
        angle=eye.angle,
        pupil=scaled(eye.pupil) if eye.pupil is not None else None,
        iris_material=eye.iris_material,
        iris_scale=scaled(eye.iris_scale),
        trail=eye.trail,
    )


def rescale_eyeballs(
    lines: List[str], factor: Number, config: ScaleConfig = DEFAULT_CONFIG
) -> Tuple[List[str], List[EyeballChange]]:
    """
    Multiplies the eyeball definitions outside comments by `factor`.

    Returns:
        The new lines and one EyeballChange per line that changed.
    """
    result = list(lines)
    changes: List[EyeballChange] = []
    tracker = CommentTracker()
    for idx, line in enumerate(lines):
        if tracker.is_inert(line):
            continue
        eye = EyeballLine.from_str(line, config)
        if eye is None:
            continue
        new_eye = rescale_eyeball(eye, factor, config)
        new_line = str(new_eye)
        if new_line != line:
            result[idx] = new_line
            changes.append(EyeballChange(idx + 1, eye, new_eye))
    return result, changes


def path_separator(path: str) -> str:
    """The separator used last in a path, "/" when there is none."""
    return "\\" if path.rfind("\\") > path.rfind("/") else "/"


def scaled_model_path(
    path: str, new_scale: Number, config: ScaleConfig = DEFAULT_CONFIG
) -> str:
    """
    Replaces the scale suffix of a model path's file name.

    Any existing `_x<number>` suffix before the extension is removed, then
    `_x<new scale>` is appended unless the new scale is 1. Directory,
    separators and extension are kept: "props/crate_x2.mdl" at scale 0.5
    becomes "props/crate_x0.5.mdl".
    """
    head, sep, base = path.rpartition(path_separator(path))
    stem, dot, ext = base.rpartition(".")
    if not dot:
        stem, ext = base, ""
    stem = config.scale_suffix_re.sub("", stem)
    scale = as_decimal(new_scale)
    if scale != 1:
        stem += f"{config.scale_suffix_prefix}{format_scale_value(scale)}"
    return f"{head}{sep}{stem}{dot}{ext}"


def find_model_name(
    lines: List[str], config: ScaleConfig = DEFAULT_CONFIG
) -> Optional[int]:
    """Returns the index of the first $modelname line outside comments, or None."""
    tracker = CommentTracker()
    for idx, line in enumerate(lines):
        if tracker.is_inert(line):
            continue
        if ModelNameLine.from_str(line, config) is not None:
            return idx
    return None


def rename_model(
    lines: List[str], new_scale: Number, config: ScaleConfig = DEFAULT_CONFIG
) -> Tuple[List[str], Optional[ModelRename]]:
    """
    Applies the scale suffix to the $modelname path.

    Returns:
        The new lines and the rename performed, or None when the QC has no
        $modelname directive.
    """
    idx = find_model_name(lines, config)
    if idx is None:
        return list(lines), None
    result = list(lines)
    model = ModelNameLine.from_str(lines[idx], config)
    new_path = scaled_model_path(model.path, new_scale, config)
    rename = ModelRename(idx + 1, model.path, new_path)
    if rename.changed:
        result[idx] = model.with_path(new_path)
    return result, rename


def find_procedural_bones(
    lines: List[str], config: ScaleConfig = DEFAULT_CONFIG
) -> Optional[str]:
    """Returns the path given to $proceduralbones outside comments, or None."""
    tracker = CommentTracker()
    for line in lines:
        if tracker.is_inert(line):
            continue
        m = config.procedural_re.match(line)
        if m:
            return m.group("qpath") if m.group("qpath") is not None else m.group("path")
    return None


def rewrite_qc(
    lines: List[str],
    request: ScaleRequest,
    rename: bool = False,
    config: ScaleConfig = DEFAULT_CONFIG,
) -> QCResult:
    """
    Applies a scale request to the lines of a QC file: sets $scale, rescales
    eyeballs by the relative factor and, if `rename` is set, updates the
    $modelname suffix.
    """
    new_lines, action, directive_idx = place_scale_directive(lines, request.new, config)
    new_lines, changes = rescale_eyeballs(new_lines, request.relative, config)
    result = QCResult(new_lines, action, directive_idx + 1, changes)
    if rename:
        result.lines, result.rename = rename_model(new_lines, request.new, config)
    return result
