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
qclines.py: Typed recognizers for the QC and VRD line shapes qcscalepy rewrites.

Each line shape is a small dataclass with a `from_str` constructor returning
None when the line does not have that shape, and a way to rebuild the line
text with new values. Everything the recognizers do not match is treated as
opaque text and passed through untouched.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple, Union

from .constants import DEFAULT_CONFIG, ScaleConfig
from .qchelpers import CommentTracker, as_decimal

Triple = Tuple[str, str, str]


def _join_triple(values: Triple) -> str:
    return " ".join(values)


# --- QC shapes ---


@dataclass
class ScaleDirective:
    """
    A `$scale <value>` line. `value` is None when the argument is missing or
    is not a usable number.
    """

    lead: str
    keyword: str
    token: str
    after: str
    value: Optional[Decimal] = None

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["ScaleDirective"]:
        m = config.scale_re.match(line)
        if not m:
            return None
        rest = m.group("rest")
        stripped = rest.lstrip()
        token = stripped.split()[0] if stripped else ""
        after = stripped[len(token) :] if token else ""
        value: Optional[Decimal] = None
        if token:
            try:
                value = as_decimal(token)
            except ValueError:
                value = None
        return cls(m.group("lead"), m.group("keyword"), token, after, value)

    def with_value(self, text: str) -> str:
        """Returns the line with its argument replaced by `text`."""
        return f"{self.lead}{self.keyword} {text}{self.after}".rstrip()


@dataclass
class EyeballLine:
    """
    An eyeball definition:
    `eyeball <name> <bone> <x> <y> <z> <material> <diameter> <angle> [<pupil>] <iris material> <iris scale>`
    with any trailing text kept verbatim.
    """

    lead: str
    name: str
    bone: str
    x: str
    y: str
    z: str
    material: str
    diameter: str
    angle: str
    pupil: Optional[str]
    iris_material: str
    iris_scale: str
    trail: str = ""

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["EyeballLine"]:
        m = config.eyeball_re.match(line)
        if not m:
            return None
        return cls(**m.groupdict())

    @property
    def position(self) -> Triple:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        tokens = [self.name, self.bone, self.x, self.y, self.z]
        tokens += [self.material, self.diameter, self.angle]
        if self.pupil is not None:
            tokens.append(self.pupil)
        tokens += [self.iris_material, self.iris_scale]
        return f"{self.lead}{' '.join(tokens)}{self.trail}".rstrip()


@dataclass
class ModelNameLine:
    """A `$modelname <path>` line, remembering whether the path was quoted."""

    lead: str
    path: str
    quoted: bool
    trail: str = ""

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["ModelNameLine"]:
        m = config.modelname_re.match(line)
        if not m:
            return None
        quoted = m.group("qpath") is not None
        path = m.group("qpath") if quoted else m.group("path")
        return cls(m.group("lead"), path, quoted, m.group("trail"))

    def with_path(self, path: str) -> str:
        quoted_path = f'"{path}"' if self.quoted else path
        return f"{self.lead}{quoted_path}{self.trail}".rstrip()


# --- VRD shapes ---


@dataclass
class HelperMarker:
    """A `<helper> <name> ...` line opening a helper's section."""

    name: str

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["HelperMarker"]:
        m = config.helper_re.match(line)
        return cls(m.group("name")) if m else None


@dataclass
class RestPosition:
    """A `<basepos> x y z` line with whatever text surrounds the triple."""

    prefix: str
    x: str
    y: str
    z: str
    suffix: str = ""

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["RestPosition"]:
        m = config.basepos_re.match(line)
        return cls(**m.groupdict()) if m else None

    @property
    def values(self) -> Triple:
        return (self.x, self.y, self.z)

    def rebuild(self, values: Triple) -> str:
        return f"{self.prefix.rstrip()} {_join_triple(values)}{self.suffix}"


@dataclass
class Translation:
    """
    A `<trigger>` line. Only the last three numbers, the target translation,
    are captured; everything before them stays in `prefix`.
    """

    prefix: str
    x: str
    y: str
    z: str
    suffix: str = ""

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["Translation"]:
        m = config.trigger_re.match(line)
        return cls(**m.groupdict()) if m else None

    @property
    def values(self) -> Triple:
        return (self.x, self.y, self.z)

    def rebuild(self, values: Triple) -> str:
        return f"{self.prefix.rstrip()} {_join_triple(values)}{self.suffix}"


@dataclass
class RestRecord:
    """A marker block record holding a helper's scale 1 rest position."""

    helper: str
    values: Triple

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["RestRecord"]:
        m = config.basepos_record_re.match(line)
        if not m:
            return None
        return cls(m.group("name"), (m.group("x"), m.group("y"), m.group("z")))

    def to_str(self, config: ScaleConfig = DEFAULT_CONFIG) -> str:
        return f"// {config.basepos_record_tag} {self.helper} {_join_triple(self.values)}"


@dataclass
class TranslationRecord:
    """A marker block record holding the nth scale 1 translation of a helper."""

    helper: str
    index: int
    values: Triple

    @classmethod
    def from_str(
        cls, line: str, config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["TranslationRecord"]:
        m = config.translation_record_re.match(line)
        if not m:
            return None
        return cls(
            m.group("name"),
            int(m.group("index")),
            (m.group("x"), m.group("y"), m.group("z")),
        )

    def to_str(self, config: ScaleConfig = DEFAULT_CONFIG) -> str:
        return (
            f"// {config.translation_record_tag} {self.helper} {self.index} "
            f"{_join_triple(self.values)}"
        )


VRDLine = Union[HelperMarker, RestPosition, Translation, RestRecord, TranslationRecord]


def classify_vrd_line(
    line: str, tracker: CommentTracker, config: ScaleConfig = DEFAULT_CONFIG
) -> Optional[VRDLine]:
    """
    Recognizes one VRD line. Marker records are tried first since they are
    comments themselves; after that commented lines are inert and the live
    shapes are tried in order. Returns None for unrecognized lines.
    """
    record = RestRecord.from_str(line, config) or TranslationRecord.from_str(line, config)
    if record is not None:
        return record
    if tracker.is_inert(line):
        return None
    return (
        HelperMarker.from_str(line, config)
        or RestPosition.from_str(line, config)
        or Translation.from_str(line, config)
    )
