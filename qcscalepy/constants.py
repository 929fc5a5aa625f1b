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
constants.py: Keywords, line-shape patterns and tunables for qcscalepy.

All regular expressions used to recognise QC and VRD lines live here, bundled
into the immutable ScaleConfig value which every rewriter accepts. Most callers
simply use DEFAULT_CONFIG.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Pattern

# --- Process exit codes ---
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_DECLINED = 2
EXIT_NO_INPUT_FILES = 3
EXIT_EMPTY_FILE = 4
EXIT_FILE_LOCKED = 5
EXIT_MARKER_MISMATCH = 6

# --- Scale limits ---
# Anything smaller than this is treated as zero
SCALE_ZERO_BOUNDARY = Decimal("0.001")
# Below this magnitude rounding artifacts become likely in the QC fields
SCALE_ROUNDING_ADVISORY = Decimal("0.025")
DEFAULT_SCALE = Decimal("1")

# Fixed precision of rewritten eyeball fields
EYE_DECIMALS = 3
# Minimum fractional digits kept when a baseline value has to be divided
NORMALIZED_MIN_DECIMALS = 6

# --- QC keywords ---
QC_SCALE_KEYWORD = "$scale"
QC_MODELNAME_KEYWORD = "$modelname"
QC_PROCEDURAL_KEYWORD = "$proceduralbones"
QC_EXTENSION = ".qc"
FLEX_EXTENSION = ".vta"
SCALE_SUFFIX_PREFIX = "_x"

# --- VRD keywords and normalization marker tags ---
VRD_HELPER_TAG = "<helper>"
VRD_BASEPOS_TAG = "<basepos>"
VRD_TRIGGER_TAG = "<trigger>"
MARKER_SENTINEL_TAG = "QCSCALE_NORMALIZATION_DATA"
MARKER_SENTINEL = f"// {MARKER_SENTINEL_TAG}"
MARKER_NOTE = (
    "// Scale 1 values of <basepos> and <trigger> translations. "
    "Delete this block to capture new values."
)
MARKER_BASEPOS_TAG = "QCSCALE_BASEPOS"
MARKER_TRANSLATION_TAG = "QCSCALE_TRANSLATION"

# --- Pattern building blocks ---
# A decimal literal, optionally signed and in exponent notation
NUM = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
# A plain decimal literal as accepted for the $scale argument
PLAIN_NUM = r"[-+]?(?:\d+\.?\d*|\.\d+)"
# A non-numeric token, optionally quoted
NAME = r'(?:"[^"]*"|(?![-+]?\.?\d)\S+)'

SCALE_RE = re.compile(r"^(?P<lead>\s*)(?P<keyword>\$scale)(?=\s|$)(?P<rest>.*)$", re.I)

EYEBALL_RE = re.compile(
    r"^(?P<lead>\s*(?:eyeball\s+)?)"
    rf"(?P<name>{NAME})\s+(?P<bone>{NAME})\s+"
    rf"(?P<x>{NUM})\s+(?P<y>{NUM})\s+(?P<z>{NUM})\s+"
    rf"(?P<material>{NAME})\s+(?P<diameter>{NUM})\s+(?P<angle>{NUM})\s+"
    rf"(?:(?P<pupil>{NUM})\s+)?"
    rf"(?P<iris_material>{NAME})\s+(?P<iris_scale>{NUM})"
    r"(?P<trail>(?:\s.*)?)$",
    re.I,
)

MODELNAME_RE = re.compile(
    r'^(?P<lead>\s*\$modelname\s+)(?:"(?P<qpath>[^"]*)"|(?P<path>[^\s"]+))(?P<trail>.*)$',
    re.I,
)

PROCEDURAL_RE = re.compile(
    r'^\s*\$proceduralbones\s+(?:"(?P<qpath>[^"]*)"|(?P<path>[^\s"]+))',
    re.I,
)

FLEX_RE = re.compile(r'[^\s"]+\.vta\b', re.I)

# The eyelid "split" height is a single model-space value $scale leaves alone
EYELID_SPLIT_RE = re.compile(rf"^\s*eyelid\b.*?\bsplit\s+(?P<value>{NUM})(?=\s|$)", re.I)

SCALE_SUFFIX_RE = re.compile(r"_x[-+]?\d+(?:\.\d+)?$", re.I)

HELPER_RE = re.compile(r"^\s*<helper>\s+(?P<name>\S+)", re.I)

BASEPOS_RE = re.compile(
    rf"^(?P<prefix>.*?<basepos>\s*)(?P<x>{NUM})\s+(?P<y>{NUM})\s+(?P<z>{NUM})"
    r"(?P<suffix>(?:\s.*)?)$",
    re.I,
)

TRIGGER_RE = re.compile(
    rf"^(?P<prefix>.*<trigger>.*?)\s+(?P<x>{NUM})\s+(?P<y>{NUM})\s+(?P<z>{NUM})"
    r"(?P<suffix>\s*)$",
    re.I,
)

BASEPOS_RECORD_RE = re.compile(
    rf"^\s*//\s*{MARKER_BASEPOS_TAG}\s+(?P<name>\S+)\s+"
    rf"(?P<x>{NUM})\s+(?P<y>{NUM})\s+(?P<z>{NUM})\s*$"
)

TRANSLATION_RECORD_RE = re.compile(
    rf"^\s*//\s*{MARKER_TRANSLATION_TAG}\s+(?P<name>\S+)\s+(?P<index>\d+)\s+"
    rf"(?P<x>{NUM})\s+(?P<y>{NUM})\s+(?P<z>{NUM})\s*$"
)


@dataclass(frozen=True)
class ScaleConfig:
    """
    Immutable bundle of line-shape patterns and tunables.

    Rewriters take one of these instead of reading module globals so that
    alternative keyword spellings or precisions can be supplied per call.
    """

    scale_keyword: str = QC_SCALE_KEYWORD
    marker_sentinel: str = MARKER_SENTINEL
    marker_sentinel_tag: str = MARKER_SENTINEL_TAG
    marker_note: str = MARKER_NOTE
    basepos_record_tag: str = MARKER_BASEPOS_TAG
    translation_record_tag: str = MARKER_TRANSLATION_TAG
    scale_suffix_prefix: str = SCALE_SUFFIX_PREFIX
    eye_decimals: int = EYE_DECIMALS
    normalized_min_decimals: int = NORMALIZED_MIN_DECIMALS
    zero_boundary: Decimal = SCALE_ZERO_BOUNDARY
    rounding_advisory: Decimal = SCALE_ROUNDING_ADVISORY
    scale_re: Pattern = field(default=SCALE_RE)
    eyeball_re: Pattern = field(default=EYEBALL_RE)
    modelname_re: Pattern = field(default=MODELNAME_RE)
    procedural_re: Pattern = field(default=PROCEDURAL_RE)
    flex_re: Pattern = field(default=FLEX_RE)
    eyelid_split_re: Pattern = field(default=EYELID_SPLIT_RE)
    scale_suffix_re: Pattern = field(default=SCALE_SUFFIX_RE)
    helper_re: Pattern = field(default=HELPER_RE)
    basepos_re: Pattern = field(default=BASEPOS_RE)
    trigger_re: Pattern = field(default=TRIGGER_RE)
    basepos_record_re: Pattern = field(default=BASEPOS_RECORD_RE)
    translation_record_re: Pattern = field(default=TRANSLATION_RECORD_RE)


DEFAULT_CONFIG = ScaleConfig()
