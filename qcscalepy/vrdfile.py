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
vrdfile.py: Rescaling procedural bone helper (.vrd) files.

$scale does not reach the <basepos> rest positions and <trigger> target
translations of a VRD file, and the file has no notion of the scale its
numbers were authored at. To rescale repeatedly without compounding
rounding errors, the first run divides every rest position and translation
by the scale in effect at the time and appends the results as a marker
block of // comment records:

    // QCSCALE_NORMALIZATION_DATA
    // Scale 1 values of <basepos> and <trigger> translations. ...
    // QCSCALE_BASEPOS <helper> <x> <y> <z>

    // QCSCALE_TRANSLATION <helper> <index> <x> <y> <z>

Every later run reads the baseline back from these records, ignores the
numbers currently in the file and writes baseline * new scale. Translations
are matched to their <trigger> lines by position within their helper.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Union

from .constants import DEFAULT_CONFIG, ScaleConfig
from .qcexceptions import MarkerMismatchError
from .qchelpers import (
    CommentTracker,
    Number,
    as_decimal,
    is_zero_triple,
    normalize_value,
    scale_num,
)
from .qcio import TextDocument, read_document, write_document
from .qclines import (
    HelperMarker,
    RestPosition,
    RestRecord,
    Translation,
    TranslationRecord,
    Triple,
    classify_vrd_line,
)


def has_marker_block(lines: List[str], config: ScaleConfig = DEFAULT_CONFIG) -> bool:
    """True if the normalization sentinel appears on a // comment line."""
    return any(
        line.lstrip().startswith("//") and config.marker_sentinel_tag in line
        for line in lines
    )


@dataclass
class BaselineStore:
    """
    Scale 1 values per helper.

    Attributes:
        rest: One rest position per helper.
        translations: The helper's <trigger> translations in file order.
    """

    rest: Dict[str, Triple] = field(default_factory=dict)
    translations: Dict[str, List[Triple]] = field(default_factory=dict)

    def knows(self, helper: str) -> bool:
        return helper in self.rest or helper in self.translations

    @property
    def translation_count(self) -> int:
        return sum(len(seq) for seq in self.translations.values())

    @classmethod
    def load(
        cls, lines: List[str], config: ScaleConfig = DEFAULT_CONFIG
    ) -> Optional["BaselineStore"]:
        """
        Reads the baseline from a file's marker block.

        Returns:
            The stored baseline, or None when the file has no marker block.

        Raises:
            MarkerMismatchError: If a helper's translation records skip an
                                 index, or the block holds no records at all.
        """
        if not has_marker_block(lines, config):
            return None
        store = cls()
        indexed: Dict[str, Dict[int, Triple]] = {}
        sentinel_lineno: Optional[int] = None
        for lineno, line in enumerate(lines, 1):
            if sentinel_lineno is None and has_marker_block([line], config):
                sentinel_lineno = lineno
            rest = RestRecord.from_str(line, config)
            if rest is not None:
                store.rest[rest.helper] = rest.values
                continue
            record = TranslationRecord.from_str(line, config)
            if record is not None:
                indexed.setdefault(record.helper, {})[record.index] = record.values
        for helper, by_index in indexed.items():
            sequence: List[Triple] = []
            for index in range(len(by_index)):
                if index not in by_index:
                    raise MarkerMismatchError(helper, index)
                sequence.append(by_index[index])
            store.translations[helper] = sequence
        if not store.rest and not store.translations:
            raise MarkerMismatchError(lineno=sentinel_lineno)
        return store

    def dump(self, config: ScaleConfig = DEFAULT_CONFIG) -> List[str]:
        """Serializes the baseline as marker block lines."""
        lines = [config.marker_sentinel, config.marker_note]
        lines += [RestRecord(h, v).to_str(config) for h, v in self.rest.items()]
        lines.append("")
        for helper, sequence in self.translations.items():
            lines += [
                TranslationRecord(helper, i, v).to_str(config)
                for i, v in enumerate(sequence)
            ]
        return lines


def capture_baseline(
    lines: List[str], previous_scale: Number, config: ScaleConfig = DEFAULT_CONFIG
) -> BaselineStore:
    """
    Builds a baseline from the live <basepos> and <trigger> lines of a file
    authored at `previous_scale`. Lines outside any helper and commented
    lines are ignored; a later <basepos> for a helper replaces an earlier one.
    """
    store = BaselineStore()
    tracker = CommentTracker()
    helper: Optional[str] = None
    min_places = config.normalized_min_decimals

    def normalized(values: Triple) -> Triple:
        x, y, z = (normalize_value(v, previous_scale, min_places) for v in values)
        return (x, y, z)

    for line in lines:
        shape = classify_vrd_line(line, tracker, config)
        if isinstance(shape, HelperMarker):
            helper = shape.name
        elif helper is None:
            continue
        elif isinstance(shape, RestPosition):
            store.rest[helper] = normalized(shape.values)
        elif isinstance(shape, Translation):
            store.translations.setdefault(helper, []).append(normalized(shape.values))
    return store


@dataclass
class VRDResult:
    """
    Outcome of rescaling a VRD file.

    Attributes:
        lines: The rewritten lines.
        scale: The absolute scale applied.
        first_run: True if the baseline was captured on this run.
        marker_written: True if a marker block was appended.
        rest_count: Live <basepos> lines found.
        translation_count: Live <trigger> lines found.
        nonzero_translation_count: <trigger> lines with a non-zero translation.
    """

    lines: List[str]
    scale: Decimal
    first_run: bool = False
    marker_written: bool = False
    rest_count: int = 0
    translation_count: int = 0
    nonzero_translation_count: int = 0
    store: Optional[BaselineStore] = None

    @property
    def no_rest_positions(self) -> bool:
        return self.rest_count == 0

    @property
    def all_translations_zero(self) -> bool:
        return self.translation_count > 0 and self.nonzero_translation_count == 0


class VRDRescaler:
    """
    Applies an absolute scale to the rest positions and trigger translations
    of a VRD file, capturing or reusing the normalization marker block.
    """

    def __init__(self, config: ScaleConfig = DEFAULT_CONFIG):
        self.config = config

    def _scaled(self, values: Triple, scale: Decimal) -> Triple:
        x, y, z = (scale_num(v, scale) for v in values)
        return (x, y, z)

    def rewrite(
        self, lines: List[str], store: BaselineStore, scale: Number
    ) -> VRDResult:
        """
        Re-derives rest positions and translations from `store` at `scale`.

        Marker records and lines of helpers the store does not know are
        copied unchanged. Translations are consumed in order per helper.

        Raises:
            MarkerMismatchError: If a helper has more <trigger> lines than
                                 stored translations.
        """
        new_scale = as_decimal(scale)
        result = VRDResult(lines=[], scale=new_scale, store=store)
        tracker = CommentTracker()
        helper: Optional[str] = None
        cursor: Dict[str, int] = defaultdict(int)

        for lineno, line in enumerate(lines, 1):
            shape = classify_vrd_line(line, tracker, self.config)
            new_line = line
            if isinstance(shape, HelperMarker):
                helper = shape.name
            elif isinstance(shape, RestPosition):
                result.rest_count += 1
                if helper is not None and helper in store.rest:
                    new_line = shape.rebuild(self._scaled(store.rest[helper], new_scale))
            elif isinstance(shape, Translation):
                result.translation_count += 1
                values = shape.values
                if helper is not None and store.knows(helper):
                    sequence = store.translations.get(helper, [])
                    index = cursor[helper]
                    if index >= len(sequence):
                        raise MarkerMismatchError(helper, index, lineno)
                    cursor[helper] += 1
                    values = sequence[index]
                    if not is_zero_triple(values):
                        new_line = shape.rebuild(self._scaled(values, new_scale))
                if not is_zero_triple(values):
                    result.nonzero_translation_count += 1
            result.lines.append(new_line)
        return result

    def rescale(
        self, lines: List[str], new_scale: Number, previous_scale: Number
    ) -> VRDResult:
        """
        Rescales VRD lines to `new_scale`.

        Without a marker block the baseline is captured from the file
        assuming it was authored at `previous_scale`, and a marker block is
        appended. With a marker block its records are the only source of
        values and `previous_scale` is not used. A file without any
        <basepos> line on a first run is left unchanged.
        """
        store = BaselineStore.load(lines, self.config)
        if store is not None:
            return self.rewrite(lines, store, new_scale)

        store = capture_baseline(lines, previous_scale, self.config)
        if not store.rest:
            result = self.rewrite(lines, BaselineStore(), new_scale)
            result.first_run = True
            result.store = None
            return result

        result = self.rewrite(lines, store, new_scale)
        result.first_run = True
        if result.lines and result.lines[-1].strip():
            result.lines.append("")
        result.lines += store.dump(self.config)
        result.marker_written = True
        return result

    def rescale_file(
        self,
        path: Union[str, Path],
        new_scale: Number,
        previous_scale: Number,
        write: bool = True,
    ) -> VRDResult:
        """Reads a VRD file, rescales it and writes it back when anything changed."""
        document = read_document(path)
        return self.rescale_document(path, document, new_scale, previous_scale, write)

    def rescale_document(
        self,
        path: Union[str, Path],
        document: TextDocument,
        new_scale: Number,
        previous_scale: Number,
        write: bool = True,
    ) -> VRDResult:
        """
        Rescales an already read VRD document and writes it to `path` when
        anything changed. Lets callers check the file is readable before
        they modify anything else.
        """
        result = self.rescale(document.lines, new_scale, previous_scale)
        if write and result.lines != document.lines:
            write_document(path, document.replaced(result.lines))
        return result
