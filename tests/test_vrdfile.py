# tests/test_vrdfile.py

from pathlib import Path

import pytest

from qcscalepy.constants import MARKER_NOTE, MARKER_SENTINEL
from qcscalepy.qcexceptions import MarkerMismatchError
from qcscalepy.qcio import read_document
from qcscalepy.vrdfile import (
    BaselineStore,
    VRDRescaler,
    capture_baseline,
    has_marker_block,
)

TEST_FILES = Path(__file__).parent / "test_files"


def sample_lines():
    return read_document(TEST_FILES / "sample.vrd").lines


def first_run(scale="2"):
    return VRDRescaler().rescale(sample_lines(), scale, 1)


def test_first_run_scales_and_writes_marker():
    original = sample_lines()
    result = first_run()
    assert result.first_run
    assert result.marker_written
    assert result.rest_count == 2
    assert result.translation_count == 4
    assert result.nonzero_translation_count == 3
    assert not result.all_translations_zero

    lines = result.lines
    assert lines[3] == "<basepos> 12.000000 0.000000 24.000000"
    assert lines[6] == "<trigger> 90 0 0 0 0 0 0 2.000000 0.000000 0.000000"
    assert lines[7] == "<trigger> 90 45 0 0 0 0 0 0.000000 4.000000 0.000000"
    assert lines[8] == "<trigger> 90 -45 0 0 0 0 0 0.000000 0.000000 -6.000000"
    assert lines[11] == "<basepos> -12.000000 0.000000 24.000000"
    assert lines[12] == original[12]
    # untouched lines
    assert lines[:3] == original[:3]
    assert lines[4:6] == original[4:6]

    assert lines[len(original):] == [
        "",
        MARKER_SENTINEL,
        MARKER_NOTE,
        "// QCSCALE_BASEPOS bip_hand_L 6.000000 0.000000 12.000000",
        "// QCSCALE_BASEPOS bip_hand_R -6.000000 0.000000 12.000000",
        "",
        "// QCSCALE_TRANSLATION bip_hand_L 0 1.000000 0.000000 0.000000",
        "// QCSCALE_TRANSLATION bip_hand_L 1 0.000000 2.000000 0.000000",
        "// QCSCALE_TRANSLATION bip_hand_L 2 0.000000 0.000000 -3.000000",
        "// QCSCALE_TRANSLATION bip_hand_R 0 0.000000 0.000000 0.000000",
    ]


def test_later_runs_use_marker_values():
    rescaler = VRDRescaler()
    scaled = first_run().lines
    result = rescaler.rescale(scaled, "0.5", 2)
    assert not result.first_run
    assert not result.marker_written
    assert result.lines[3] == "<basepos> 3.000000 0.000000 6.000000"
    assert result.lines[6].endswith(" 0.500000 0.000000 0.000000")
    assert result.lines[7].endswith(" 0.000000 1.000000 0.000000")
    assert result.lines[8].endswith(" 0.000000 0.000000 -1.500000")
    assert result.lines.count(MARKER_SENTINEL) == 1

    # the live values are ignored once the block exists
    tampered = list(scaled)
    tampered[3] = "<basepos> 99 99 99"
    assert rescaler.rescale(tampered, "0.5", 2).lines == result.lines


def test_back_to_scale_one_restores_original():
    original = sample_lines()
    scaled = first_run().lines
    restored = VRDRescaler().rescale(scaled, 1, 2).lines
    assert restored[: len(original)] == original


def test_negative_scale_keeps_sign_column():
    result = first_run("-1")
    assert result.lines[11] == "<basepos>  6.000000 0.000000 -12.000000"
    assert result.lines[3] == "<basepos> -6.000000 0.000000 -12.000000"


def test_first_run_normalizes_by_previous_scale():
    lines = ["<helper> h", "<basepos> 6 0 12"]
    result = VRDRescaler().rescale(lines, 3, 2)
    assert result.lines[1] == "<basepos> 9.000000 0.000000 18.000000"
    assert "// QCSCALE_BASEPOS h 3.000000 0.000000 6.000000" in result.lines


def test_translations_follow_line_order():
    scaled = first_run().lines
    swapped = list(scaled)
    swapped[6], swapped[7] = scaled[7], scaled[6]
    result = VRDRescaler().rescale(swapped, 3, 2)
    assert result.lines[6] == "<trigger> 90 45 0 0 0 0 0 3.000000 0.000000 0.000000"
    assert result.lines[7] == "<trigger> 90 0 0 0 0 0 0 0.000000 6.000000 0.000000"


def test_extra_trigger_is_a_mismatch():
    scaled = first_run().lines
    scaled.insert(13, "<trigger> 90 0 0 0 0 0 0 0.000000 1.000000 0.000000")
    with pytest.raises(MarkerMismatchError) as excinfo:
        VRDRescaler().rescale(scaled, 3, 2)
    assert excinfo.value.helper == "bip_hand_R"
    assert excinfo.value.index == 1
    assert excinfo.value.lineno == 14
    assert excinfo.value.exit_code == 6


def test_unknown_helper_is_copied():
    scaled = first_run().lines
    scaled[13:13] = ["<helper> extra", "<basepos> 1 1 1"]
    result = VRDRescaler().rescale(scaled, 3, 2)
    assert result.lines[14] == "<basepos> 1 1 1"
    assert result.rest_count == 3


def test_file_without_rest_positions_is_untouched():
    lines = ["<helper> h", "<display> 1 1 1"]
    result = VRDRescaler().rescale(lines, 2, 1)
    assert result.lines == lines
    assert result.no_rest_positions
    assert not result.marker_written


def test_all_zero_translations():
    lines = ["<helper> h", "<basepos> 1 1 1", "<trigger> 90 0 0 0 0 0 0 0 0 0"]
    result = VRDRescaler().rescale(lines, 2, 1)
    assert result.all_translations_zero
    assert result.lines[2] == lines[2]


def test_commented_lines_are_ignored():
    lines = ["<helper> h", "// <basepos> 1 1 1", "<basepos> 2 2 2", "/*", "<basepos> 5 5 5", "*/"]
    store = capture_baseline(lines, 1)
    assert store.rest == {"h": ("2.000000", "2.000000", "2.000000")}
    result = VRDRescaler().rescale(lines, 2, 1)
    assert result.lines[1:6] == [
        "// <basepos> 1 1 1",
        "<basepos> 4.000000 4.000000 4.000000",
        "/*",
        "<basepos> 5 5 5",
        "*/",
    ]


def test_integer_values_keep_precision():
    lines = ["<helper> h", "<basepos> 1 0 3", "<trigger> 90 0 0 0 0 0 0 1 0 0"]
    result = VRDRescaler().rescale(lines, "0.4", 1)
    assert result.lines[1] == "<basepos> 0.400000 0.000000 1.200000"
    assert result.lines[2] == "<trigger> 90 0 0 0 0 0 0 0.400000 0.000000 0.000000"
    assert result.nonzero_translation_count == 1
    assert "// QCSCALE_BASEPOS h 1.000000 0.000000 3.000000" in result.lines

    # a previous scale barely off 1 gives the same precision
    nearby = VRDRescaler().rescale(lines, "0.4", "1.0001")
    assert nearby.lines[1] == "<basepos> 0.399960 0.000000 1.199880"


def test_store_load_and_gaps():
    assert BaselineStore.load(sample_lines()) is None
    scaled = first_run().lines
    assert has_marker_block(scaled)
    store = BaselineStore.load(scaled)
    assert store.rest["bip_hand_L"] == ("6.000000", "0.000000", "12.000000")
    assert store.translation_count == 4
    assert store.dump() == scaled[len(sample_lines()) + 1 :]

    gapped = [
        MARKER_SENTINEL,
        "// QCSCALE_TRANSLATION h 0 1 0 0",
        "// QCSCALE_TRANSLATION h 2 0 0 1",
    ]
    with pytest.raises(MarkerMismatchError) as excinfo:
        BaselineStore.load(gapped)
    assert excinfo.value.index == 1


def test_marker_without_records_is_a_mismatch():
    lines = ["<helper> h", "<basepos> 1 1 1", "", MARKER_SENTINEL, MARKER_NOTE]
    with pytest.raises(MarkerMismatchError) as excinfo:
        VRDRescaler().rescale(lines, 2, 1)
    assert excinfo.value.helper is None
    assert excinfo.value.lineno == 4
    assert "holds no records" in str(excinfo.value)


def test_rescale_file_keeps_crlf(tmp_path):
    vrd = tmp_path / "bones.vrd"
    original = (TEST_FILES / "sample.vrd").read_bytes().replace(b"\n", b"\r\n")
    vrd.write_bytes(original)

    rescaler = VRDRescaler()
    result = rescaler.rescale_file(vrd, 2, 1, write=False)
    assert result.marker_written
    assert vrd.read_bytes() == original

    rescaler.rescale_file(vrd, 2, 1)
    data = vrd.read_bytes()
    assert data.count(b"\n") == data.count(b"\r\n")
    assert b"<basepos> 12.000000 0.000000 24.000000\r\n" in data
    assert data.endswith(b"QCSCALE_TRANSLATION bip_hand_R 0 0.000000 0.000000 0.000000\r\n")
