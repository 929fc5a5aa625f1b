# tests/test_qchelpers.py

from decimal import Decimal

import pytest

from qcscalepy.qchelpers import (
    CommentTracker,
    as_decimal,
    decimal_places,
    detect_newline,
    display_factor,
    format_scale_value,
    is_zero_triple,
    normalize_value,
    scale_num,
)


def test_decimal_places():
    assert decimal_places("1.50") == 2
    assert decimal_places("12") == 0
    assert decimal_places("-0.125") == 3
    assert decimal_places("1.5e-05") == 6
    with pytest.raises(ValueError):
        decimal_places("abc")


def test_scale_num_keeps_decimal_width():
    assert scale_num("1.50", 2) == "3.00"
    assert scale_num("-0.5", 2) == "-1.0"
    assert scale_num("3", 0.5) == "2"  # 1.5 rounds half up
    assert scale_num("1.5e-05", 2) == "0.000030"
    assert scale_num("0.333333", Decimal("3")) == "0.999999"


def test_scale_num_fixed_decimals():
    assert scale_num("1.0", 2, decimals=3) == "2.000"
    assert scale_num("66.170", 1.5, decimals=3) == "99.255"


def test_scale_num_sign_becomes_space():
    assert scale_num("-0.5", -2, decimals=2) == " 1.00"
    assert scale_num("-6.000000", -1) == " 6.000000"
    # A negative zero result keeps the sign column too
    assert scale_num("-0.001", 0.1) == " 0.000"
    assert scale_num("0.000000", -2) == "0.000000"


def test_format_scale_value():
    assert format_scale_value(Decimal("2.000")) == "2"
    assert format_scale_value("0.50") == "0.5"
    assert format_scale_value(Decimal("-1.250")) == "-1.25"
    assert format_scale_value(10) == "10"
    assert format_scale_value("-0.0") == "0"
    assert display_factor(Decimal(2) / Decimal(3)) == "0.667"


def test_normalize_value():
    assert normalize_value("6", 1) == "6.000000"
    assert normalize_value("-0.5", 1) == "-0.500000"
    assert normalize_value("1.12345678", 1) == "1.12345678"
    assert normalize_value("6", 2) == "3.000000"
    assert normalize_value("1.5", Decimal("0.5")) == "3.000000"
    assert normalize_value("-6", -2) == "3.000000"
    assert normalize_value("1.12345678", 2) == "0.56172839"


def test_as_decimal_and_zero_triple():
    assert as_decimal(0.1) == Decimal("0.1")
    assert as_decimal(" 2 ") == Decimal("2")
    with pytest.raises(ValueError):
        as_decimal("nan")
    assert is_zero_triple(("0.000000", "-0", "0e3"))
    assert not is_zero_triple(("0", "0", "0.001"))


def test_detect_newline():
    assert detect_newline("a\nb\r\nc\n") == "\r\n"
    assert detect_newline("a\nb\n") == "\n"
    assert detect_newline("") == "\n"


def test_comment_tracker():
    lines = [
        "$scale 1",
        "// eyeball righteye bone 0 0 0 mat 1 4 iris 0.6",
        "/* start",
        "inside",
        "end */",
        "live",
        "code /* trailing",
        "still */ x",
        "after",
        "/* one line */",
        "x // a /* b",
        "next",
    ]
    tracker = CommentTracker()
    inert = [tracker.is_inert(line) for line in lines]
    assert inert == [
        False,
        True,
        True,
        True,
        True,
        False,
        False,
        True,
        False,
        True,
        False,
        False,
    ]
    assert not tracker.in_block
