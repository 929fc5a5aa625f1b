# tests/test_qclines.py

from decimal import Decimal

from qcscalepy.qchelpers import CommentTracker
from qcscalepy.qclines import (
    EyeballLine,
    HelperMarker,
    ModelNameLine,
    RestPosition,
    RestRecord,
    ScaleDirective,
    Translation,
    TranslationRecord,
    classify_vrd_line,
)

EYE_LINE = (
    'eyeball righteye "ValveBiped.Bip01_Head1" -1.160 -3.350 66.170 '
    '"eyeball_r" 1.000 4.000 "iris_unused" 0.634'
)


def test_scale_directive():
    d = ScaleDirective.from_str("$scale 2.5")
    assert d is not None
    assert d.value == Decimal("2.5")
    assert d.with_value("3") == "$scale 3"

    d = ScaleDirective.from_str("  $SCALE 1.0 // note")
    assert d.with_value("2") == "  $SCALE 2 // note"

    assert ScaleDirective.from_str("$scale abc").value is None
    assert ScaleDirective.from_str("$scale").value is None
    assert ScaleDirective.from_str("$scalex 1") is None
    assert ScaleDirective.from_str('$modelname "a.mdl"') is None


def test_eyeball_line():
    eye = EyeballLine.from_str(EYE_LINE)
    assert eye is not None
    assert eye.name == "righteye"
    assert eye.bone == '"ValveBiped.Bip01_Head1"'
    assert eye.position == ("-1.160", "-3.350", "66.170")
    assert eye.material == '"eyeball_r"'
    assert eye.diameter == "1.000"
    assert eye.angle == "4.000"
    assert eye.pupil is None
    assert eye.iris_material == '"iris_unused"'
    assert eye.iris_scale == "0.634"
    assert str(eye) == EYE_LINE


def test_eyeball_line_without_keyword():
    line = "lefteye eyes 1.0 2.0 3.0 eyemat 1.000 7.5 0.500 irismat 1.000"
    eye = EyeballLine.from_str(line)
    assert eye is not None
    assert eye.name == "lefteye"
    assert eye.bone == "eyes"
    assert eye.pupil == "0.500"
    assert eye.iris_material == "irismat"
    assert eye.iris_scale == "1.000"
    assert str(eye) == line


def test_eyeball_trailing_text_kept():
    eye = EyeballLine.from_str(EYE_LINE + "   // right eye   ")
    assert eye.trail == "   // right eye   "
    assert str(eye) == EYE_LINE + "   // right eye"


def test_not_eyeballs():
    assert EyeballLine.from_str("$scale 2") is None
    assert EyeballLine.from_str('$sequence idle "idle.smd" fps 30') is None
    assert (
        EyeballLine.from_str(
            'eyelid upper_right "eyes.vta" lowerer 1 -0.19 neutral 0 0.13 '
            "raiser 2 0.27 split 0.1 eyeball righteye"
        )
        is None
    )


def test_modelname_line():
    m = ModelNameLine.from_str('$modelname "props/crate01.mdl"')
    assert m.path == "props/crate01.mdl"
    assert m.quoted
    assert m.with_path("props/crate01_x2.mdl") == '$modelname "props/crate01_x2.mdl"'

    m = ModelNameLine.from_str("$ModelName props\\crate.mdl // c")
    assert m.path == "props\\crate.mdl"
    assert not m.quoted
    assert m.with_path("x.mdl") == "$ModelName x.mdl // c"


def test_vrd_shapes():
    h = HelperMarker.from_str("<helper> bip_hand_L bip_lowerArm_L bip_hand_L")
    assert h.name == "bip_hand_L"

    r = RestPosition.from_str("<basepos> 6 0 12")
    assert r.values == ("6", "0", "12")
    assert r.rebuild(("12", "0", "24")) == "<basepos> 12 0 24"

    r = RestPosition.from_str("\t<basepos> 1.5 -2.0 0.0 // x")
    assert r.suffix == " // x"
    assert r.rebuild(("3.0", "-4.0", "0.0")) == "\t<basepos> 3.0 -4.0 0.0 // x"

    t = Translation.from_str("<trigger> 90 0 0 0 0 0 0 1.5 -2 3.25e-01")
    assert t.prefix == "<trigger> 90 0 0 0 0 0 0"
    assert t.values == ("1.5", "-2", "3.25e-01")
    assert t.rebuild(("3.0", "-4", "0.65")) == "<trigger> 90 0 0 0 0 0 0 3.0 -4 0.65"

    assert Translation.from_str("<display> 1.5 3 3 100") is None
    assert RestPosition.from_str("<rotateaxis> 1 0 0") is None


def test_marker_records():
    line = "// QCSCALE_BASEPOS bip_hand_L 3.000000 0.000000 -6.000000"
    rec = RestRecord.from_str(line)
    assert rec.helper == "bip_hand_L"
    assert rec.values == ("3.000000", "0.000000", "-6.000000")
    assert rec.to_str() == line

    line = "// QCSCALE_TRANSLATION bip_hand_L 2 0 0 1.5e-05"
    rec = TranslationRecord.from_str(line)
    assert rec.index == 2
    assert rec.values == ("0", "0", "1.5e-05")
    assert rec.to_str() == line

    assert RestRecord.from_str("<basepos> 1 2 3") is None
    assert TranslationRecord.from_str("// QCSCALE_TRANSLATION a 1 2") is None


def test_classify_vrd_line():
    tracker = CommentTracker()
    assert isinstance(
        classify_vrd_line("// QCSCALE_BASEPOS a 1 2 3", tracker), RestRecord
    )
    assert classify_vrd_line("// <basepos> 1 2 3", tracker) is None
    assert isinstance(classify_vrd_line("<helper> a", tracker), HelperMarker)
    assert isinstance(classify_vrd_line("<basepos> 1 2 3", tracker), RestPosition)
    assert isinstance(
        classify_vrd_line("<trigger> 90 0 0 0 0 0 0 1 2 3", tracker), Translation
    )
    assert classify_vrd_line("/*", tracker) is None
    assert classify_vrd_line("<basepos> 1 2 3", tracker) is None
    assert classify_vrd_line("*/", tracker) is None
    assert classify_vrd_line("<display> 1 2 3 4", tracker) is None
