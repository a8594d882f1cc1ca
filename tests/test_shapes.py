"""
Shape registry - profiles, variant detection, field rules.

Tests:
1-4.   Registry contents + fallback profile
5-9.   Variant detection / shape resolution
10-14. FieldRule validation and dropdown options
"""

import pytest

from fancycalc.shapes.profiles import GRADE_LETTERS, FieldRule, ShapeProfile, grade_rule
from fancycalc.shapes.registry import (
    COMMON_FIELDS,
    SHAPE_LIBRARY,
    SHAPE_VARIANTS,
    get_profile,
    has_profile,
    list_profiles,
    resolve_shape_name,
)


# ============================================================
# Registry
# ============================================================

def test_registry_has_all_six_profiles():
    for name in ["Pear 8 Mains", "Pear 4 Mains", "Oval 8 Mains",
                 "Oval 4 Mains", "Marq 8 Mains", "Marq 4 Mains"]:
        assert name in list_profiles()
        assert has_profile(name)
        assert SHAPE_LIBRARY[name].name == name


def test_every_profile_has_common_fields():
    for profile in SHAPE_LIBRARY.values():
        for field_name in COMMON_FIELDS:
            assert field_name in profile.fields, f"{profile.name} missing {field_name}"


def test_pavilion_curve_source_differs_per_shape():
    """The pavilion curve is read from a different export key per variant."""
    assert SHAPE_LIBRARY["Pear 8 Mains"].rule("pavilionCurve").source_key == "PAVILION_FANCY_CURVE_ANGLE_DEG"
    assert SHAPE_LIBRARY["Pear 4 Mains"].rule("pavilionCurve").source_key == "PAVILION_FANCY_HEAD_ANGLE_DEG"
    assert SHAPE_LIBRARY["Oval 4 Mains"].rule("pavilionCurve").source_key == "PAVILION_FANCY_WING_ANGLE_DEG"
    assert SHAPE_LIBRARY["Marq 4 Mains"].rule("pavilionCurve").source_key == "PAVILION_FANCY_WING_ANGLE_DEG"
    assert SHAPE_LIBRARY["Marq 8 Mains"].rule("pavilionCurve").rounding == 0.1


def test_unknown_shape_falls_back_to_default_profile():
    """Unknown or missing shape names never raise - Pear 8 Mains is used."""
    assert get_profile("Round Brilliant").name == "Pear 8 Mains"
    assert get_profile(None).name == "Pear 8 Mains"
    assert get_profile("Oval 4 Mains").name == "Oval 4 Mains"
    assert not has_profile("Round Brilliant")


def test_profile_fields_are_read_only():
    profile = SHAPE_LIBRARY["Pear 8 Mains"]
    with pytest.raises(TypeError):
        profile.fields["tableWidth"] = FieldRule(min=0, max=1, step=1)


# ============================================================
# Variant detection
# ============================================================

def test_pear_with_curve_angle_is_eight_mains():
    data = {"SHAPE": "Pear", "PAVILION_FANCY_CURVE_ANGLE_DEG": "12"}
    assert resolve_shape_name(data) == "Pear 8 Mains"


def test_pear_without_curve_angle_is_four_mains():
    data = {"SHAPE": "Pear", "PAVILION_FANCY_HEAD_ANGLE_DEG": "12"}
    assert resolve_shape_name(data) == "Pear 4 Mains"


def test_detectors_cover_oval_and_marquise():
    assert set(SHAPE_VARIANTS) == {"Pear", "Oval", "Marquise"}
    assert SHAPE_VARIANTS["Oval"]({"PAVILION_FANCY_CURVE_ANGLE_DEG": ""}) == "Oval 8 Mains"
    assert SHAPE_VARIANTS["Oval"]({}) == "Oval 4 Mains"
    assert SHAPE_VARIANTS["Marquise"]({"PAVILION_FANCY_CURVE_ANGLE_DEG": "1"}) == "Marq 8 Mains"
    assert SHAPE_VARIANTS["Marquise"]({}) == "Marq 4 Mains"


def test_explicit_shape_overrides_export():
    data = {"SHAPE": "Pear", "PAVILION_FANCY_CURVE_ANGLE_DEG": "12"}
    assert resolve_shape_name(data, "Oval") == "Oval 8 Mains"
    assert resolve_shape_name(data, "Marq 4 Mains") == "Marq 4 Mains"


def test_shape_without_detector_is_used_as_is():
    assert resolve_shape_name({"SHAPE": " Oval 4 Mains "}) == "Oval 4 Mains"
    assert resolve_shape_name({"SHAPE": "Princess"}) == "Princess"
    assert resolve_shape_name({}) is None


# ============================================================
# Field rules
# ============================================================

def test_field_rule_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        FieldRule(min=10, max=5, step=1)


def test_numeric_field_rule_needs_positive_step():
    with pytest.raises(ValueError):
        FieldRule(min=0, max=5, step=0)
    # Non-numeric grade rules have no step
    rule = grade_rule("AZIMUTH")
    assert rule.step == 0
    assert not rule.numeric


def test_options_enumerate_min_to_max():
    rule = COMMON_FIELDS["tableWidth"]
    options = rule.options()
    assert options[0] == "48"
    assert options[-1] == "72"
    assert len(options) == 25


def test_options_drop_trailing_zeros_without_drift():
    options = COMMON_FIELDS["halvesAngle"].options()
    assert options[0] == "35.1"
    assert options[1] == "35.2"
    assert options[-1] == "48"
    assert len(options) == 130
    assert COMMON_FIELDS["pavilionDepth"].options()[:3] == ["35", "35.2", "35.4"]


def test_grade_rule_options_are_letters():
    assert grade_rule("SYMMETRY").options() == list(GRADE_LETTERS) == ["EX", "VG", "G", "F"]


def test_custom_profile_equality_ignores_hook():
    a = ShapeProfile(name="Test", fields={"x": FieldRule(min=0, max=1, step=1)})
    b = ShapeProfile(name="Test", fields={"x": FieldRule(min=0, max=1, step=1)},
                     post_process=lambda m, f: {})
    assert a == b
