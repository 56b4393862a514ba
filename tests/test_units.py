"""Tests for springpath/units.py and springpath/unit_conversion.py."""
import pytest
from springpath.units import (
    FractionOfViewport, PhysicalLength, CompositeSum, DerivedFromSibling,
    UnitReferenceError, make_unit, as_unit_value, resolve,
)
from springpath.unit_conversion import convert_units, to_canonical, validate_unit
from springpath.viewport import ViewportContext


@pytest.fixture
def wide_context():
    """200 x 100 device units; 0.5 mm per unit on x, 0.25 mm per unit on y."""
    return ViewportContext(origin=(0.0, 0.0), extent=(200.0, 100.0), device_to_physical_scale=(0.5, 0.25))


# --- unit conversion ---

def test_convert_cm_to_mm():
    assert abs(convert_units(2.0, "cm", "mm") - 20.0) < 1e-12


def test_convert_inch_to_points():
    assert abs(convert_units(1.0, "in", "pt") - 72.27) < 1e-9


def test_to_canonical_bigpts():
    assert abs(to_canonical(72.0, "bigpts") - 25.4) < 1e-9


def test_validate_unit_rejects_unknown():
    with pytest.raises(ValueError, match="furlong"):
        validate_unit("furlong")


# --- resolution ---

def test_fraction_resolves_per_axis(wide_context):
    half = FractionOfViewport(0.5)
    assert abs(resolve(half, wide_context, "x") - 50.0) < 1e-12
    assert abs(resolve(half, wide_context, "y") - 12.5) < 1e-12


def test_physical_length_ignores_viewport(wide_context):
    small = ViewportContext(origin=(5.0, 5.0), extent=(10.0, 10.0), device_to_physical_scale=(3.0, 3.0))
    length = PhysicalLength(2.0, "cm")
    assert resolve(length, wide_context, "x") == resolve(length, small, "y") == 20.0


def test_composite_sum_distributes(wide_context):
    value = FractionOfViewport(0.5) + PhysicalLength(1.0, "cm")
    assert isinstance(value, CompositeSum)
    assert abs(resolve(value, wide_context, "x") - 60.0) < 1e-12
    assert abs(resolve(value, wide_context, "y") - 22.5) < 1e-12


def test_difference_of_kinds(wide_context):
    value = FractionOfViewport(0.5) - PhysicalLength(5.0, "mm")
    assert abs(resolve(value, wide_context, "x") - 45.0) < 1e-12


def test_nested_sums_flatten(wide_context):
    value = (FractionOfViewport(0.1) + PhysicalLength(1.0, "mm")) + (FractionOfViewport(0.2) + PhysicalLength(1.0, "cm"))
    assert isinstance(value, CompositeSum)
    assert len(value.terms) == 3
    assert abs(resolve(value, wide_context, "x") - (30.0 + 1.0 + 10.0)) < 1e-9


def test_same_kinds_fold():
    assert FractionOfViewport(0.25) + FractionOfViewport(0.25) == FractionOfViewport(0.5)
    assert PhysicalLength(1.0, "cm") + PhysicalLength(2.0, "cm") == PhysicalLength(3.0, "cm")


def test_mixed_physical_units_resolve_to_mm(wide_context):
    value = PhysicalLength(1.0, "cm") + PhysicalLength(5.0, "mm")
    assert abs(resolve(value, wide_context) - 15.0) < 1e-12


def test_scalar_arithmetic():
    assert 2 * PhysicalLength(1.0, "in") == PhysicalLength(2.0, "in")
    assert FractionOfViewport(0.5) / 2 == FractionOfViewport(0.25)
    assert -FractionOfViewport(0.5) == FractionOfViewport(-0.5)


def test_sum_builtin(wide_context):
    total = sum([PhysicalLength(1.0, "mm"), PhysicalLength(2.0, "mm"), FractionOfViewport(0.1)])
    assert abs(resolve(total, wide_context, "x") - 13.0) < 1e-12


def test_unknown_physical_unit():
    with pytest.raises(ValueError):
        PhysicalLength(1.0, "parsec")


# --- derived values ---

def test_derived_from_sibling(wide_context):
    siblings = {"gap": PhysicalLength(4.0, "mm")}
    assert abs(resolve(DerivedFromSibling("gap", magnitude=0.5), wide_context, "x", siblings) - 2.0) < 1e-12


def test_derived_axis_override(wide_context):
    siblings = {"height": FractionOfViewport(1.0)}
    assert abs(resolve(DerivedFromSibling("height", axis="y"), wide_context, "x", siblings) - 25.0) < 1e-12


def test_derived_absent_sibling(wide_context):
    with pytest.raises(UnitReferenceError, match="gap"):
        resolve(DerivedFromSibling("gap"), wide_context, "x", {})


def test_derived_without_siblings(wide_context):
    with pytest.raises(UnitReferenceError):
        resolve(DerivedFromSibling("gap") + PhysicalLength(1.0, "mm"), wide_context, "x")


def test_derived_cycle(wide_context):
    siblings = {"a": DerivedFromSibling("b"), "b": DerivedFromSibling("a")}
    with pytest.raises(UnitReferenceError, match="circular"):
        resolve(DerivedFromSibling("a"), wide_context, "x", siblings)


# --- construction helpers ---

def test_make_unit():
    assert make_unit(0.3, "npc") == FractionOfViewport(0.3)
    assert make_unit(3, "pt") == PhysicalLength(3.0, "pt")


def test_as_unit_value_defaults_and_passthrough():
    assert as_unit_value(0.3) == FractionOfViewport(0.3)
    assert as_unit_value(0.3, "cm") == PhysicalLength(0.3, "cm")
    length = PhysicalLength(1.0, "in")
    assert as_unit_value(length, "npc") is length
