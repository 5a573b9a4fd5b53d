"""
Tests for Value conversion and rendering.
"""

import dataclasses
import itertools

import pytest

from conftest import StaticRates
from unit_converter.entities import (
    CurrencyUnit,
    LengthUnit,
    MassUnit,
    Unit,
    Value,
    format_magnitude,
    units_by_family,
)
from unit_converter.entities.units import UnitFamily
from unit_converter.errors import (
    ConversionError,
    CurrencyRateError,
    EmptyValueError,
    IncompatibleUnitsError,
)

METER = Unit.of(LengthUnit.METER)
KILOMETER = Unit.of(LengthUnit.KILOMETER)
KILOGRAM = Unit.of(MassUnit.KILOGRAM)
GRAM = Unit.of(MassUnit.GRAM)
USD = Unit.of(CurrencyUnit.USD)
EUR = Unit.of(CurrencyUnit.EUR)

LINEAR_PAIRS = [
    pair
    for family in (UnitFamily.LENGTH, UnitFamily.MASS)
    for pair in itertools.product(units_by_family()[family], repeat=2)
]


def test_meters_to_kilometers():
    """100 m is 0.1 km."""
    result = Value(100, METER).convert_to(KILOMETER)

    assert result.magnitude == 0.1
    assert result.unit.member is LengthUnit.KILOMETER
    assert str(result) == "0.1 kilometer (km)"


def test_zero_converts_to_zero():
    """Zero stays zero and renders without a fraction."""
    result = Value(0, METER).convert_to(KILOMETER)

    assert result.magnitude == 0.0
    assert str(result) == "0 kilometer (km)"


def test_kilograms_to_grams():
    """1 kg is 1000 g."""
    result = Value(1, KILOGRAM).convert_to(GRAM)

    assert result.magnitude == 1000.0
    assert str(result) == "1000 gram (g)"


def test_imperial_length():
    """One yard is three feet."""
    result = Value(1, Unit.of(LengthUnit.YARD)).convert_to(Unit.of(LengthUnit.FOOT))
    assert result.magnitude == pytest.approx(3.0)


@pytest.mark.parametrize("source, target", LINEAR_PAIRS)
def test_round_trip_within_tolerance(source, target):
    """Converting there and back returns the original value."""
    for magnitude in (0.0, 1.0, 2.5, 1234.5678):
        there = Value(magnitude, source).convert_to(target)
        back = there.convert_to(source)
        assert back.magnitude == pytest.approx(magnitude, rel=1e-12, abs=1e-12)


@pytest.mark.parametrize("unit", [METER, KILOMETER, Unit.of(LengthUnit.INCH), GRAM, Unit.of(MassUnit.OUNCE)])
def test_identity_conversion_is_exact(unit):
    """Converting to the same member returns the magnitude unchanged."""
    for magnitude in (0.0, 0.1, 3.3, 1e-9, 98765.4321):
        assert Value(magnitude, unit).convert_to(unit).magnitude == magnitude


@pytest.mark.parametrize("magnitude", [0.0, 1.0, 42.0])
def test_cross_family_conversion_fails(magnitude):
    """Length cannot become mass, whatever the value."""
    with pytest.raises(IncompatibleUnitsError) as exc_info:
        Value(magnitude, METER).convert_to(KILOGRAM)

    assert str(exc_info.value) == "Conversion error: Cannot convert from meter (m) to kilogram (kg)"


def test_currency_to_length_fails_without_rates():
    """Family check happens before any rate lookup."""
    with pytest.raises(IncompatibleUnitsError):
        Value(5, USD).convert_to(METER)


def test_empty_value_fails():
    """A value without magnitude cannot be converted."""
    with pytest.raises(EmptyValueError) as exc_info:
        Value(None, METER).convert_to(KILOMETER)

    assert str(exc_info.value) == "Conversion error: Value is None"


def test_convert_returns_new_value():
    """The original value is left untouched and cannot be mutated."""
    original = Value(100, METER)
    converted = original.convert_to(KILOMETER)

    assert converted is not original
    assert original.magnitude == 100.0
    assert original.unit.member is LengthUnit.METER
    with pytest.raises(dataclasses.FrozenInstanceError):
        original.magnitude = 5.0  # type: ignore[misc]


def test_currency_conversion_uses_rates():
    """Currency goes through the base currency using the looked-up rates."""
    rates = StaticRates({CurrencyUnit.USD: 1.0, CurrencyUnit.EUR: 0.5, CurrencyUnit.JPY: 150.0})

    assert Value(10, USD).convert_to(EUR, rates).magnitude == 5.0
    assert Value(5, EUR).convert_to(Unit.of(CurrencyUnit.JPY), rates).magnitude == pytest.approx(1500.0)


def test_currency_identity_skips_rates():
    """Same-currency conversion needs no rate source."""
    assert Value(7.5, EUR).convert_to(EUR).magnitude == 7.5


def test_currency_conversion_without_rates_fails():
    """No rate lookup means a conversion error, not a crash."""
    with pytest.raises(ConversionError) as exc_info:
        Value(1, USD).convert_to(EUR)

    assert "No exchange rate source configured" in str(exc_info.value)


def test_rate_failure_becomes_conversion_error():
    """An API error from the lookup is surfaced as a conversion error."""
    rates = StaticRates({CurrencyUnit.USD: 1.0})

    with pytest.raises(CurrencyRateError) as exc_info:
        Value(1, USD).convert_to(EUR, rates)

    assert str(exc_info.value) == "Conversion error: API error: No rate found for currency EUR"
    assert exc_info.value.__cause__ is not None


@pytest.mark.parametrize(
    "magnitude, expected",
    [
        (0.0, "0"),
        (1000.0, "1000"),
        (0.1, "0.1"),
        (2.5, "2.5"),
        (0.00001, "0.00001"),
        (1e20, "100000000000000000000"),
    ],
)
def test_format_magnitude(magnitude, expected):
    """No trailing .0 and no exponent notation."""
    assert format_magnitude(magnitude) == expected


def test_empty_value_renders_none():
    assert str(Value(None, METER)) == "None meter (m)"
