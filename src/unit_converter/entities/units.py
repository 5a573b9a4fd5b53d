"""Unit families, members and the family-level conversion tables.

The set of families is closed: each ``UnitFamily`` has exactly one member
enum and one conversion rule. Length and mass convert through a fixed
scale-factor table; currency converts through a rate lookup (the cache).
The first member declared in each family is its base unit.
"""

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from unit_converter.errors import ApiError, ConversionError, CurrencyRateError, ParseError

if TYPE_CHECKING:
    from unit_converter.protocols import RateLookup


class UnitFamily(Enum):
    """Closed set of mutually convertible unit families."""

    LENGTH = "length"
    MASS = "mass"
    CURRENCY = "currency"

    @property
    def label(self) -> str:
        """Capitalized family name for listings."""
        return self.value.capitalize()


class NamedUnit(Enum):
    """Base for member enums whose value is ``(long_name, short_name)``."""

    @property
    def long_name(self) -> str:
        return self.value[0]

    @property
    def short_name(self) -> str:
        return self.value[1]

    @classmethod
    def from_name(cls, text: str) -> "NamedUnit | None":
        """Find the member whose long or short name equals ``text`` exactly."""
        for member in cls:
            if text == member.long_name or text == member.short_name:
                return member
        return None

    def __str__(self) -> str:
        return f"{self.long_name} ({self.short_name})"


class LengthUnit(NamedUnit):
    METER = ("meter", "m")
    CENTIMETER = ("centimeter", "cm")
    KILOMETER = ("kilometer", "km")
    YARD = ("yard", "yd")
    FOOT = ("foot", "ft")
    INCH = ("inch", "in")


class MassUnit(NamedUnit):
    KILOGRAM = ("kilogram", "kg")
    GRAM = ("gram", "g")
    TON = ("ton", "t")
    POUND = ("pound", "lb")
    OUNCE = ("ounce", "oz")


class CurrencyUnit(NamedUnit):
    """ISO 4217 currencies priced against USD."""

    USD = ("USD", "USD")
    EUR = ("EUR", "EUR")
    JPY = ("JPY", "JPY")
    KRW = ("KRW", "KRW")
    GBP = ("GBP", "GBP")
    AUD = ("AUD", "AUD")

    @property
    def code(self) -> str:
        return self.long_name

    @classmethod
    def from_code(cls, code: str) -> "CurrencyUnit | None":
        member = cls.from_name(code)
        return member if isinstance(member, CurrencyUnit) else None

    def __str__(self) -> str:
        return self.code


# Declaration order drives parsing precedence and unit listings.
FAMILY_MEMBERS: MappingProxyType = MappingProxyType(
    {
        UnitFamily.LENGTH: LengthUnit,
        UnitFamily.MASS: MassUnit,
        UnitFamily.CURRENCY: CurrencyUnit,
    }
)

# Multiply by the factor to reach the family base unit (meter, kilogram).
SCALE_FACTORS: MappingProxyType = MappingProxyType(
    {
        UnitFamily.LENGTH: MappingProxyType(
            {
                LengthUnit.METER: 1.0,
                LengthUnit.CENTIMETER: 0.01,
                LengthUnit.KILOMETER: 1000.0,
                LengthUnit.YARD: 0.9144,
                LengthUnit.FOOT: 0.3048,
                LengthUnit.INCH: 0.0254,
            }
        ),
        UnitFamily.MASS: MappingProxyType(
            {
                MassUnit.KILOGRAM: 1.0,
                MassUnit.GRAM: 0.001,
                MassUnit.TON: 1000.0,
                MassUnit.POUND: 0.453592,
                MassUnit.OUNCE: 0.0283495,
            }
        ),
    }
)

BASE_CURRENCY = CurrencyUnit.USD


class Unit:
    """A specific member of a unit family.

    Equality and hashing are family-level: any two length units compare
    equal, which is what compatibility checks need. Arithmetic always uses
    the specific ``member``.
    """

    __slots__ = ("_family", "_member")

    def __init__(self, family: UnitFamily, member: NamedUnit) -> None:
        if not isinstance(member, FAMILY_MEMBERS[family]):
            raise ValueError(f"{member!r} is not a member of the {family.value} family")
        self._family = family
        self._member = member

    @classmethod
    def of(cls, member: NamedUnit) -> "Unit":
        """Wrap a member in a Unit, inferring its family."""
        for family, members in FAMILY_MEMBERS.items():
            if isinstance(member, members):
                return cls(family, member)
        raise ValueError(f"{member!r} does not belong to any unit family")

    @classmethod
    def parse(cls, text: str) -> "Unit":
        """Parse a long or short unit name, trying families in declaration order.

        Raises:
            ParseError: If no family knows the name
        """
        for family, members in FAMILY_MEMBERS.items():
            member = members.from_name(text)
            if member is not None:
                return cls(family, member)
        raise ParseError(f"Invalid unit: {text}")

    @property
    def family(self) -> UnitFamily:
        return self._family

    @property
    def member(self) -> NamedUnit:
        return self._member

    @property
    def is_base(self) -> bool:
        """True for the member declared first in its family."""
        return self._member is next(iter(FAMILY_MEMBERS[self._family]))

    def same_member(self, other: "Unit") -> bool:
        return self._member is other._member

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self._family is other._family

    def __hash__(self) -> int:
        return hash(self._family)

    def __str__(self) -> str:
        return str(self._member)

    def __repr__(self) -> str:
        return f"Unit({self._family.name}, {self._member.name})"


def get_all_units() -> list[Unit]:
    """Every member of every family, in family then member declaration order."""
    return [Unit(family, member) for family, members in FAMILY_MEMBERS.items() for member in members]


def units_by_family() -> dict[UnitFamily, list[Unit]]:
    """Same as get_all_units, grouped by family."""
    return {family: [Unit(family, member) for member in members] for family, members in FAMILY_MEMBERS.items()}


def _currency_rate(member: NamedUnit, rates: "RateLookup | None") -> float:
    if rates is None:
        raise ConversionError("No exchange rate source configured")
    try:
        return rates.get_base_rate(member)  # type: ignore[arg-type]
    except ApiError as e:
        raise CurrencyRateError(str(e)) from e


def to_base(unit: Unit, value: float, rates: "RateLookup | None" = None) -> float:
    """Express ``value`` (in ``unit``) in its family's base unit."""
    if unit.family is UnitFamily.CURRENCY:
        return value / _currency_rate(unit.member, rates)
    return value * SCALE_FACTORS[unit.family][unit.member]


def from_base(unit: Unit, value: float, rates: "RateLookup | None" = None) -> float:
    """Express a base-unit ``value`` in ``unit``."""
    if unit.family is UnitFamily.CURRENCY:
        return value * _currency_rate(unit.member, rates)
    return value / SCALE_FACTORS[unit.family][unit.member]
