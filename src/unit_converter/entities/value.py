"""Value domain entity."""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from unit_converter.entities.units import Unit, from_base, to_base
from unit_converter.errors import EmptyValueError, IncompatibleUnitsError

if TYPE_CHECKING:
    from unit_converter.protocols import RateLookup


def format_magnitude(magnitude: float) -> str:
    """Render a float the way a person writes it.

    Integral values drop the fractional part (``1000``), everything else
    uses the shortest round-tripping digits without exponent notation
    (``0.1``, ``0.00001``).
    """
    if magnitude != magnitude or magnitude in (float("inf"), float("-inf")):
        return str(magnitude)
    if magnitude.is_integer():
        return str(int(magnitude))
    return format(Decimal(repr(magnitude)), "f")


@dataclass(frozen=True)
class Value:
    """A magnitude tagged with its unit.

    Immutable: ``convert_to`` always returns a new Value.

    Attributes:
        magnitude: The numeric quantity, or None for an empty value
        unit: The unit the magnitude is expressed in
    """

    magnitude: float | None
    unit: Unit

    def __post_init__(self) -> None:
        if self.magnitude is not None:
            object.__setattr__(self, "magnitude", float(self.magnitude))

    def convert_to(self, target: Unit, rates: "RateLookup | None" = None) -> "Value":
        """Convert to ``target``, which must be in the same family.

        Args:
            target: The unit to convert to
            rates: Exchange rate lookup, required for currency conversions

        Returns:
            A new Value expressed in ``target``

        Raises:
            EmptyValueError: If the magnitude is None
            IncompatibleUnitsError: If the units belong to different families
            ConversionError: If a currency rate cannot be obtained
        """
        if self.magnitude is None:
            raise EmptyValueError()
        if self.unit != target:
            raise IncompatibleUnitsError(self.unit, target)

        if self.unit.same_member(target):
            return Value(self.magnitude, target)

        base_value = to_base(self.unit, self.magnitude, rates)
        return Value(from_base(target, base_value, rates), target)

    def __str__(self) -> str:
        if self.magnitude is None:
            return f"None {self.unit}"
        return f"{format_magnitude(self.magnitude)} {self.unit}"
