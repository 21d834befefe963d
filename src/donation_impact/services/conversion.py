"""Normalisation of donation quantities to kilograms."""

import logging
from decimal import Decimal, InvalidOperation

from donation_impact.domain.units import Quantity, Unit

_logger = logging.getLogger(__name__)

# Volume units assume a density of 1 kg/L. Count units are rough per-unit
# estimates.
KG_PER_UNIT: dict[Unit, Decimal] = {
    Unit.KILOGRAM: Decimal("1"),
    Unit.GRAM: Decimal("0.001"),
    Unit.POUND: Decimal("0.45359237"),
    Unit.OUNCE: Decimal("0.0283495"),
    Unit.TON: Decimal("1000"),
    Unit.LITER: Decimal("1.0"),
    Unit.MILLILITER: Decimal("0.001"),
    Unit.GALLON: Decimal("3.78541"),
    Unit.QUART: Decimal("0.946353"),
    Unit.PINT: Decimal("0.473176"),
    Unit.FLUID_OUNCE: Decimal("0.0295735"),
    Unit.CUP: Decimal("0.236588"),
    Unit.PIECE: Decimal("0.5"),
    Unit.ITEM: Decimal("0.5"),
    Unit.UNIT: Decimal("0.5"),
    Unit.SERVING: Decimal("0.5"),
    Unit.PORTION: Decimal("0.5"),
    Unit.BOX: Decimal("2.0"),
    Unit.PACKAGE: Decimal("2.0"),
    Unit.BAG: Decimal("2.0"),
    Unit.CONTAINER: Decimal("2.0"),
    Unit.CASE: Decimal("10.0"),
    Unit.CARTON: Decimal("10.0"),
}


def convert_to_kg(quantity: Quantity | None) -> float:
    """Return the quantity in kilograms, or 0.0 when it cannot be converted."""
    if quantity is None or quantity.value is None:
        return 0.0
    ratio = KG_PER_UNIT.get(quantity.unit) if quantity.unit is not None else None
    if ratio is None:
        _logger.debug("No kg conversion for unit=%s, counting 0.0", quantity.unit)
        return 0.0
    try:
        value = _to_decimal(quantity.value)
    except (InvalidOperation, ValueError, TypeError):
        _logger.debug("Unparseable quantity value=%r, counting 0.0", quantity.value)
        return 0.0
    if not value.is_finite():
        return 0.0
    return float(value * ratio)


def _to_decimal(value: Decimal | float | int) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # repr round-trips, so KILOGRAM stays an exact identity.
        return Decimal(repr(value))
    return Decimal(value)
