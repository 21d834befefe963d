"""Domain models for donation quantities."""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum


class Unit(StrEnum):
    """Units a donation quantity can be recorded in."""

    KILOGRAM = "KILOGRAM"
    GRAM = "GRAM"
    POUND = "POUND"
    OUNCE = "OUNCE"
    TON = "TON"

    LITER = "LITER"
    MILLILITER = "MILLILITER"
    GALLON = "GALLON"
    QUART = "QUART"
    PINT = "PINT"
    FLUID_OUNCE = "FLUID_OUNCE"
    CUP = "CUP"

    PIECE = "PIECE"
    ITEM = "ITEM"
    UNIT = "UNIT"
    SERVING = "SERVING"
    PORTION = "PORTION"
    BOX = "BOX"
    PACKAGE = "PACKAGE"
    BAG = "BAG"
    CONTAINER = "CONTAINER"
    CASE = "CASE"
    CARTON = "CARTON"

    # Count units without a weight estimate.
    CAN = "CAN"
    BOTTLE = "BOTTLE"
    JAR = "JAR"
    DOZEN = "DOZEN"
    LOAF = "LOAF"
    BUNCH = "BUNCH"
    HEAD = "HEAD"

    @classmethod
    def parse(cls, raw: object) -> "Unit | None":
        """Return the unit for a stored name, or None when unrecognised."""
        if isinstance(raw, Unit):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class Quantity:
    """A donated amount in its original unit."""

    value: Decimal | float | int | None
    unit: Unit | None

    @classmethod
    def from_raw(cls, value: object, unit_name: object) -> "Quantity":
        """Build a quantity from loosely typed store values."""
        parsed: Decimal | float | int | None
        if isinstance(value, Decimal | float | int) and not isinstance(value, bool):
            parsed = value
        elif isinstance(value, str) and value.strip():
            try:
                parsed = Decimal(value.strip())
            except ArithmeticError:
                parsed = None
        else:
            parsed = None
        return cls(value=parsed, unit=Unit.parse(unit_name))
