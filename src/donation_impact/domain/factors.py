"""Conversion factor configuration for impact calculations."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from donation_impact.domain.categories import FoodCategory

DEFAULT_VERSION = "1.0-default"
DEFAULT_DISCLOSURE = (
    "Estimates are calculated using industry-standard environmental conversion "
    "factors. Results represent conservative approximations."
)
DEFAULT_CO2_FACTOR = 1.9
DEFAULT_WATER_FACTOR = 500.0
DEFAULT_MIN_MEAL_WEIGHT_KG = 0.4
DEFAULT_MAX_MEAL_WEIGHT_KG = 0.6
DEFAULT_REFERENCE_MEAL_WEIGHT_KG = 0.544

# kg CO2e avoided per kg of food
DEFAULT_CO2_FACTORS: dict[FoodCategory, float] = {
    FoodCategory.FRUITS_VEGETABLES: 0.5,
    FoodCategory.LEAFY_GREENS: 0.4,
    FoodCategory.ROOT_VEGETABLES: 0.4,
    FoodCategory.BERRIES: 0.6,
    FoodCategory.CITRUS_FRUITS: 0.5,
    FoodCategory.TROPICAL_FRUITS: 0.7,
    FoodCategory.BREAD: 0.8,
    FoodCategory.BAKERY_PASTRY: 0.8,
    FoodCategory.BAKED_GOODS: 0.8,
    FoodCategory.WHOLE_GRAINS: 0.6,
    FoodCategory.RICE: 0.7,
    FoodCategory.PASTA: 0.7,
    FoodCategory.DAIRY: 2.5,
    FoodCategory.DAIRY_COLD: 2.5,
    FoodCategory.MILK: 2.5,
    FoodCategory.CHEESE: 3.0,
    FoodCategory.YOGURT: 2.2,
    FoodCategory.BUTTER: 3.5,
    FoodCategory.FRESH_MEAT: 6.0,
    FoodCategory.GROUND_MEAT: 6.0,
    FoodCategory.POULTRY: 4.5,
    FoodCategory.FISH: 3.0,
    FoodCategory.SEAFOOD: 3.5,
    FoodCategory.EGGS: 2.0,
    FoodCategory.PREPARED_MEALS: 1.5,
    FoodCategory.READY_TO_EAT: 1.5,
    FoodCategory.FROZEN_FOOD: 1.8,
    FoodCategory.FROZEN: 1.8,
    FoodCategory.CANNED_VEGETABLES: 0.9,
    FoodCategory.CANNED_FRUITS: 0.9,
}

# liters of water saved per kg of food
DEFAULT_WATER_FACTORS: dict[FoodCategory, float] = {
    FoodCategory.FRUITS_VEGETABLES: 300.0,
    FoodCategory.LEAFY_GREENS: 250.0,
    FoodCategory.ROOT_VEGETABLES: 300.0,
    FoodCategory.BERRIES: 400.0,
    FoodCategory.CITRUS_FRUITS: 500.0,
    FoodCategory.TROPICAL_FRUITS: 600.0,
    FoodCategory.BREAD: 800.0,
    FoodCategory.BAKERY_PASTRY: 800.0,
    FoodCategory.BAKED_GOODS: 800.0,
    FoodCategory.WHOLE_GRAINS: 1000.0,
    FoodCategory.RICE: 1200.0,
    FoodCategory.PASTA: 900.0,
    FoodCategory.DAIRY: 1000.0,
    FoodCategory.DAIRY_COLD: 1000.0,
    FoodCategory.MILK: 1000.0,
    FoodCategory.CHEESE: 1500.0,
    FoodCategory.YOGURT: 900.0,
    FoodCategory.BUTTER: 1300.0,
    FoodCategory.FRESH_MEAT: 15000.0,
    FoodCategory.GROUND_MEAT: 15000.0,
    FoodCategory.POULTRY: 4300.0,
    FoodCategory.FISH: 3000.0,
    FoodCategory.SEAFOOD: 3500.0,
    FoodCategory.EGGS: 3300.0,
    FoodCategory.PREPARED_MEALS: 800.0,
    FoodCategory.READY_TO_EAT: 800.0,
    FoodCategory.FROZEN_FOOD: 900.0,
    FoodCategory.FROZEN: 900.0,
    FoodCategory.CANNED_VEGETABLES: 400.0,
    FoodCategory.CANNED_FRUITS: 400.0,
}


class InvalidFactorSetError(ValueError):
    """Raised when a factor configuration cannot be activated."""


def _freeze(factors: Mapping[FoodCategory, float]) -> Mapping[FoodCategory, float]:
    return MappingProxyType(
        {category: float(value) for category, value in factors.items()}
    )


@dataclass(frozen=True)
class FactorSet:
    """Versioned bundle of conversion factors used for one computation."""

    co2_factors: Mapping[FoodCategory, float] = field(
        default_factory=lambda: DEFAULT_CO2_FACTORS
    )
    water_factors: Mapping[FoodCategory, float] = field(
        default_factory=lambda: DEFAULT_WATER_FACTORS
    )
    default_co2_factor: float = DEFAULT_CO2_FACTOR
    default_water_factor: float = DEFAULT_WATER_FACTOR
    min_meal_weight_kg: float = DEFAULT_MIN_MEAL_WEIGHT_KG
    max_meal_weight_kg: float = DEFAULT_MAX_MEAL_WEIGHT_KG
    reference_meal_weight_kg: float = DEFAULT_REFERENCE_MEAL_WEIGHT_KG
    version: str = DEFAULT_VERSION
    disclosure_text: str | None = DEFAULT_DISCLOSURE
    category_precedence: tuple[FoodCategory, ...] = ()

    def __post_init__(self) -> None:
        # Copy into read-only views so callers cannot mutate a live set.
        object.__setattr__(self, "co2_factors", _freeze(self.co2_factors))
        object.__setattr__(self, "water_factors", _freeze(self.water_factors))
        object.__setattr__(
            self, "category_precedence", _dedupe(self.category_precedence)
        )

    def validate(self) -> None:
        """Raise InvalidFactorSetError when a meal constant or factor is unusable."""
        minimum = self.min_meal_weight_kg
        maximum = self.max_meal_weight_kg
        reference = self.reference_meal_weight_kg
        for name, value in (
            ("min_meal_weight_kg", minimum),
            ("max_meal_weight_kg", maximum),
            ("reference_meal_weight_kg", reference),
        ):
            if not math.isfinite(value) or value <= 0:
                raise InvalidFactorSetError(f"{name} must be positive, got {value}")
        if minimum >= maximum:
            raise InvalidFactorSetError(
                "min_meal_weight_kg must be lower than max_meal_weight_kg "
                f"(got {minimum} >= {maximum})"
            )
        if not self.version:
            raise InvalidFactorSetError("version must not be empty")
        for name, value in (
            ("default_co2_factor", self.default_co2_factor),
            ("default_water_factor", self.default_water_factor),
        ):
            _check_factor(name, value)
        for label, factors in (
            ("co2_factors", self.co2_factors),
            ("water_factors", self.water_factors),
        ):
            for category, value in factors.items():
                _check_factor(f"{label}[{category.value}]", value)


def _check_factor(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise InvalidFactorSetError(
            f"{name} must be a non-negative number, got {value}"
        )


def _dedupe(categories: Iterable[FoodCategory]) -> tuple[FoodCategory, ...]:
    seen: dict[FoodCategory, None] = {}
    for category in categories:
        seen.setdefault(category, None)
    return tuple(seen)


def default_factor_set() -> FactorSet:
    """Return the built-in factor configuration."""
    return FactorSet()
