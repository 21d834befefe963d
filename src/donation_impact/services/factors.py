"""Category-based resolution of CO2 and water factors."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from donation_impact.domain.categories import DECLARATION_ORDER, FoodCategory
from donation_impact.domain.factors import FactorSet


@dataclass(frozen=True)
class FactorResolver:
    """Resolve per-kg factors for a donation's categories.

    The first qualifying food-type category wins; this is not a weighted
    average across categories. "First" is decided by the factor set's
    declared precedence, then by FoodCategory declaration order, so the
    result never depends on how the caller's collection iterates.
    """

    factor_set: FactorSet

    def resolve_co2_factor(self, categories: Iterable[FoodCategory] | None) -> float:
        """Return kg CO2e per kg for the given categories."""
        return _resolve(
            self.factor_set.co2_factors,
            self.factor_set.default_co2_factor,
            self._ranked(categories),
        )

    def resolve_water_factor(
        self, categories: Iterable[FoodCategory] | None
    ) -> float:
        """Return liters of water per kg for the given categories."""
        return _resolve(
            self.factor_set.water_factors,
            self.factor_set.default_water_factor,
            self._ranked(categories),
        )

    def calculate_co2_avoided(
        self, weight_kg: float, categories: Iterable[FoodCategory] | None
    ) -> float:
        """Return kg CO2e avoided by rescuing weight_kg of food."""
        if not weight_kg:
            return 0.0
        return weight_kg * self.resolve_co2_factor(categories)

    def calculate_water_saved(
        self, weight_kg: float, categories: Iterable[FoodCategory] | None
    ) -> float:
        """Return liters of water saved by rescuing weight_kg of food."""
        if not weight_kg:
            return 0.0
        return weight_kg * self.resolve_water_factor(categories)

    def primary_food_category(
        self, categories: Iterable[FoodCategory] | None
    ) -> FoodCategory | None:
        """Return the highest-ranked food-type category, if any."""
        ranked = self._ranked(categories)
        return ranked[0] if ranked else None

    def _ranked(
        self, categories: Iterable[FoodCategory] | None
    ) -> list[FoodCategory]:
        if not categories:
            return []
        precedence = {
            category: index
            for index, category in enumerate(self.factor_set.category_precedence)
        }
        unlisted = len(precedence)
        food_types = {
            category
            for category in categories
            if isinstance(category, FoodCategory) and category.is_food_type
        }
        return sorted(
            food_types,
            key=lambda category: (
                precedence.get(category, unlisted),
                DECLARATION_ORDER[category],
            ),
        )


def _resolve(
    factors: Mapping[FoodCategory, float],
    default: float,
    ranked: list[FoodCategory],
) -> float:
    for category in ranked:
        factor = factors.get(category)
        if factor is not None:
            return factor
    return default
