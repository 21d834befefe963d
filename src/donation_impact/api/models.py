"""Pydantic models for impact API payloads."""

from pydantic import BaseModel, Field

from donation_impact.domain.categories import FoodCategory
from donation_impact.domain.factors import (
    DEFAULT_CO2_FACTOR,
    DEFAULT_MAX_MEAL_WEIGHT_KG,
    DEFAULT_MIN_MEAL_WEIGHT_KG,
    DEFAULT_REFERENCE_MEAL_WEIGHT_KG,
    DEFAULT_WATER_FACTOR,
    FactorSet,
)


class FactorSetPayload(BaseModel):
    """Factor configuration submitted by an administrator."""

    version: str = Field(min_length=1)
    co2_factors: dict[FoodCategory, float] = Field(default_factory=dict)
    water_factors: dict[FoodCategory, float] = Field(default_factory=dict)
    default_co2_factor: float = DEFAULT_CO2_FACTOR
    default_water_factor: float = DEFAULT_WATER_FACTOR
    min_meal_weight_kg: float = DEFAULT_MIN_MEAL_WEIGHT_KG
    max_meal_weight_kg: float = DEFAULT_MAX_MEAL_WEIGHT_KG
    reference_meal_weight_kg: float = DEFAULT_REFERENCE_MEAL_WEIGHT_KG
    disclosure_text: str | None = None
    category_precedence: list[FoodCategory] = Field(default_factory=list)

    def to_factor_set(self) -> FactorSet:
        """Return the domain factor set (not yet validated)."""
        return FactorSet(
            co2_factors=_food_types_only(self.co2_factors),
            water_factors=_food_types_only(self.water_factors),
            default_co2_factor=self.default_co2_factor,
            default_water_factor=self.default_water_factor,
            min_meal_weight_kg=self.min_meal_weight_kg,
            max_meal_weight_kg=self.max_meal_weight_kg,
            reference_meal_weight_kg=self.reference_meal_weight_kg,
            version=self.version,
            disclosure_text=self.disclosure_text,
            category_precedence=tuple(
                category
                for category in self.category_precedence
                if category.is_food_type
            ),
        )


def _food_types_only(factors: dict[FoodCategory, float]) -> dict[FoodCategory, float]:
    return {
        category: value for category, value in factors.items() if category.is_food_type
    }
