"""Food categories attached to donations."""

from enum import StrEnum


class FoodCategory(StrEnum):
    """Food kinds and labels a donation can be tagged with.

    Declaration order is meaningful: it is the final tie-breaker when
    several food-type categories on one donation carry a factor.
    """

    FRUITS_VEGETABLES = "FRUITS_VEGETABLES"
    LEAFY_GREENS = "LEAFY_GREENS"
    ROOT_VEGETABLES = "ROOT_VEGETABLES"
    BERRIES = "BERRIES"
    CITRUS_FRUITS = "CITRUS_FRUITS"
    TROPICAL_FRUITS = "TROPICAL_FRUITS"

    BREAD = "BREAD"
    BAKED_GOODS = "BAKED_GOODS"
    BAKERY_PASTRY = "BAKERY_PASTRY"
    BAKERY_ITEMS = "BAKERY_ITEMS"
    WHOLE_GRAINS = "WHOLE_GRAINS"
    CEREALS = "CEREALS"
    PASTA = "PASTA"
    RICE = "RICE"

    FRESH_MEAT = "FRESH_MEAT"
    GROUND_MEAT = "GROUND_MEAT"
    POULTRY = "POULTRY"
    FISH = "FISH"
    SEAFOOD = "SEAFOOD"
    EGGS = "EGGS"
    LEGUMES = "LEGUMES"
    TOFU_TEMPEH = "TOFU_TEMPEH"

    DAIRY = "DAIRY"
    DAIRY_COLD = "DAIRY_COLD"
    MILK = "MILK"
    CHEESE = "CHEESE"
    YOGURT = "YOGURT"
    BUTTER = "BUTTER"
    MILK_ALTERNATIVES = "MILK_ALTERNATIVES"

    CANNED_VEGETABLES = "CANNED_VEGETABLES"
    CANNED_FRUITS = "CANNED_FRUITS"
    CANNED_SOUP = "CANNED_SOUP"

    FROZEN = "FROZEN"
    FROZEN_FOOD = "FROZEN_FOOD"
    FROZEN_VEGETABLES = "FROZEN_VEGETABLES"
    FROZEN_MEALS = "FROZEN_MEALS"

    PREPARED_MEALS = "PREPARED_MEALS"
    READY_TO_EAT = "READY_TO_EAT"
    SANDWICHES = "SANDWICHES"
    SOUPS = "SOUPS"
    LEFTOVERS = "LEFTOVERS"

    SNACKS = "SNACKS"
    DESSERTS = "DESSERTS"
    BEVERAGES = "BEVERAGES"
    JUICE = "JUICE"
    CONDIMENTS = "CONDIMENTS"
    BABY_FOOD = "BABY_FOOD"
    PACKAGED = "PACKAGED"
    MIXED_ITEMS = "MIXED_ITEMS"
    OTHER = "OTHER"

    # Dietary labels
    VEGETARIAN = "VEGETARIAN"
    VEGAN = "VEGAN"
    GLUTEN_FREE = "GLUTEN_FREE"
    DAIRY_FREE = "DAIRY_FREE"
    NUT_FREE = "NUT_FREE"
    SOY_FREE = "SOY_FREE"
    EGG_FREE = "EGG_FREE"
    KOSHER = "KOSHER"
    HALAL = "HALAL"
    ORGANIC = "ORGANIC"
    NON_GMO = "NON_GMO"
    FAIR_TRADE = "FAIR_TRADE"
    LOCAL = "LOCAL"

    # Perishability labels
    PERISHABLE = "PERISHABLE"
    NON_PERISHABLE = "NON_PERISHABLE"
    REFRIGERATED = "REFRIGERATED"
    SHELF_STABLE = "SHELF_STABLE"

    @property
    def is_dietary_label(self) -> bool:
        """Return True for dietary labels such as VEGETARIAN."""
        return self in _DIETARY_LABELS

    @property
    def is_perishability_label(self) -> bool:
        """Return True for storage/perishability labels."""
        return self in _PERISHABILITY_LABELS

    @property
    def is_food_type(self) -> bool:
        """Return True when the category names a physical kind of food."""
        return not self.is_dietary_label and not self.is_perishability_label

    @classmethod
    def parse(cls, raw: object) -> "FoodCategory | None":
        """Return the category for a stored name, or None when unrecognised."""
        if isinstance(raw, FoodCategory):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


_DIETARY_LABELS = frozenset(
    {
        FoodCategory.VEGETARIAN,
        FoodCategory.VEGAN,
        FoodCategory.GLUTEN_FREE,
        FoodCategory.DAIRY_FREE,
        FoodCategory.NUT_FREE,
        FoodCategory.SOY_FREE,
        FoodCategory.EGG_FREE,
        FoodCategory.KOSHER,
        FoodCategory.HALAL,
        FoodCategory.ORGANIC,
        FoodCategory.NON_GMO,
        FoodCategory.FAIR_TRADE,
        FoodCategory.LOCAL,
    }
)

_PERISHABILITY_LABELS = frozenset(
    {
        FoodCategory.PERISHABLE,
        FoodCategory.NON_PERISHABLE,
        FoodCategory.REFRIGERATED,
        FoodCategory.SHELF_STABLE,
    }
)

DECLARATION_ORDER: dict[FoodCategory, int] = {
    category: index for index, category in enumerate(FoodCategory)
}
