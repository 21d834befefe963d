"""Active factor configuration management."""

import json
import logging
import math
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from donation_impact.domain.categories import FoodCategory
from donation_impact.domain.factors import (
    DEFAULT_CO2_FACTOR,
    DEFAULT_MAX_MEAL_WEIGHT_KG,
    DEFAULT_MIN_MEAL_WEIGHT_KG,
    DEFAULT_REFERENCE_MEAL_WEIGHT_KG,
    DEFAULT_WATER_FACTOR,
    FactorSet,
    InvalidFactorSetError,
    default_factor_set,
)

_logger = logging.getLogger(__name__)


class ImpactConfigurationRepository(Protocol):
    """Persistence interface for factor configurations."""

    def get_active(self) -> dict[str, object] | None:
        """Return the active configuration row, if any."""

    def save_active(self, row: dict[str, object]) -> None:
        """Store a configuration row and mark it as the only active one."""


@dataclass
class ImpactConfigurationService:
    """Owns the active FactorSet and publishes replacements atomically.

    Readers call current() once and keep the returned value; a FactorSet is
    immutable, so an in-flight computation never sees a later reload.
    """

    repository: ImpactConfigurationRepository
    _active: FactorSet = field(default_factory=default_factor_set, init=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def current(self) -> FactorSet:
        """Return the active factor set."""
        return self._active

    def activate(self, candidate: FactorSet, *, persist: bool = True) -> FactorSet:
        """Validate, optionally persist, then publish a factor set."""
        candidate.validate()
        with self._lock:
            if persist:
                self.repository.save_active(factor_set_to_mapping(candidate))
            self._active = candidate
        _logger.info("Activated impact configuration version: %s", candidate.version)
        return candidate

    def load(self) -> FactorSet:
        """Activate the stored configuration, seeding defaults when absent."""
        row = self.repository.get_active()
        if row is None:
            _logger.info("No active impact configuration found, using defaults")
            return self.activate(default_factor_set(), persist=True)
        candidate = factor_set_from_mapping(row)
        try:
            return self.activate(candidate, persist=False)
        except InvalidFactorSetError:
            _logger.error(
                "Rejected stored impact configuration version: %s; keeping %s",
                candidate.version,
                self._active.version,
            )
            raise


def factor_set_from_mapping(row: Mapping[str, object]) -> FactorSet:
    """Build a factor set from a stored configuration row.

    Malformed factor maps fall back to empty maps so every category uses the
    default factor. Malformed meal weights raise InvalidFactorSetError.
    """
    version = str(row.get("version") or "")
    disclosure = row.get("disclosure_text")
    return FactorSet(
        co2_factors=_parse_factor_map(row.get("emission_factors_json"), version),
        water_factors=_parse_factor_map(row.get("water_factors_json"), version),
        default_co2_factor=_parse_number(
            row, "default_emission_factor", DEFAULT_CO2_FACTOR
        ),
        default_water_factor=_parse_number(
            row, "default_water_factor", DEFAULT_WATER_FACTOR
        ),
        min_meal_weight_kg=_parse_number(
            row, "min_meal_weight_kg", DEFAULT_MIN_MEAL_WEIGHT_KG
        ),
        max_meal_weight_kg=_parse_number(
            row, "max_meal_weight_kg", DEFAULT_MAX_MEAL_WEIGHT_KG
        ),
        reference_meal_weight_kg=_parse_number(
            row, "reference_meal_weight_kg", DEFAULT_REFERENCE_MEAL_WEIGHT_KG
        ),
        version=version,
        disclosure_text=disclosure if isinstance(disclosure, str) else None,
        category_precedence=_parse_precedence(row.get("category_precedence")),
    )


def factor_set_to_mapping(factor_set: FactorSet) -> dict[str, object]:
    """Return the stored row for a factor set."""
    return {
        "version": factor_set.version,
        "emission_factors_json": json.dumps(
            {category.value: value for category, value in factor_set.co2_factors.items()}
        ),
        "water_factors_json": json.dumps(
            {
                category.value: value
                for category, value in factor_set.water_factors.items()
            }
        ),
        "default_emission_factor": factor_set.default_co2_factor,
        "default_water_factor": factor_set.default_water_factor,
        "min_meal_weight_kg": factor_set.min_meal_weight_kg,
        "max_meal_weight_kg": factor_set.max_meal_weight_kg,
        "reference_meal_weight_kg": factor_set.reference_meal_weight_kg,
        "disclosure_text": factor_set.disclosure_text,
        "category_precedence": [
            category.value for category in factor_set.category_precedence
        ],
        "is_active": True,
    }


def _parse_factor_map(raw: object, version: str) -> dict[FoodCategory, float]:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning(
                "Malformed factor JSON in configuration %s, using defaults", version
            )
            return {}
    if not isinstance(raw, Mapping):
        if raw is not None:
            _logger.warning(
                "Factor map in configuration %s is not an object, using defaults",
                version,
            )
        return {}

    factors: dict[FoodCategory, float] = {}
    for name, value in raw.items():
        category = FoodCategory.parse(name)
        if category is None or not category.is_food_type:
            _logger.warning(
                "Ignoring factor for unknown or label category %s in %s", name, version
            )
            continue
        try:
            factor = float(value)
        except (TypeError, ValueError):
            factor = math.nan
        if not math.isfinite(factor) or factor < 0:
            _logger.warning(
                "Ignoring invalid factor %r for %s in %s", value, name, version
            )
            continue
        factors[category] = factor
    return factors


def _parse_number(row: Mapping[str, object], key: str, default: float) -> float:
    value = row.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidFactorSetError(f"{key} is not a number: {value!r}") from exc


def _parse_precedence(raw: object) -> tuple[FoodCategory, ...]:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            raw = [chunk for chunk in raw.split(",") if chunk.strip()]
    if not isinstance(raw, list | tuple):
        return ()
    precedence = []
    for name in raw:
        category = FoodCategory.parse(name)
        if category is not None and category.is_food_type:
            precedence.append(category)
    return tuple(precedence)
