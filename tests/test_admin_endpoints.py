"""Tests for admin configuration endpoints."""

import json

from fastapi.testclient import TestClient

from donation_impact.api.app import create_app
from donation_impact.domain.categories import FoodCategory
from tests.conftest import InMemoryConfigurationRepository

ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "version": "2.0",
        "co2_factors": {"BREAD": 1.2, "VEGAN": 5.0},
        "water_factors": {"BREAD": 650.0},
        "category_precedence": ["FRESH_MEAT", "BREAD"],
    }
    payload.update(overrides)
    return payload


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    missing = client.get("/admin/impact-configuration")
    wrong = client.get(
        "/admin/impact-configuration", headers={"X-Admin-Token": "nope"}
    )
    put = client.put("/admin/impact-configuration", json=_payload())
    reload = client.post("/admin/impact-configuration/reload")

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert put.status_code == 401
    assert reload.status_code == 401


def test_get_active_configuration(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/impact-configuration", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "1.0-default"
    assert data["co2_factors"]["BREAD"] == 0.8
    assert data["min_meal_weight_kg"] == 0.4


def test_put_activates_and_persists(
    container, configuration_repository: InMemoryConfigurationRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/impact-configuration", json=_payload(), headers=ADMIN_HEADERS
    )

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "2.0"
    assert data["co2_factors"] == {"BREAD": 1.2}
    assert data["category_precedence"] == ["FRESH_MEAT", "BREAD"]
    assert container.configuration_service.current().version == "2.0"
    saved = configuration_repository.saved[-1]
    assert json.loads(saved["emission_factors_json"]) == {"BREAD": 1.2}


def test_put_rejects_invalid_configuration(
    container, configuration_repository: InMemoryConfigurationRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/impact-configuration",
        json=_payload(min_meal_weight_kg=0.8, max_meal_weight_kg=0.5),
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 422
    assert container.configuration_service.current().version == "1.0-default"
    assert configuration_repository.saved == []


def test_put_rejects_unknown_category(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/impact-configuration",
        json=_payload(co2_factors={"MOON_CHEESE": 1.0}),
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 422


def test_reload_reads_store(
    container, configuration_repository: InMemoryConfigurationRepository
) -> None:
    client = TestClient(create_app(container))
    configuration_repository.active = {
        "version": "5.0",
        "emission_factors_json": json.dumps({"RICE": 0.9}),
        "water_factors_json": "{}",
    }

    response = client.post(
        "/admin/impact-configuration/reload", headers=ADMIN_HEADERS
    )

    assert response.status_code == 200
    assert response.json()["version"] == "5.0"
    assert dict(container.configuration_service.current().co2_factors) == {
        FoodCategory.RICE: 0.9
    }


def test_reload_rejects_invalid_stored_configuration(
    container, configuration_repository: InMemoryConfigurationRepository
) -> None:
    client = TestClient(create_app(container))
    configuration_repository.active = {"version": "6.0", "min_meal_weight_kg": -1}

    response = client.post(
        "/admin/impact-configuration/reload", headers=ADMIN_HEADERS
    )

    assert response.status_code == 422
    assert container.configuration_service.current().version == "1.0-default"


def test_startup_loads_stored_configuration(
    container, configuration_repository: InMemoryConfigurationRepository
) -> None:
    configuration_repository.active = {"version": "7.0"}

    with TestClient(create_app(container)):
        assert container.configuration_service.current().version == "7.0"


def test_startup_keeps_defaults_when_load_fails(
    container, configuration_repository: InMemoryConfigurationRepository
) -> None:
    configuration_repository.active = {"version": "8.0", "max_meal_weight_kg": 0.1}

    with TestClient(create_app(container)) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert container.configuration_service.current().version == "1.0-default"


def test_put_rejects_negative_factor(
    container, configuration_repository: InMemoryConfigurationRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/impact-configuration",
        json=_payload(co2_factors={"BREAD": -2.0}),
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 422
    assert container.configuration_service.current().version == "1.0-default"
    assert configuration_repository.saved == []
