"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from donation_impact.api.models import FactorSetPayload  # noqa: TC001
from donation_impact.domain.factors import InvalidFactorSetError
from donation_impact.services.serialization import serialize_factor_set

if TYPE_CHECKING:
    from donation_impact.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/impact-configuration", dependencies=[Depends(require_admin)])
async def get_configuration(request: Request) -> dict[str, object]:
    """Return the active factor configuration."""
    container: AppContainer = request.app.state.container
    return serialize_factor_set(container.configuration_service.current())


@router.put("/impact-configuration", dependencies=[Depends(require_admin)])
async def put_configuration(
    payload: FactorSetPayload, request: Request
) -> dict[str, object]:
    """Validate and activate a new factor configuration."""
    container: AppContainer = request.app.state.container
    try:
        activated = container.configuration_service.activate(payload.to_factor_set())
    except InvalidFactorSetError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return serialize_factor_set(activated)


@router.post("/impact-configuration/reload", dependencies=[Depends(require_admin)])
async def reload_configuration(request: Request) -> dict[str, object]:
    """Re-read the active configuration from the store."""
    container: AppContainer = request.app.state.container
    try:
        loaded = container.configuration_service.load()
    except InvalidFactorSetError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return serialize_factor_set(loaded)
