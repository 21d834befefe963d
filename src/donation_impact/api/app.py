"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from donation_impact.api.admin import router as admin_router
from donation_impact.app_logging import configure_logging
from donation_impact.containers import AppContainer
from donation_impact.domain.dashboard import ImpactReport, ImpactScope, ScopeKind
from donation_impact.services.dashboard import export_csv
from donation_impact.services.serialization import serialize_report
from donation_impact.services.windows import parse_date_range


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.configuration_service.load()
        except Exception:
            logger.exception("Failed to load impact configuration, using defaults")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/impact/metrics")
    def impact_metrics(
        request: Request,
        scope: str = "platform",
        subject_id: str | None = None,
        date_range: str | None = None,
    ) -> dict[str, object]:
        """Return the impact report for a scope and date range."""
        report = _build_report(request, scope, subject_id, date_range)
        return serialize_report(report)

    @app.get("/impact/export")
    def impact_export(
        request: Request,
        scope: str = "platform",
        subject_id: str | None = None,
        date_range: str | None = None,
    ) -> Response:
        """Return the impact report as a CSV download."""
        report = _build_report(request, scope, subject_id, date_range)
        filename = f"impact-metrics-{report.date_range.value.lower()}.csv"
        return Response(
            content=export_csv(report),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


def _build_report(
    request: Request, scope: str, subject_id: str | None, date_range: str | None
) -> ImpactReport:
    state_container: AppContainer = request.app.state.container
    return state_container.dashboard_service.get_metrics(
        _parse_scope(scope, subject_id), parse_date_range(date_range)
    )


def _parse_scope(raw: str, subject_id: str | None) -> ImpactScope:
    """Return the requested scope, rejecting unknown kinds and missing subjects."""
    try:
        kind = ScopeKind(raw.strip().upper())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown scope: {raw}",
        ) from exc
    if kind is ScopeKind.PLATFORM:
        return ImpactScope.platform()
    if not subject_id or not subject_id.strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"subject_id is required for {kind.value.lower()} scope",
        )
    return ImpactScope(kind=kind, subject_id=subject_id.strip())
