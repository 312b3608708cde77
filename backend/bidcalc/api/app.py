"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

# Load .env from project root (backend/../.env or backend/.env)
_backend_dir = Path(__file__).resolve().parent.parent.parent
_project_root = _backend_dir.parent
load_dotenv(_project_root / ".env")
load_dotenv(_backend_dir / ".env")

from bidcalc.config import cors_origins_from_env
from bidcalc.engine import ENGINE_VERSION, compute_totals
from bidcalc.exceptions import BidcalcError
from bidcalc.models.pricing import (  # noqa: TCH001 (FastAPI resolves at runtime)
    EstimateRequest,
    SnapshotRequest,
    TotalsRequest,
)

if TYPE_CHECKING:
    from bidcalc.engine import TotalsEngine

logger = logging.getLogger(__name__)


def create_app(*, engine: TotalsEngine | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    engine
        Optional pre-built totals engine for dependency injection (e.g.
        tests). If not provided, one is created from the environment on the
        first request that needs org pricing configuration.
    """
    app = FastAPI(title="bidcalc", version=ENGINE_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins_from_env(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject their own engine
    app.state.engine = engine

    def _get_engine() -> TotalsEngine:
        eng: TotalsEngine | None = app.state.engine
        if eng is not None:
            return eng
        from bidcalc.api.deps import create_engine

        try:
            eng = create_engine()
        except BidcalcError as exc:
            logger.exception("Could not create totals engine")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        app.state.engine = eng
        return eng

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": ENGINE_VERSION}

    # ------------------------------------------------------------------
    # POST /api/totals
    # ------------------------------------------------------------------

    @app.post("/api/totals")
    def totals(request: TotalsRequest) -> dict[str, Any]:
        return compute_totals(request).model_dump(mode="json")

    # ------------------------------------------------------------------
    # POST /api/estimate
    # ------------------------------------------------------------------

    @app.post("/api/estimate")
    def estimate(request: EstimateRequest) -> dict[str, Any]:
        eng = _get_engine()
        result = eng.estimate(request.items, request.header)
        return result.model_dump(mode="json")

    # ------------------------------------------------------------------
    # POST /api/snapshot
    # ------------------------------------------------------------------

    @app.post("/api/snapshot")
    def snapshot(request: SnapshotRequest) -> dict[str, Any]:
        eng = _get_engine()
        snap = eng.snapshot(request.items, request.header, request.project_name)
        logger.info(
            "Snapshot %s for %r: grand total %s",
            snap.snapshot_id,
            snap.project_name,
            snap.totals.grand_total,
        )
        return {
            "snapshot": snap.to_export_dict(),
            "summary_dict": snap.to_summary_dict(),
        }

    # ------------------------------------------------------------------
    # GET /api/sample-estimate
    # ------------------------------------------------------------------

    @app.get("/api/sample-estimate")
    def sample_estimate() -> dict[str, Any]:
        from bidcalc.data.defaults import DEMO_HEADER, DEMO_LINE_ITEMS, DEMO_PROJECT_NAME
        from bidcalc.factory import create_default_engine

        snap = create_default_engine().snapshot(
            DEMO_LINE_ITEMS, DEMO_HEADER, DEMO_PROJECT_NAME,
        )
        return {
            "snapshot": snap.to_export_dict(),
            "summary_dict": snap.to_summary_dict(),
        }

    return app
