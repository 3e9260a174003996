"""HTTP surface: the static tenant status route."""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI

from fridge_telemetry import __version__
from fridge_telemetry.models import TenantStatus

__all__ = ["TENANT_STATUS", "create_app", "router"]

logger = logging.getLogger("fridge_telemetry.api")

TENANT_STATUS = TenantStatus(
    tenant="nufridge",
    name="NU Fridge",
    status="active",
    architecture="multi-image",
)

router = APIRouter()


@router.get("/tenant/status", response_model=TenantStatus)
def tenant_status() -> TenantStatus:
    return TENANT_STATUS


def create_app() -> FastAPI:
    app = FastAPI(title="NU Fridge backend", version=__version__)
    app.include_router(router, prefix="/api")
    logger.debug("Status routes mounted under /api")
    return app
