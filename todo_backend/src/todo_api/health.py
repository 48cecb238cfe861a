from __future__ import annotations

import os
import uuid
from dataclasses import dataclass

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

log = structlog.get_logger()

HEALTHY = "Healthy"
DEGRADED = "Degraded"
UNHEALTHY = "Unhealthy"


@dataclass(frozen=True)
class HealthResult:
    status: str
    description: str


# PUBLIC_INTERFACE
def check_filesystem(data_path: str) -> HealthResult:
    """
    Check that the data directory is usable and the data file readable.

    - Unhealthy: directory path is invalid, cannot be created, or is not writable
    - Degraded: the data file exists but cannot be read
    - Healthy: otherwise
    """
    directory = os.path.dirname(data_path)
    if not directory:
        return HealthResult(UNHEALTHY, "Data directory path is invalid")

    if not os.path.isdir(directory):
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            return HealthResult(UNHEALTHY, f"Cannot create data directory: {e}")

    probe = os.path.join(directory, f"health-check-{uuid.uuid4().hex}.tmp")
    try:
        with open(probe, "w", encoding="utf-8") as f:
            f.write("health check")
        os.remove(probe)
    except OSError as e:
        return HealthResult(UNHEALTHY, f"Data directory is not writable: {e}")

    if os.path.exists(data_path):
        try:
            with open(data_path, "r", encoding="utf-8") as f:
                f.read()
        except (OSError, UnicodeDecodeError) as e:
            return HealthResult(DEGRADED, f"Data file exists but is not readable: {e}")

    return HealthResult(HEALTHY, "File system is accessible and writable")


router = APIRouter(prefix="/health", tags=["health"])


def _report(request: Request) -> JSONResponse:
    result = check_filesystem(request.app.state.data_path)
    if result.status != HEALTHY:
        log.warning("Health check not healthy", status=result.status, description=result.description)
    code = status.HTTP_503_SERVICE_UNAVAILABLE if result.status == UNHEALTHY else status.HTTP_200_OK
    return JSONResponse(
        status_code=code,
        content={
            "status": result.status,
            "checks": [
                {"name": "filesystem", "status": result.status, "description": result.description}
            ],
        },
    )


# PUBLIC_INTERFACE
@router.get("", summary="Health Check", description="Filesystem health of the data directory and file.")
def health(request: Request) -> JSONResponse:
    return _report(request)


@router.get("/ready", summary="Readiness Check")
def ready(request: Request) -> JSONResponse:
    return _report(request)


@router.get("/live", summary="Liveness Check")
def live(request: Request) -> JSONResponse:
    return _report(request)
