"""
JournalFit Backend — Health Check Route
=========================================

What:  Liveness and configuration status for monitoring probes.
How:   Reports whether each provider has a credential. It does NOT call the
       providers: a probe every few seconds would spend quota and rate limit.

Status levels:
    - healthy:   every provider has an API key
    - degraded:  at least one provider is missing its key (requests routed
                 to it will fail with the provider's 401)
"""

import logging
import time

from fastapi import APIRouter

from journalfit import __version__
from journalfit.schemas.document import HealthResponse
from journalfit.services.document_service import DEFAULT_PROVIDER, document_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    providers = {
        tag: "configured" if service.is_configured() else "missing_key"
        for tag, service in document_service.providers.items()
    }
    overall = "healthy" if all(state == "configured" for state in providers.values()) else "degraded"
    if overall != "healthy":
        logger.warning("Health check: provider credentials missing: %s", providers)

    return HealthResponse(
        status=overall,
        version=__version__,
        default_provider=DEFAULT_PROVIDER,
        providers=providers,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
