# src/libs/dictionary-common/dictionary_common/health.py
import logging
import asyncio
from typing import Callable, Awaitable

import httpx
from fastapi import APIRouter, status, HTTPException

from .config import CONTENT_REPOSITORY_URL, CONTENT_REPOSITORY_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

DependencyCheck = Callable[[], Awaitable[bool]]

async def check_content_repository_health() -> bool:
    """Checks if the content repository answers without a server error."""
    try:
        async with httpx.AsyncClient(timeout=CONTENT_REPOSITORY_TIMEOUT_SECONDS) as client:
            response = await client.get(CONTENT_REPOSITORY_URL)
        return response.status_code < 500
    except httpx.HTTPError as e:
        logger.error(f"Health Check: Content repository connection failed: {e}", exc_info=False)
        return False

def create_health_router(*dependencies: str) -> APIRouter:
    """
    Creates a standardized health check router.

    Args:
        *dependencies: Names ('content_repository') of the dependencies to
                       check for the readiness probe.

    Returns:
        A FastAPI APIRouter with /health/live and /health/ready endpoints.
    """
    router = APIRouter(tags=["Health"])

    dep_map: dict[str, tuple[str, DependencyCheck]] = {
        'content_repository': ('content_repository', check_content_repository_health),
    }

    @router.get("/health/live", status_code=status.HTTP_200_OK)
    async def liveness_probe():
        return {"status": "alive"}

    @router.get("/health/ready", status_code=status.HTTP_200_OK)
    async def readiness_probe():
        checked = [dep for dep in dependencies if dep in dep_map]
        checks_to_run = [dep_map[dep][1] for dep in checked]

        results = await asyncio.gather(*[check() for check in checks_to_run])

        all_ok = all(results)

        dep_status = {
            dep_map[dep][0]: "ok" if results[i] else "unavailable"
            for i, dep in enumerate(checked)
        }

        if all_ok:
            return {"status": "ready", "dependencies": dep_status}

        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "dependencies": dep_status},
        )

    return router
