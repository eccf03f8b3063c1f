import logging
from typing import Any, Optional

import httpx
from tenacity import before_log, retry, retry_if_exception, stop_after_attempt, wait_exponential

from dictionary_common.config import (
    CONTENT_REPOSITORY_RETRY_ATTEMPTS,
    CONTENT_REPOSITORY_TIMEOUT_SECONDS,
    CONTENT_REPOSITORY_URL,
)
from dictionary_common.exceptions import RetrievalError
from dictionary_common.monitoring import UPSTREAM_RETRIEVAL_FAILURES_TOTAL, retrieval_timer

logger = logging.getLogger(__name__)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


class ContentRepositoryClient:
    """
    Thin JSON-over-HTTP client for the content repository. Transport errors and
    5xx responses are retried; anything that still fails is raised as a
    RetrievalError tagged with the logical source ('catalog' or 'membership').
    """
    def __init__(
        self,
        base_url: str = CONTENT_REPOSITORY_URL,
        timeout: float = CONTENT_REPOSITORY_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @retry(
        wait=wait_exponential(multiplier=0.1, max=2),
        stop=stop_after_attempt(CONTENT_REPOSITORY_RETRY_ATTEMPTS),
        before=before_log(logger, logging.DEBUG),
        retry=retry_if_exception(_is_transient),
        reraise=True,
    )
    async def _get(self, path: str, params: dict, headers: dict) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._client is not None:
            response = await self._client.get(url, params=params, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        if response.status_code >= 500:
            response.raise_for_status()
        return response

    async def get_json(
        self,
        path: str,
        *,
        source: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        try:
            with retrieval_timer(source):
                response = await self._get(path, params or {}, headers or {})
        except httpx.HTTPStatusError as exc:
            UPSTREAM_RETRIEVAL_FAILURES_TOTAL.labels(source=source, reason="status").inc()
            raise RetrievalError(
                f"Content repository request for {source} failed with status {exc.response.status_code}.",
                source=source,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            UPSTREAM_RETRIEVAL_FAILURES_TOTAL.labels(source=source, reason="transport").inc()
            raise RetrievalError(
                f"Content repository request for {source} failed: {exc}",
                source=source,
            ) from exc

        if response.status_code >= 400:
            UPSTREAM_RETRIEVAL_FAILURES_TOTAL.labels(source=source, reason="status").inc()
            raise RetrievalError(
                f"Content repository request for {source} failed with status {response.status_code}.",
                source=source,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            UPSTREAM_RETRIEVAL_FAILURES_TOTAL.labels(source=source, reason="payload").inc()
            raise RetrievalError(
                f"Content repository returned invalid JSON for {source}.",
                source=source,
                status_code=response.status_code,
            ) from exc
