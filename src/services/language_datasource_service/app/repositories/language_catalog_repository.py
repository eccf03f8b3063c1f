import logging
from typing import List, Optional

from pydantic import ValidationError

from dictionary_common.exceptions import RetrievalError

from ..dtos.language_dto import LanguageEntry
from .content_repository_client import ContentRepositoryClient

logger = logging.getLogger(__name__)

CATALOG_SOURCE = "catalog"


class LanguageCatalogRepository:
    """
    Reads the master list of languages from the content repository. Labels come
    back already localized for the requested locale. The listing is returned
    as-is: it may still contain duplicates and the access-control child node.
    """
    def __init__(self, client: Optional[ContentRepositoryClient] = None):
        self._client = client or ContentRepositoryClient()

    async def fetch(self, request_locale: str) -> List[LanguageEntry]:
        payload = await self._client.get_json(
            "/languages",
            source=CATALOG_SOURCE,
            params={"locale": request_locale},
            headers={"Accept-Language": request_locale.replace("_", "-")},
        )
        rows = payload.get("items") if isinstance(payload, dict) else payload
        if not isinstance(rows, list):
            raise RetrievalError(
                "Language catalog payload must be a list of language entries.",
                source=CATALOG_SOURCE,
            )
        try:
            entries = [LanguageEntry.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise RetrievalError(
                f"Language catalog contains malformed entries: {exc.error_count()} error(s).",
                source=CATALOG_SOURCE,
            ) from exc
        logger.info(f"Fetched {len(entries)} catalog languages for locale {request_locale}.")
        return entries
