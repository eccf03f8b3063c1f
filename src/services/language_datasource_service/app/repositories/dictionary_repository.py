import logging
from typing import FrozenSet, Optional

from dictionary_common.exceptions import RetrievalError

from .content_repository_client import ContentRepositoryClient

logger = logging.getLogger(__name__)

MEMBERSHIP_SOURCE = "membership"


class DictionaryRepository:
    def __init__(self, client: Optional[ContentRepositoryClient] = None):
        self._client = client or ContentRepositoryClient()

    async def fetch(self, dictionary_path: str) -> FrozenSet[str]:
        """
        Returns the language/country codes already present in the dictionary.

        The content repository answers either with an object mapping each code
        to its language resource path, or with a plain list of codes.
        """
        payload = await self._client.get_json(
            "/dictionaries/languages",
            source=MEMBERSHIP_SOURCE,
            params={"path": dictionary_path},
        )
        if isinstance(payload, dict):
            codes = list(payload.keys())
        elif isinstance(payload, list):
            codes = payload
        else:
            raise RetrievalError(
                f"Unexpected dictionary languages payload for {dictionary_path}.",
                source=MEMBERSHIP_SOURCE,
            )
        if not all(isinstance(code, str) for code in codes):
            raise RetrievalError(
                f"Dictionary languages for {dictionary_path} must be strings.",
                source=MEMBERSHIP_SOURCE,
            )
        logger.info(f"Dictionary {dictionary_path} contains {len(codes)} languages.")
        return frozenset(codes)
