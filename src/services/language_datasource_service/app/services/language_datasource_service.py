import asyncio
import logging
from typing import FrozenSet, List, Optional, Tuple

from dictionary_common.exceptions import DictionaryDatasourceError, InputError, InternalError

from ..dtos.language_dto import DictionaryLanguagesResponse, LanguageEntry
from ..repositories.dictionary_repository import DictionaryRepository
from ..repositories.language_catalog_repository import LanguageCatalogRepository
from .catalog_normalizer import normalize_catalog
from .locale_collation import resolve_locale, sort_by_display_text
from .membership_filter import filter_by_membership
from .resource_projector import project_languages

logger = logging.getLogger(__name__)


class LanguageDatasourceService:
    """
    Lists the languages that can be added to a dictionary, or the ones it
    already contains, ready for a select or text field UI.

    The catalog and the dictionary membership are fetched concurrently; the
    rest of the pipeline (normalize, filter, project, sort) is pure.
    """
    def __init__(
        self,
        catalog_repo: Optional[LanguageCatalogRepository] = None,
        dictionary_repo: Optional[DictionaryRepository] = None,
    ):
        self.catalog_repo = catalog_repo or LanguageCatalogRepository()
        self.dictionary_repo = dictionary_repo or DictionaryRepository()

    async def _fetch_sources(
        self, locale: str, dictionary_path: str
    ) -> Tuple[List[LanguageEntry], FrozenSet[str]]:
        catalog_result, membership_result = await asyncio.gather(
            self.catalog_repo.fetch(locale),
            self.dictionary_repo.fetch(dictionary_path),
            return_exceptions=True,
        )
        # Catalog failures take precedence when both fetches fail.
        if isinstance(catalog_result, BaseException):
            raise catalog_result
        if isinstance(membership_result, BaseException):
            raise membership_result
        return catalog_result, frozenset(membership_result)

    async def get_dictionary_languages(
        self,
        dictionary_path: Optional[str],
        locale: Optional[str] = None,
        hide_non_dictionary_languages: bool = False,
        emit_text_field_resources: bool = False,
    ) -> DictionaryLanguagesResponse:
        if dictionary_path is None or not dictionary_path.strip():
            raise InputError("This data source must always be called with a dictionary path.")
        resolved_locale = resolve_locale(locale)

        try:
            entries, membership = await self._fetch_sources(resolved_locale, dictionary_path)
            catalog = normalize_catalog(entries, locale=resolved_locale)
            candidates = filter_by_membership(
                catalog, membership, hide_non_members=hide_non_dictionary_languages
            )
            items = project_languages(candidates, emit_field_descriptor=emit_text_field_resources)
            ordered = sort_by_display_text(items, resolved_locale)
        except DictionaryDatasourceError:
            raise
        except Exception as exc:
            logger.error(
                f"Unexpected failure while listing languages for {dictionary_path}.", exc_info=True
            )
            raise InternalError(f"Could not list languages for {dictionary_path}.") from exc

        logger.info(
            f"Listing {len(ordered)} of {len(catalog)} languages for dictionary {dictionary_path}.",
            extra={
                "locale": resolved_locale,
                "hide_non_dictionary_languages": hide_non_dictionary_languages,
                "emit_text_field_resources": emit_text_field_resources,
            },
        )
        return DictionaryLanguagesResponse(
            dictionary_path=dictionary_path,
            locale=resolved_locale,
            hide_non_dictionary_languages=hide_non_dictionary_languages,
            emit_text_field_resources=emit_text_field_resources,
            items=ordered,
        )
