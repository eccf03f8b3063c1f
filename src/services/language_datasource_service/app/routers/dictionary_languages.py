from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from dictionary_common.exceptions import InputError, InternalError, RetrievalError

from ..dtos.language_dto import DictionaryLanguagesResponse
from ..services.language_datasource_service import LanguageDatasourceService
from ..services.locale_collation import negotiate_request_locale

router = APIRouter(prefix="/datasources", tags=["Dictionary Languages"])

MISSING_PATH_MESSAGE = "This data source must always be called with a dictionary path as request suffix."


def get_language_datasource_service() -> LanguageDatasourceService:
    return LanguageDatasourceService()


def _raise_missing_dictionary_path() -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": "INPUT_ERROR", "message": MISSING_PATH_MESSAGE},
    )


@router.get("/dictionary-languages", include_in_schema=False)
async def get_dictionary_languages_without_path() -> None:
    _raise_missing_dictionary_path()


@router.get(
    "/dictionary-languages/{dictionary_path:path}",
    response_model=DictionaryLanguagesResponse,
    summary="Dictionary Language Datasource",
    description=(
        "What: Return the languages that can be added to a dictionary, or the languages it "
        "already contains, each labelled as 'display name (code)'.\n"
        "How: Reconciles the content repository language catalog with the dictionary's "
        "language nodes, then orders items by locale-aware collation of their display text.\n"
        "When: Used by dictionary editor dialogs to populate language select fields or to "
        "emit one text field per existing language."
    ),
)
async def get_dictionary_languages(
    dictionary_path: str,
    locale: Optional[str] = Query(
        default=None,
        description="Display and collation locale. Defaults to the Accept-Language match.",
    ),
    hide_non_dictionary_languages: bool = Query(
        default=False,
        description=(
            "If true, only languages already in the dictionary are listed; otherwise only "
            "languages not yet in the dictionary are listed."
        ),
    ),
    emit_text_field_resources: bool = Query(
        default=False,
        description="If true, emit text field descriptors (name/fieldLabel) instead of select options.",
    ),
    accept_language: Optional[str] = Header(default=None),
    service: LanguageDatasourceService = Depends(get_language_datasource_service),
) -> DictionaryLanguagesResponse:
    if not dictionary_path.strip("/"):
        _raise_missing_dictionary_path()
    if not dictionary_path.startswith("/"):
        dictionary_path = f"/{dictionary_path}"

    try:
        return await service.get_dictionary_languages(
            dictionary_path=dictionary_path,
            locale=locale or negotiate_request_locale(accept_language),
            hide_non_dictionary_languages=hide_non_dictionary_languages,
            emit_text_field_resources=emit_text_field_resources,
        )
    except InputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "INPUT_ERROR", "message": str(exc)},
        )
    except RetrievalError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "RETRIEVAL_ERROR", "source": exc.source, "message": str(exc)},
        )
    except InternalError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "INTERNAL_ERROR", "message": str(exc)},
        )
