# tests/integration/services/language_datasource_service/test_dictionary_languages_pipeline.py
import httpx
import pytest
import pytest_asyncio

from src.services.language_datasource_service.app.main import app
from src.services.language_datasource_service.app.repositories.content_repository_client import (
    ContentRepositoryClient,
)
from src.services.language_datasource_service.app.repositories.dictionary_repository import (
    DictionaryRepository,
)
from src.services.language_datasource_service.app.repositories.language_catalog_repository import (
    LanguageCatalogRepository,
)
from src.services.language_datasource_service.app.routers.dictionary_languages import (
    get_language_datasource_service,
)
from src.services.language_datasource_service.app.services.language_datasource_service import (
    LanguageDatasourceService,
)

pytestmark = pytest.mark.asyncio

DICTIONARY_PATH = "/content/dictionaries/site/i18n"

CATALOG_ROWS = [
    {"value": "rep:policy", "text": "rep:policy"},
    {"value": "sv_SE", "text": "Swedish (Sweden)"},
    {"value": "en_US", "text": "English (United States)"},
    {"value": "fr_FR", "text": "French (France)"},
    {"value": "en_US", "text": "English US (dup)"},
    {"value": "is_IS", "text": "Icelandic (Iceland)"},
    {"value": "de_AT", "text": "German (Austria)"},
]


def _content_repository(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/languages":
        return httpx.Response(200, json=CATALOG_ROWS)
    if request.url.path == "/dictionaries/languages":
        if request.url.params["path"] != DICTIONARY_PATH:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(
            200,
            json={"fr_FR": f"{DICTIONARY_PATH}/fr_FR", "de_AT": f"{DICTIONARY_PATH}/de_AT"},
        )
    return httpx.Response(404)


@pytest_asyncio.fixture
async def pipeline_client():
    """Runs the real pipeline against a mocked content repository."""
    upstream = httpx.AsyncClient(transport=httpx.MockTransport(_content_repository))
    content_repository = ContentRepositoryClient(base_url="http://repo", client=upstream)
    service = LanguageDatasourceService(
        catalog_repo=LanguageCatalogRepository(client=content_repository),
        dictionary_repo=DictionaryRepository(client=content_repository),
    )
    app.dependency_overrides[get_language_datasource_service] = lambda: service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    del app.dependency_overrides[get_language_datasource_service]
    await upstream.aclose()


async def test_add_language_select_options(pipeline_client):
    """
    GIVEN a dictionary that already holds French and Austrian German
    WHEN the datasource is called without flags
    THEN the other catalog languages are returned once each as select options
    AND ordered by display text.
    """
    response = await pipeline_client.get(
        f"/datasources/dictionary-languages{DICTIONARY_PATH}", params={"locale": "en"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["locale"] == "en"
    assert [(item["value"], item["text"]) for item in body["items"]] == [
        ("en_US", "English (United States) (en_US)"),
        ("is_IS", "Icelandic (Iceland) (is_IS)"),
        ("sv_SE", "Swedish (Sweden) (sv_SE)"),
    ]


async def test_existing_languages_as_text_fields(pipeline_client):
    response = await pipeline_client.get(
        f"/datasources/dictionary-languages{DICTIONARY_PATH}",
        params={
            "locale": "en",
            "hide_non_dictionary_languages": "true",
            "emit_text_field_resources": "true",
        },
    )

    assert response.status_code == 200
    assert response.json()["items"] == [
        {
            "kind": "field_descriptor",
            "resource_type": "granite/ui/components/coral/foundation/form/textfield",
            "name": "fr_FR",
            "fieldLabel": "French (France) (fr_FR)",
        },
        {
            "kind": "field_descriptor",
            "resource_type": "granite/ui/components/coral/foundation/form/textfield",
            "name": "de_AT",
            "fieldLabel": "German (Austria) (de_AT)",
        },
    ]


async def test_unknown_dictionary_returns_502(pipeline_client):
    response = await pipeline_client.get(
        "/datasources/dictionary-languages/content/dictionaries/unknown", params={"locale": "en"}
    )

    assert response.status_code == 502
    assert response.json()["detail"]["source"] == "membership"
