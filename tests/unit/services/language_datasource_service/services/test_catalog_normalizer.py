import logging
import warnings

from dictionary_common.exceptions import DuplicateCodeWarning
from src.services.language_datasource_service.app.dtos.language_dto import LanguageEntry
from src.services.language_datasource_service.app.services.catalog_normalizer import (
    ACCESS_CONTROL_POLICY_NODE,
    normalize_catalog,
)


def _entries(*rows: tuple[str, str]) -> list[LanguageEntry]:
    return [LanguageEntry(code=code, label=label) for code, label in rows]


def test_normalize_catalog_keeps_first_duplicate_and_warns(caplog):
    """
    GIVEN a catalog listing en_US twice
    WHEN it is normalized
    THEN only the first en_US label is kept
    AND the duplicate is logged as a DuplicateCodeWarning.
    """
    entries = _entries(
        ("en_US", "English (United States)"),
        ("fr_FR", "French (France)"),
        ("en_US", "English US (dup)"),
    )

    with caplog.at_level(logging.WARNING):
        catalog = normalize_catalog(entries, locale="en")

    assert catalog == {"en_US": "English (United States)", "fr_FR": "French (France)"}
    [record] = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert record.getMessage() == "Duplicate language/country code: en_US"
    assert record.warning == DuplicateCodeWarning.__name__
    assert record.language_code == "en_US"


def test_normalize_catalog_drops_duplicates_when_warnings_are_errors():
    entries = _entries(("en_US", "English"), ("en_US", "English again"))

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        catalog = normalize_catalog(entries)

    assert catalog == {"en_US": "English"}


def test_normalize_catalog_drops_access_control_node():
    entries = _entries(
        (ACCESS_CONTROL_POLICY_NODE, "rep:policy"),
        ("de_DE", "German (Germany)"),
    )

    catalog = normalize_catalog(entries)

    assert ACCESS_CONTROL_POLICY_NODE not in catalog
    assert catalog == {"de_DE": "German (Germany)"}


def test_normalize_catalog_does_not_warn_for_repeated_policy_node(caplog):
    entries = _entries(
        (ACCESS_CONTROL_POLICY_NODE, "policy"),
        (ACCESS_CONTROL_POLICY_NODE, "policy"),
    )

    with caplog.at_level(logging.WARNING):
        assert normalize_catalog(entries) == {}
    assert not caplog.records


def test_normalize_catalog_allows_duplicate_labels():
    entries = _entries(("pt_BR", "Portuguese"), ("pt_PT", "Portuguese"))

    assert normalize_catalog(entries) == {"pt_BR": "Portuguese", "pt_PT": "Portuguese"}


def test_normalize_catalog_of_empty_listing_is_empty():
    assert normalize_catalog([]) == {}
