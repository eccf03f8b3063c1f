import logging
from typing import Dict, Iterable, Optional

from dictionary_common.exceptions import DuplicateCodeWarning
from dictionary_common.monitoring import LANGUAGE_CATALOG_DUPLICATE_CODES_TOTAL

from ..dtos.language_dto import LanguageEntry

logger = logging.getLogger(__name__)

# Access-control child node listed next to the language nodes; never a language.
ACCESS_CONTROL_POLICY_NODE = "rep:policy"


def normalize_catalog(
    entries: Iterable[LanguageEntry], locale: Optional[str] = None
) -> Dict[str, str]:
    """Map language code to label, dropping the policy node and later duplicates.

    The first occurrence of a code wins. Every dropped duplicate is logged as a
    DuplicateCodeWarning and counted, after the entry has already been discarded.
    """
    catalog: Dict[str, str] = {}
    for entry in entries:
        if entry.code == ACCESS_CONTROL_POLICY_NODE:
            continue
        if entry.code in catalog:
            _report_duplicate(entry.code, locale)
            continue
        catalog[entry.code] = entry.label
    return catalog


def _report_duplicate(code: str, locale: Optional[str]) -> None:
    LANGUAGE_CATALOG_DUPLICATE_CODES_TOTAL.inc()
    logger.warning(
        "Duplicate language/country code: %s",
        code,
        extra={
            "warning": DuplicateCodeWarning.__name__,
            "language_code": code,
            "locale": locale,
        },
    )
