# src/libs/dictionary-common/dictionary_common/exceptions.py
from typing import Optional


class DictionaryDatasourceError(Exception):
    """Base class for every fatal error raised by the language datasource."""
    pass


class InputError(DictionaryDatasourceError, ValueError):
    """
    Raised when a request cannot be processed because of its own parameters,
    e.g. a missing dictionary path or an unparseable locale tag. It is raised
    before any upstream call is made.
    """
    pass


class RetrievalError(DictionaryDatasourceError):
    """
    Raised when the language catalog or the dictionary membership could not be
    fetched from the content repository. The pipeline never retries these;
    retries belong to the repositories that raise them.
    """
    def __init__(self, message: str, source: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class InternalError(DictionaryDatasourceError):
    """Wraps any unexpected condition so it is never silently swallowed."""
    pass


class DuplicateCodeWarning(UserWarning):
    """
    Emitted when the language catalog lists the same language/country code
    more than once. Recoverable: the first occurrence is kept.
    """
    pass
