from __future__ import annotations

from enum import Enum


class TravelScoutError(Exception):
    """Base class for every error raised by the search pipeline."""


class ConfigurationError(TravelScoutError):
    """Required configuration is missing at startup."""


class CatalogError(TravelScoutError):
    """The catalog file is missing, malformed or inconsistent."""


class ValidationErrorKind(str, Enum):
    TYPE = "TypeError"
    RANGE = "RangeError"
    TAG = "TagError"


class SearchValidationError(TravelScoutError):
    """Client-caused problem with a search request; the message is safe to return."""

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class ServiceError(TravelScoutError):
    """The external reasoning service could not be reached or failed."""


class ResponseFormatError(TravelScoutError):
    pass


class ParseError(ResponseFormatError):
    """The service reply is not well-formed JSON."""


class SchemaError(ResponseFormatError):
    """The service reply is JSON but does not match the results schema."""
