"""
Exception hierarchy for register extraction.

Only UnexpectedDocumentError, DocumentParseError and FetchError abort an
extraction call.
The remaining errors describe conditions that are recovered locally:
a missing category section is skipped, a malformed record is dropped,
and an unparseable date falls back to the raw token or "N/A".
"""

from typing import Optional


class RegisterError(Exception):
    """Base class for all register extraction errors."""


class UnexpectedDocumentError(RegisterError):
    """
    The fetched document does not carry the register signature.

    Usually means the fetch returned an error page, a different document,
    or the request was misconfigured.
    """

    def __init__(self, marker: str, message: Optional[str] = None):
        self.marker = marker
        super().__init__(
            message or f"Invalid response from FMCSA: document does not contain '{marker}'"
        )


class SectionNotFoundError(RegisterError):
    """A category anchor or its data table is missing from the document."""

    def __init__(self, code: str, reason: str):
        self.code = code
        self.reason = reason
        super().__init__(f"Section {code} not found ({reason} missing)")


class MalformedRecordError(RegisterError):
    """A row header cell did not yield a non-empty number and title."""


class MalformedDateError(RegisterError, ValueError):
    """A date token could not be parsed in the expected format."""

    def __init__(self, token: str, expected: str):
        self.token = token
        self.expected = expected
        super().__init__(f"Malformed date '{token}': expected {expected}")


class FetchError(RegisterError):
    """Transport failure while retrieving the register page."""


class DocumentParseError(RegisterError):
    """The document passed the signature check but has no parseable markup."""
