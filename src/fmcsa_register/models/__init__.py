"""
Pydantic models for request/response validation.

This module contains type-safe models for the register extraction
engine and its storage and request boundaries.
"""

from fmcsa_register.models.category import CategoryDescriptor
from fmcsa_register.models.entry import Entry, NOT_AVAILABLE
from fmcsa_register.models.document import RawDocument
from fmcsa_register.models.result import ExtractionResult
from fmcsa_register.models.requests import RegisterRequest
from fmcsa_register.models.stored import StoredEntry, create_document_id

__all__ = [
    'CategoryDescriptor',
    'Entry',
    'NOT_AVAILABLE',
    'RawDocument',
    'ExtractionResult',
    'RegisterRequest',
    'StoredEntry',
    'create_document_id',
]
