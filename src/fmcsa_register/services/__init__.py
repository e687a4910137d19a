"""
Service layer for fmcsa-register.

This module contains the collaborators around the extraction engine:
- RegisterFetcher: HTTP retrieval of register pages
- StorageService: MongoDB storage of extracted entries
"""

from fmcsa_register.services.register_fetcher import RegisterFetcher
from fmcsa_register.services.storage_service import StorageService

__all__ = [
    'RegisterFetcher',
    'StorageService'
]
