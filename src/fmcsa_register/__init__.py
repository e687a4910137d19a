"""
fmcsa-register: FMCSA daily register extraction library.

Main package exports for user-facing API.
"""

from fmcsa_register.api import (
    RegisterExtractor,
    RegisterPipeline,
    extract_register,
    scrape_register
)
from fmcsa_register.services import RegisterFetcher, StorageService
from fmcsa_register.types import Categories

__all__ = [
    'RegisterExtractor',
    'RegisterPipeline',
    'extract_register',
    'scrape_register',
    'RegisterFetcher',
    'StorageService',
    'Categories'
]
