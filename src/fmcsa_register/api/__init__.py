"""
User-facing API interfaces for fmcsa-register.

This module provides the extraction engine, the fetch/extract/store
pipeline and the process-boundary response builders.
"""

from fmcsa_register.api.extraction import RegisterExtractor, CategoryOutcome, extract_register
from fmcsa_register.api.pipeline import RegisterPipeline
from fmcsa_register.api.responses import (
    build_success_response,
    build_failure_response,
    scrape_register
)

__all__ = [
    'RegisterExtractor',
    'CategoryOutcome',
    'extract_register',
    'RegisterPipeline',
    'build_success_response',
    'build_failure_response',
    'scrape_register'
]
