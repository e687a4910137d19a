"""
Process-boundary responses.

Success and failure shapes consumed by presentation and storage clients:

    {"success": true, "count": N, "date": "05-JAN-24", "entries": [...]}
    {"success": false, "error": "...", "entries": []}

scrape_register() is the boundary entry point: it converts every register,
input or configuration error into the failure shape and never raises for them.
"""

from typing import Any, Dict, Optional
import logging

from fmcsa_register.errors import RegisterError, UnexpectedDocumentError
from fmcsa_register.models.result import ExtractionResult

logger = logging.getLogger(__name__)


def build_success_response(result: ExtractionResult) -> Dict[str, Any]:
    """Success shape for an extraction result."""
    return result.to_response()


def build_failure_response(error: str) -> Dict[str, Any]:
    """Failure shape; never carries partial entries."""
    return {
        'success': False,
        'error': error,
        'entries': []
    }


def scrape_register(date: Optional[str] = None, pipeline=None) -> Dict[str, Any]:
    """
    Fetch and extract one register date, returning a boundary response.

    Args:
        date: Register date in DD-MMM-YY format (default: today)
        pipeline: RegisterPipeline to use (default: fetch-only pipeline
            without storage)

    Returns:
        Success or failure response dictionary

    Example:
        >>> response = scrape_register('05-JAN-24')
        >>> response['success'], response['date']
        (True, '05-JAN-24')
    """
    from fmcsa_register.api.pipeline import RegisterPipeline

    owns_pipeline = pipeline is None

    try:
        if owns_pipeline:
            pipeline = RegisterPipeline()
        result = pipeline.run(date)
        return build_success_response(result)
    except UnexpectedDocumentError as e:
        logger.error(f"Scrape error: {e}")
        return build_failure_response('Invalid response from FMCSA')
    except (RegisterError, ValueError, OSError) as e:
        logger.error(f"Scrape error: {e}", exc_info=True)
        return build_failure_response(f"Failed to scrape FMCSA register data: {e}")
    finally:
        if owns_pipeline and pipeline is not None:
            pipeline.close()
