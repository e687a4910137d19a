"""
Raw register document as handed over by the fetch client.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_MARKER = "FMCSA REGISTER"


@dataclass(frozen=True)
class RawDocument:
    """Fetched HTML text plus the request date it was retrieved for."""
    html: str
    request_date: Optional[str] = None
    marker: str = DEFAULT_MARKER

    @property
    def has_signature(self) -> bool:
        """True if the page contains the register marker (case-insensitive)."""
        return self.marker.upper() in self.html.upper()
