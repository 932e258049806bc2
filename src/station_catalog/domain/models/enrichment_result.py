"""Enrichment result domain model."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class EnrichmentResult:
    """Facts scraped from a single entity page."""

    id: int
    title: str
    address: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return asdict(self)
