"""
Port (interface) for historical data interpreters.
Infrastructure adapters (e.g. LxmlHistoricalDataInterpreter) must implement this interface.

Implementations must be pure and stateless: no caching, no shared tree between
calls, and no exception raised for malformed input.
"""

from abc import ABC, abstractmethod
from typing import Optional

from catalog.domain.entities.historical_data import ParseOutcome


class IHistoricalDataInterpreter(ABC):
    @abstractmethod
    def parse_structure(self, text: Optional[str]) -> ParseOutcome:
        """Turn *text* into a generic tree, or a ParseFailure if it is malformed."""
        ...

    @abstractmethod
    def extract_latest_change_date(self, text: Optional[str]) -> Optional[str]:
        """Return the date of the last price change in document order, or None."""
        ...
