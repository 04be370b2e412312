# src/flightsearch/providers/base.py

from abc import ABC, abstractmethod
from typing import List, Optional

from flightsearch.core.models import FlightOffersResult, LocationOption, SearchParams


class ProviderError(RuntimeError):
    """A provider could not produce a usable result (bad query or bad upstream shape)."""

    def __init__(self, message: str, status_code: Optional[int] = None, issues: Optional[list] = None):
        super().__init__(message)
        self.status_code = status_code
        self.issues = issues or []


class FlightSearchProvider(ABC):

    @abstractmethod
    def search(self, params: SearchParams) -> FlightOffersResult:
        ...

    @abstractmethod
    def search_locations(self, keyword: str) -> List[LocationOption]:
        ...
