"""
WikiSearch - boolean query evaluation over per-term posting lists.
"""

from .results.result_set import ResultSet, RankedEntry
from .store_base import PostingStore, StoreBackend
from .errors import WikiSearchError, StoreError, StoreUnavailableError, QueryParseError

__all__ = [
    'ResultSet',
    'RankedEntry',
    'PostingStore',
    'StoreBackend',
    'WikiSearchError',
    'StoreError',
    'StoreUnavailableError',
    'QueryParseError',
]
