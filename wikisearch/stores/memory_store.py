"""
In-memory posting store backed by plain dicts.
"""

import logging
from typing import Dict, Mapping, Optional

from wikisearch.store_base import PostingStore, StoreBackend

logger = logging.getLogger(__name__)


class InMemoryPostingStore(PostingStore):
    """Posting store holding term -> {doc_id: count} in memory."""
    backend = StoreBackend.MEMORY
    
    def __init__(self, postings: Optional[Mapping[str, Mapping[str, int]]] = None):
        """
        Initialize the store.
        
        Args:
            postings: Optional initial mapping of term to {doc_id: count}
        """
        self._postings: Dict[str, Dict[str, int]] = {}
        for term, counts in (postings or {}).items():
            self.put_counts(term, counts)
    
    def put_counts(self, term: str, counts: Mapping[str, int]) -> None:
        """Replace the postings for a term."""
        self._postings[term] = {str(doc_id): int(count) for doc_id, count in counts.items()}
    
    def lookup(self, term: str) -> Dict[str, int]:
        counts = self._postings.get(term)
        if counts is None:
            logger.debug(f"Unknown term '{term}'")
            return {}
        return dict(counts)
    
    def terms(self):
        return sorted(self._postings)
