from abc import ABC, abstractmethod
from typing import Dict
from enum import Enum


# Identifier enum for the posting store backends
class StoreBackend(Enum):
    MEMORY = 'memory'
    REDIS = 'redis'
    ROCKSDB = 'rocksdb'


class PostingStore(ABC):
    """
    Base posting store class with abstract methods to inherit for specific backends.
    """
    backend: StoreBackend = None
    
    def __repr__(self):
        return f"{type(self).__name__}(backend={self.backend.value if self.backend else None})"
    
    @abstractmethod
    def lookup(self, term: str) -> Dict[str, int]:
        """
        Returns the postings for a term as a mapping of document id to term count.
        
        An unknown term yields an empty dict. Failing to reach the store must
        raise StoreUnavailableError instead of returning an empty dict.
        
        Args:
            term: The term to look up
            
        Returns:
            Dict mapping document id (URL) to relevance score
        """
        pass
    
    def close(self) -> None:
        """Releases any resources held by the store."""
        pass
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
