"""
RocksDB-backed posting store using rocksdict.
Stores term -> JSON postings, one entry per document.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Mapping

from rocksdict import Rdict, Options, AccessType

from wikisearch.errors import FailureReason, StoreUnavailableError
from wikisearch.store_base import PostingStore, StoreBackend

logger = logging.getLogger(__name__)


class RocksDBPostingStore(PostingStore):
    """
    Posting store using RocksDB as datastore.
    Each key is a term, each value a JSON list of {'doc_id', 'term_freq'}.
    """
    backend = StoreBackend.ROCKSDB

    def __init__(self, db_path: str, read_only: bool = True):
        """
        Open a RocksDB posting store.

        Args:
            db_path: Directory of the RocksDB database
            read_only: Open without write access
        """
        self.db_path = Path(db_path)
        self.read_only = read_only

        if read_only and not self.db_path.exists():
            raise StoreUnavailableError(
                FailureReason.CONFIG_MISSING, f"RocksDB not found: {self.db_path}"
            )

        opts = Options()
        try:
            if read_only:
                self.db = Rdict(str(self.db_path), options=opts,
                                access_type=AccessType.read_only())
            else:
                self.db_path.mkdir(parents=True, exist_ok=True)
                opts.create_if_missing(True)
                self.db = Rdict(str(self.db_path), options=opts)
        except Exception as e:
            raise StoreUnavailableError(FailureReason.CONNECTION_FAILED, str(e)) from e

        logger.info(f"Opened RocksDB posting store at {self.db_path}")

    def lookup(self, term: str) -> Dict[str, int]:
        if self.db is None:
            raise StoreUnavailableError(
                FailureReason.CONNECTION_FAILED, f"RocksDB store at {self.db_path} is closed"
            )

        try:
            postings_json = self.db.get(term)
        except Exception as e:
            raise StoreUnavailableError(FailureReason.CONNECTION_FAILED, str(e)) from e
        if not postings_json:
            return {}

        try:
            postings = json.loads(postings_json)
            return {str(posting['doc_id']): int(posting['term_freq']) for posting in postings}
        except (ValueError, KeyError, TypeError) as e:
            raise StoreUnavailableError(
                FailureReason.CONNECTION_FAILED, f"Corrupt postings for '{term}': {e}"
            ) from e

    def put_counts(self, term: str, counts: Mapping[str, int]) -> None:
        """Write the postings for a term, replacing any existing entry."""
        if self.read_only:
            raise PermissionError("RocksDB posting store is opened read-only")

        postings = [
            {'doc_id': str(doc_id), 'term_freq': int(count)}
            for doc_id, count in counts.items()
        ]
        self.db[term] = json.dumps(postings)

    def close(self) -> None:
        if self.db is not None:
            self.db.close()
            self.db = None
