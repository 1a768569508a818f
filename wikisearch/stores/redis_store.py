"""
Redis-backed posting store.

Layout:
    URLSet:<term>       set of URLs containing the term
    TermCounter:<url>   hash of term -> count for the page at url
"""

import logging
from typing import Dict, List, Mapping, Set

import redis

from wikisearch.errors import FailureReason, StoreUnavailableError
from wikisearch.store_base import PostingStore, StoreBackend

logger = logging.getLogger(__name__)

URL_SET_PREFIX = 'URLSet:'
TERM_COUNTER_PREFIX = 'TermCounter:'


def url_set_key(term: str) -> str:
    return URL_SET_PREFIX + term


def term_counter_key(url: str) -> str:
    return TERM_COUNTER_PREFIX + url


def _decode(value):
    return value.decode() if isinstance(value, bytes) else value


class RedisPostingStore(PostingStore):
    """
    Posting store reading term counts from Redis.
    """
    backend = StoreBackend.REDIS

    def __init__(self, client: redis.Redis):
        """
        Initialize the store.

        Args:
            client: Connected redis.Redis client
        """
        self.client = client

    def _unavailable(self, e: Exception) -> StoreUnavailableError:
        if isinstance(e, redis.exceptions.AuthenticationError):
            return StoreUnavailableError(FailureReason.AUTH_REJECTED, str(e))
        return StoreUnavailableError(FailureReason.CONNECTION_FAILED, str(e))

    def urls(self, term: str) -> Set[str]:
        """Returns the set of URLs containing the term."""
        try:
            members = self.client.smembers(url_set_key(term))
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise self._unavailable(e) from e
        return {_decode(m) for m in members}

    def term_count(self, url: str, term: str) -> int:
        """Returns the count of term on the page at url, 0 if missing."""
        try:
            value = self.client.hget(term_counter_key(url), term)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise self._unavailable(e) from e
        return int(_decode(value)) if value is not None else 0

    def lookup(self, term: str) -> Dict[str, int]:
        """
        Looks up a term and returns a map from URL to count.

        Reads the URL set, then fetches every count in a single pipeline.
        """
        urls: List[str] = sorted(self.urls(term))
        if not urls:
            return {}

        try:
            pipe = self.client.pipeline(transaction=False)
            for url in urls:
                pipe.hget(term_counter_key(url), term)
            values = pipe.execute()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise self._unavailable(e) from e

        counts = {}
        for url, value in zip(urls, values):
            counts[url] = int(_decode(value)) if value is not None else 0

        logger.debug(f"Redis lookup '{term}': {len(counts)} URLs")
        return counts

    def index_counts(self, url: str, counts: Mapping[str, int]) -> None:
        """
        Records the term counts for one page.

        Args:
            url: Page URL
            counts: Mapping of term to count on that page
        """
        try:
            pipe = self.client.pipeline(transaction=True)
            for term, count in counts.items():
                pipe.sadd(url_set_key(term), url)
                pipe.hset(term_counter_key(url), term, int(count))
            pipe.execute()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise self._unavailable(e) from e

        logger.info(f"Indexed {len(counts)} terms for {url}")

    def close(self) -> None:
        self.client.close()
