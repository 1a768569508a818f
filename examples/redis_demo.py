#!/usr/bin/env python
"""
Demo script for the Redis posting store

Writes term counts for a few pages into Redis, then evaluates boolean
queries against them.
Run with: python examples/redis_demo.py [redis://:AUTH@HOST:PORT]
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wikisearch.query import QueryEvaluator
from wikisearch.stores.connection import instructions, make_redis_connection
from wikisearch.stores.redis_store import RedisPostingStore
from wikisearch.utils.render import print_results


PAGES = {
    "https://en.wikipedia.org/wiki/Java_(programming_language)": {
        "java": 300, "programming": 55, "language": 80,
    },
    "https://en.wikipedia.org/wiki/Programming_language": {
        "programming": 210, "language": 190, "java": 12,
    },
    "https://en.wikipedia.org/wiki/Coffee": {
        "coffee": 400, "java": 8,
    },
}


def main():
    url = sys.argv[1] if len(sys.argv) > 1 else None
    connection = make_redis_connection(url=url, url_file="resources/redis_url.txt")

    if not connection.ok:
        print(f"Redis connection failed ({connection.reason.value}): {connection.message}")
        print(instructions())
        return 1

    with RedisPostingStore(connection.client) as store:
        print("="*60)
        print("Indexing pages")
        print("="*60)
        for page_url, counts in PAGES.items():
            store.index_counts(page_url, counts)
            print(f"  {page_url}: {len(counts)} terms")

        evaluator = QueryEvaluator(store)
        for query in ["java", "java AND programming", "java OR coffee",
                      "language MINUS java", "(java OR coffee) AND NOT programming"]:
            results = evaluator.evaluate(query)
            print_results(results.top(10), title=f"Query: {query}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
