#!/usr/bin/env python
"""
Main entry point for WikiSearch.
Uses Fire for CLI and Hydra for configuration management.
"""

import os
import sys
import logging
import fire
import hydra
from omegaconf import OmegaConf
from dotenv import load_dotenv

# Load .env variables and register resolver
load_dotenv()
OmegaConf.register_new_resolver("env", os.getenv)

from wikisearch.errors import FailureReason, QueryParseError, StoreUnavailableError
from wikisearch.query import BooleanQueryParser, QueryEvaluator
from wikisearch.results import ResultSet
from wikisearch.stores.connection import connect_store, instructions
from wikisearch.utils.render import print_results


class SearchCLI:
    """CLI for WikiSearch."""

    def __init__(self, config_path: str = "conf", config_name: str = "config"):
        """
        Initialize CLI with configuration.

        Args:
            config_path: Path to config directory
            config_name: Name of main config file
        """
        self.config_path = config_path
        self.config_name = config_name
        self.config = None
        self.logger = None

    def _init_config(self, overrides=None):
        """Initialize Hydra configuration."""
        with hydra.initialize(version_base=None, config_path=self.config_path):
            if overrides:
                self.config = hydra.compose(config_name=self.config_name, overrides=list(overrides))
            else:
                self.config = hydra.compose(config_name=self.config_name)

        # Setup logging
        logging.basicConfig(
            level=getattr(logging, self.config.logging.level),
            format=self.config.logging.format
        )
        self.logger = logging.getLogger(__name__)

    def _connect(self):
        """Connect to the configured store, printing setup help on failure."""
        try:
            return connect_store(self.config)
        except StoreUnavailableError as e:
            self.logger.error(f"Posting store unavailable ({e.reason.value}): {e.message}")
            if e.reason != FailureReason.UNSUPPORTED_BACKEND:
                print(instructions())
            sys.exit(1)

    def query(self, query: str, backend: str = None, descending: bool = None,
              limit: int = None, overrides=None):
        """
        Evaluate a boolean query and print the ranked results.

        Args:
            query: Query string, e.g. "java AND programming MINUS coffee"
            backend: Posting store backend (memory, redis, rocksdb)
            descending: Most relevant first (default from config)
            limit: Maximum number of results to print
            overrides: Extra Hydra overrides
        """
        overrides = list(overrides or [])
        if backend:
            overrides.append(f"store.backend={backend}")
        self._init_config(overrides)

        if descending is None:
            descending = self.config.query.descending
        if limit is None:
            limit = self.config.query.default_limit

        store = self._connect()
        with store:
            evaluator = QueryEvaluator(store, lowercase=self.config.query.lowercase)
            try:
                results = evaluator.evaluate(query)
            except QueryParseError as e:
                self.logger.error(f"Invalid query '{query}': {e}")
                sys.exit(2)
            except StoreUnavailableError as e:
                self.logger.error(f"Lookup failed ({e.reason.value}): {e.message}")
                sys.exit(1)

        entries = results.top(limit) if descending else results.sort()[:limit]
        self.logger.info(f"Query '{query}' matched {len(results)} documents")
        print_results(entries, title=f"Query: {query}")

    def explain(self, query: str):
        """
        Show how a query is tokenized and parsed.

        Args:
            query: Query string to explain
        """
        self._init_config()
        print(BooleanQueryParser().explain_query(query))

    def demo(self):
        """Combine two fixed result sets and print every operation."""
        self._init_config()

        search1 = ResultSet({"Page1": 1, "Page2": 2, "Page3": 3})
        search2 = ResultSet({"Page2": 4, "Page3": 5, "Page4": 7})

        self.logger.info("Logic verification with fixed data")
        print_results(search1.sort(), title="Query: TEST 1 (Page1:1, Page2:2, Page3:3)")
        print_results(search2.sort(), title="Query: TEST 2 (Page2:4, Page3:5, Page4:7)")
        print_results(search1.and_(search2).sort(), title="Query: TEST 1 AND TEST 2")
        print_results(search1.or_(search2).sort(), title="Query: TEST 1 OR TEST 2")
        print_results(search1.minus(search2).sort(), title="Query: TEST 1 MINUS TEST 2")

    def check_store(self, backend: str = None):
        """
        Verify that the configured posting store can be reached.

        Args:
            backend: Posting store backend to check
        """
        overrides = [f"store.backend={backend}"] if backend else None
        self._init_config(overrides)

        store = self._connect()
        with store:
            self.logger.info(f"✓ Connected: {store!r}")
        return True


def main():
    """Main entry point."""
    fire.Fire(SearchCLI)


if __name__ == "__main__":
    main()
