"""Posting store implementations."""

from .memory_store import InMemoryPostingStore
from .connection import StoreConnection, connect_store, make_redis_connection

__all__ = ['InMemoryPostingStore', 'StoreConnection', 'connect_store', 'make_redis_connection']
