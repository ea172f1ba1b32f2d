"""In-process key-value stores: a sorted memory store and a write-buffering branch."""

from kudos.store.cache import CacheKVStore
from kudos.store.memory import MemoryKVStore

__all__ = ["CacheKVStore", "MemoryKVStore"]
