"""
Document stores backing the unique-key register.

- DocumentStore: abstract capability contract
- ElasticsearchStore: Elasticsearch implementation
- MemoryStore: in-process implementation
"""

from .base import DocumentStore
from .elasticsearch import ElasticsearchStore
from .memory import MemoryStore

__all__ = ['DocumentStore', 'ElasticsearchStore', 'MemoryStore']
