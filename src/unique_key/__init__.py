"""
Track unique keys in a document store.

The only unique key a document store gives you is the document ID. When the
unique value should not be the ID (an email address you don't want in your
URLs, say), UniqueKey keeps a dedicated index with one document type per
key name and relies on the store's atomic create to enforce uniqueness.
"""

from .config import IndexSchema, IndexSettings, RegisterConfig, Settings, StoreConfig, load_config
from .exceptions import ConfigurationError, ConflictError, InvalidArgument, UniqueKeyError
from .factory import RegisterFactory
from .register import ConflictSet, ExistingSet, MissingSet, UniqueKey
from .store import DocumentStore, ElasticsearchStore, MemoryStore

__version__ = "0.1"

__all__ = [
    'UniqueKey', 'ConflictSet', 'ExistingSet', 'MissingSet',
    'DocumentStore', 'ElasticsearchStore', 'MemoryStore',
    'RegisterFactory',
    'IndexSchema', 'IndexSettings', 'RegisterConfig', 'Settings', 'StoreConfig', 'load_config',
    'UniqueKeyError', 'ConfigurationError', 'ConflictError', 'InvalidArgument',
]
