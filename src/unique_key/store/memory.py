"""
In-process document store, for tests and single-process use.
"""

import logging
from threading import Lock
from typing import Any, Dict, Optional, Set, Tuple

from ..config import IndexSchema
from ..exceptions import ConflictError
from .base import DocumentStore

logger = logging.getLogger(__name__)


class MemoryStore(DocumentStore):
    """Keeps (type, id) pairs per index in a set. Bodies are discarded."""

    def __init__(self):
        self._lock = Lock()
        self._indices: Dict[str, Set[Tuple[str, str]]] = {}
        self.index_settings: Dict[str, Dict[str, Any]] = {}
        self.index_schemas: Dict[str, IndexSchema] = {}

    def index_exists(self, index: str) -> bool:
        with self._lock:
            return index in self._indices

    def create_index(self, index: str, settings: Dict[str, Any], schema: IndexSchema) -> None:
        with self._lock:
            if index in self._indices:
                raise ValueError(f"Index {index} already exists")
            self._indices[index] = set()
            self.index_settings[index] = dict(settings)
            self.index_schemas[index] = schema
        logger.info(f"Created index: {index}")

    def create_document(self, index: str, type: str, id: str, body: Optional[Dict[str, Any]] = None) -> None:
        with self._lock:
            # like Elasticsearch, creating a document auto-creates its index
            entries = self._indices.setdefault(index, set())
            if (type, id) in entries:
                raise ConflictError(index=index, key_name=type, key_id=id)
            entries.add((type, id))

    def delete_document(self, index: str, type: str, id: str, ignore_missing: bool = True) -> bool:
        with self._lock:
            entries = self._indices.get(index, set())
            if (type, id) in entries:
                entries.discard((type, id))
                return True
        if not ignore_missing:
            raise KeyError(f"{index}/{type}/{id}")
        return False

    def document_exists(self, index: str, type: str, id: str) -> bool:
        with self._lock:
            return (type, id) in self._indices.get(index, set())

    def delete_type(self, index: str, type: str, ignore_missing: bool = True) -> None:
        with self._lock:
            entries = self._indices.get(index)
            if entries is None:
                if not ignore_missing:
                    raise KeyError(index)
                return
            self._indices[index] = {entry for entry in entries if entry[0] != type}

    def delete_index(self, index: str, ignore_missing: bool = True) -> None:
        with self._lock:
            if index not in self._indices:
                if not ignore_missing:
                    raise KeyError(index)
                return
            del self._indices[index]
            self.index_settings.pop(index, None)
            self.index_schemas.pop(index, None)
        logger.info(f"Deleted index: {index}")

    def wait_for_cluster_health(self, min_status: str = "yellow", index: Optional[str] = None) -> None:
        # a single process is always green
        return None
