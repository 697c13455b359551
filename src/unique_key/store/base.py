"""
Document store interface used by the unique-key register.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..config import IndexSchema


class DocumentStore(ABC):
    """
    Capability contract of the backing document store.

    A document is addressed by (index, type, id). The register only needs
    atomic create-if-absent, delete, exists and index lifecycle calls.
    """

    @abstractmethod
    def index_exists(self, index: str) -> bool:
        """Check whether the index exists"""
        pass

    @abstractmethod
    def create_index(self, index: str, settings: Dict[str, Any], schema: IndexSchema) -> None:
        """Create the index with the given settings and per-type schema"""
        pass

    @abstractmethod
    def create_document(self, index: str, type: str, id: str, body: Optional[Dict[str, Any]] = None) -> None:
        """Insert a document if absent, raise ConflictError if it already exists"""
        pass

    @abstractmethod
    def delete_document(self, index: str, type: str, id: str, ignore_missing: bool = True) -> bool:
        """Delete a document, return True if one was removed"""
        pass

    @abstractmethod
    def document_exists(self, index: str, type: str, id: str) -> bool:
        """Check whether a document exists"""
        pass

    @abstractmethod
    def delete_type(self, index: str, type: str, ignore_missing: bool = True) -> None:
        """Delete every document of one type"""
        pass

    @abstractmethod
    def delete_index(self, index: str, ignore_missing: bool = True) -> None:
        """Delete the whole index"""
        pass

    @abstractmethod
    def wait_for_cluster_health(self, min_status: str = "yellow", index: Optional[str] = None) -> None:
        """Block until the cluster reaches at least min_status"""
        pass
