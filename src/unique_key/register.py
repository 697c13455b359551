"""
Unique-key register: emulates a uniqueness constraint on key/value pairs
with a dedicated index in a document store.

Usage:
    uniq = UniqueKey(ElasticsearchStore(Elasticsearch(uri)))
    uniq.bootstrap()

    created = uniq.create("email", "joe@example.com")
    deleted = uniq.delete("email", "joe@example.com")
    exists = uniq.exists("email", "joe@example.com")
    updated = uniq.update("email", "joe@example.com", "joe@example.org")

    uniq.delete_type("email")
    uniq.delete_index()
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .config import IndexSchema, IndexSettings, RegisterConfig
from .exceptions import ConfigurationError, ConflictError, InvalidArgument
from .store.base import DocumentStore

logger = logging.getLogger(__name__)

KeyId = Union[str, int]
Pairs = Mapping[str, KeyId]


class ConflictSet(Dict[str, KeyId]):
    """key_name -> key_id pairs that could not be created because they already exist"""


class ExistingSet(Dict[str, KeyId]):
    """key_name -> key_id pairs that exist"""


class MissingSet(Dict[str, KeyId]):
    """key_name -> key_id pairs that did not exist when they were deleted"""


class UniqueKey:
    """
    Tracks unique key_name/key_id combinations in a single index.

    Each key_name is a document type in the index, so one index serves any
    number of unique keys. The store does the real work: create() relies on
    its atomic create-if-absent. update() is two store calls and is not atomic.
    """

    DEFAULT_SCHEMA = IndexSchema()

    def __init__(
        self,
        store: Optional[DocumentStore],
        config: Optional[RegisterConfig] = None,
        index: Optional[str] = None,
    ):
        if store is None:
            raise ConfigurationError(message="Missing required param store")
        config = config or RegisterConfig()
        index = index if index is not None else config.index
        if not index:
            raise ConfigurationError(message="Missing required param index")
        self._store = store
        self._index = index

    @property
    def index(self) -> str:
        return self._index

    @property
    def store(self) -> DocumentStore:
        return self._store

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(index={self._index!r})"

    # Single-key operations

    def create(self, key_name: str, key_id: KeyId) -> bool:
        """Return True if key_name/key_id was created, False if it already existed"""
        key_name, key_id = self._params('create', key_name, key_id)
        try:
            self._store.create_document(self._index, key_name, key_id, {})
        except ConflictError:
            logger.debug(f"Unique key {key_name}/{key_id} already exists")
            return False
        logger.debug(f"Created unique key {key_name}/{key_id}")
        return True

    def delete(self, key_name: str, key_id: KeyId) -> bool:
        """Return True if key_name/key_id existed and was deleted"""
        key_name, key_id = self._params('delete', key_name, key_id)
        deleted = self._store.delete_document(self._index, key_name, key_id, ignore_missing=True)
        logger.debug(f"Delete unique key {key_name}/{key_id}: {'deleted' if deleted else 'not found'}")
        return bool(deleted)

    def exists(self, key_name: str, key_id: KeyId) -> bool:
        key_name, key_id = self._params('exists', key_name, key_id)
        return bool(self._store.document_exists(self._index, key_name, key_id))

    def update(self, key_name: str, old_id: KeyId, new_id: KeyId) -> bool:
        """
        Rename key_name/old_id to key_name/new_id.

        Creates the new combination first and returns False if it already
        exists, leaving the old one alone. Then deletes the old combination
        and returns True whether or not it existed, logging a warning if it
        did not. Renaming an id onto itself is a no-op.
        """
        key_name, old_id = self._params('update', key_name, old_id)
        new_id = self._check_id('update', new_id, 'new id')

        if old_id == new_id:
            logger.debug(f"Unique key {key_name}/{old_id} renamed onto itself, nothing to do")
            return True

        if not self.create(key_name, new_id):
            return False
        if not self.delete(key_name, old_id):
            logger.warning(f"Unique key {key_name}/{old_id} not found")
        return True

    # Batch operations, one store call per pair

    def multi_create(self, pairs: Pairs) -> ConflictSet:
        """Create every pair; return the pairs that already existed (empty on total success)"""
        self._check_pairs('multi_create', pairs)
        failed = ConflictSet()
        for key_name, key_id in pairs.items():
            if not self.create(key_name, key_id):
                failed[key_name] = key_id
        return failed

    def multi_exists(self, pairs: Pairs) -> ExistingSet:
        """Return the pairs that exist"""
        self._check_pairs('multi_exists', pairs)
        found = ExistingSet()
        for key_name, key_id in pairs.items():
            if self.exists(key_name, key_id):
                found[key_name] = key_id
        return found

    def multi_update(self, old_pairs: Pairs, new_pairs: Pairs) -> ConflictSet:
        """
        Update every key_name present in both mappings.
        Returns key_name -> new id for the updates that failed because the new id already existed.
        Keys found in only one mapping are skipped without validation.
        """
        if not isinstance(old_pairs, Mapping) or not isinstance(new_pairs, Mapping):
            raise InvalidArgument(message="multi_update() expects mappings of key_name to key_id")
        common = [key_name for key_name in new_pairs if key_name in old_pairs]
        for key_name in common:
            self._params('multi_update', key_name, old_pairs[key_name])
            self._check_id('multi_update', new_pairs[key_name], 'new id')
        failed = ConflictSet()
        for key_name in common:
            new_id = new_pairs[key_name]
            if not self.update(key_name, old_pairs[key_name], new_id):
                failed[key_name] = new_id
        return failed

    def multi_delete(self, pairs: Pairs) -> MissingSet:
        """Delete every pair; return the pairs that did not exist"""
        self._check_pairs('multi_delete', pairs)
        missing = MissingSet()
        for key_name, key_id in pairs.items():
            if not self.delete(key_name, key_id):
                missing[key_name] = key_id
        return missing

    # Index lifecycle

    def bootstrap(self, settings: Union[IndexSettings, Mapping[str, Any], None] = None) -> Optional['UniqueKey']:
        """
        Create the index if it doesn't already exist.

        Without settings the index gets a single primary shard replicated to
        every node. Settings passed in replace those defaults entirely.
        Returns self, or None if the index already existed.
        """
        if self._store.index_exists(self._index):
            logger.info(f"Index {self._index} already exists, bootstrap skipped")
            return None

        if settings is None:
            settings = IndexSettings()
        elif not isinstance(settings, IndexSettings):
            settings = IndexSettings.model_validate(dict(settings))

        self._store.create_index(self._index, settings.as_dict(), self.DEFAULT_SCHEMA)
        self._store.wait_for_cluster_health("yellow", index=self._index)
        logger.info(f"Bootstrapped unique key index {self._index}")
        return self

    def delete_type(self, key_name: str) -> 'UniqueKey':
        """Delete every key_id of key_name. You will lose your data!"""
        key_name = self._check_name('delete_type', key_name)
        self._store.delete_type(self._index, key_name, ignore_missing=True)
        logger.info(f"Deleted unique key type {key_name} from {self._index}")
        return self

    def delete_index(self) -> 'UniqueKey':
        """Delete the index. You will lose your data!"""
        self._store.delete_index(self._index, ignore_missing=True)
        logger.info(f"Deleted unique key index {self._index}")
        return self

    # Argument checks

    def _params(self, method: str, key_name: Any, key_id: Any) -> Tuple[str, str]:
        return self._check_name(method, key_name), self._check_id(method, key_id)

    @staticmethod
    def _check_name(method: str, key_name: Any) -> str:
        if not isinstance(key_name, str) or not key_name:
            raise InvalidArgument(message=f"No key_name passed to {method}()")
        return key_name

    @staticmethod
    def _check_id(method: str, key_id: Any, label: str = 'key_id') -> str:
        if isinstance(key_id, bool) or not isinstance(key_id, (str, int)):
            raise InvalidArgument(message=f"No {label} passed to {method}()")
        key_id = str(key_id)
        if not key_id:
            raise InvalidArgument(message=f"No {label} passed to {method}()")
        return key_id

    def _check_pairs(self, method: str, pairs: Any) -> None:
        """Validate a whole batch before the first store call"""
        if not isinstance(pairs, Mapping):
            raise InvalidArgument(message=f"{method}() expects a mapping of key_name to key_id")
        for key_name, key_id in pairs.items():
            self._params(method, key_name, key_id)
