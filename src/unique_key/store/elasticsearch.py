"""
Elasticsearch document store implementation.
Contains the ElasticsearchStore class mapping key entries onto a typeless index.
"""

import logging
from typing import Any, Dict, Literal, Optional, Union
from urllib.parse import quote

from elasticsearch import ConflictError as ESConflictError
from elasticsearch import Elasticsearch, NotFoundError

from ..config import REPLICATE_ALL_NODES, IndexSchema
from ..exceptions import ConfigurationError, ConflictError
from .base import DocumentStore

logger = logging.getLogger(__name__)


class ElasticsearchStore(DocumentStore):
    """Elasticsearch implementation of the document store

    Elasticsearch has no mapping types any more, so a key entry lives at
    _id "<type>/<id>" with routing "<type>". The type part is percent-encoded
    so it never contains the separator. The routing value is what
    delete_type() queries on; the document body stays empty.
    """

    ID_SEPARATOR = "/"

    def __init__(self, client: Elasticsearch, refresh: Union[bool, Literal["wait_for"]] = "wait_for"):
        if not isinstance(refresh, bool) and refresh != "wait_for":
            raise ConfigurationError(message=f"Invalid refresh mode: {refresh!r}")
        self._client = client
        self.refresh = refresh

    def get_connection(self) -> Elasticsearch:
        """Get Elasticsearch client instance"""
        return self._client

    def doc_id(self, type: str, id: str) -> str:
        return f"{quote(type, safe='')}{self.ID_SEPARATOR}{id}"

    def index_exists(self, index: str) -> bool:
        return bool(self._client.indices.exists(index=index))

    def create_index(self, index: str, settings: Dict[str, Any], schema: IndexSchema) -> None:
        es_settings = self._translate_settings(settings)
        mappings = self._translate_schema(schema)
        self._client.indices.create(index=index, settings=es_settings, mappings=mappings)
        logger.info(f"Created index: {index}")

    def create_document(self, index: str, type: str, id: str, body: Optional[Dict[str, Any]] = None) -> None:
        try:
            self._client.create(
                index=index,
                id=self.doc_id(type, id),
                document=body or {},
                routing=type,
                refresh=self.refresh,
            )
        except ESConflictError as e:
            # ES driver exception -> translate to our exception
            raise ConflictError(e, index=index, key_name=type, key_id=id)

    def delete_document(self, index: str, type: str, id: str, ignore_missing: bool = True) -> bool:
        try:
            response = self._client.delete(
                index=index,
                id=self.doc_id(type, id),
                routing=type,
                refresh=self.refresh,
            )
        except NotFoundError:
            if ignore_missing:
                return False
            raise
        return response.get("result") == "deleted"

    def document_exists(self, index: str, type: str, id: str) -> bool:
        return bool(self._client.exists(index=index, id=self.doc_id(type, id), routing=type))

    def delete_type(self, index: str, type: str, ignore_missing: bool = True) -> None:
        try:
            response = self._client.delete_by_query(
                index=index,
                query={"term": {"_routing": type}},
                conflicts="proceed",
                # delete-by-query only takes a boolean; "wait_for" means refresh
                refresh=self.refresh == "wait_for" or self.refresh is True,
            )
        except NotFoundError:
            if ignore_missing:
                return
            raise
        logger.info(f"Deleted {response.get('deleted', 0)} entries of type {type} from {index}")

    def delete_index(self, index: str, ignore_missing: bool = True) -> None:
        try:
            self._client.indices.delete(index=index)
        except NotFoundError:
            if ignore_missing:
                return
            raise
        logger.info(f"Deleted index: {index}")

    def wait_for_cluster_health(self, min_status: str = "yellow", index: Optional[str] = None) -> None:
        response = self._client.cluster.health(index=index, wait_for_status=min_status)
        if response.get("timed_out"):
            logger.warning(f"Cluster did not reach {min_status} status, current status: {response.get('status')}")

    @staticmethod
    def _translate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
        """Map store-neutral settings onto Elasticsearch index settings, passing unknown keys through"""
        es_settings: Dict[str, Any] = {}
        for key, value in settings.items():
            if key == "shard_count":
                es_settings["number_of_shards"] = value
            elif key in ("replication", "replication_mode"):
                if value == REPLICATE_ALL_NODES:
                    es_settings["auto_expand_replicas"] = "0-all"
                elif isinstance(value, int) and not isinstance(value, bool):
                    es_settings["number_of_replicas"] = value
                else:
                    es_settings["auto_expand_replicas"] = value
            else:
                es_settings[key] = value
        return es_settings

    @staticmethod
    def _translate_schema(schema: IndexSchema) -> Dict[str, Any]:
        return {
            "_source": {"enabled": schema.store_body},
            "_routing": {"required": True},
            "_meta": {"index_type_field": schema.index_type_field},
            "enabled": schema.index_fields,
        }
