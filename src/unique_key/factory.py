"""
Register factory: builds an Elasticsearch-backed register from configuration.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from elasticsearch import Elasticsearch

from .config import Settings, load_config
from .register import UniqueKey
from .store.elasticsearch import ElasticsearchStore


class RegisterFactory:
    """
    Factory for creating registers. Keeps no instance of its own; the caller
    owns the returned register and closes its client.

    Usage:
        uniq = RegisterFactory.from_file("config.json")
        uniq.bootstrap()
        ...
        uniq.store.get_connection().close()
    """

    @classmethod
    def create_client(cls, settings: Settings) -> Elasticsearch:
        kwargs = {}
        if settings.store.request_timeout is not None:
            kwargs['request_timeout'] = settings.store.request_timeout
        return Elasticsearch(settings.store.es_uri, **kwargs)

    @classmethod
    def create(cls, settings: Optional[Settings] = None, client: Optional[Elasticsearch] = None) -> UniqueKey:
        """
        Create a register.

        Args:
            settings: Configuration, defaults used when omitted
            client: Existing Elasticsearch client to reuse instead of building one

        Returns:
            UniqueKey bound to an ElasticsearchStore
        """
        settings = settings or Settings()
        if client is None:
            client = cls.create_client(settings)
        store = ElasticsearchStore(client, refresh=settings.store.refresh)
        register = UniqueKey(store, settings.registry)
        logging.info(f"RegisterFactory: created register on {settings.store.es_uri}, index {register.index}")
        return register

    @classmethod
    def from_file(cls, config_file: Union[str, Path], client: Optional[Elasticsearch] = None) -> UniqueKey:
        return cls.create(load_config(config_file), client)
