"""
Configuration models and config-file loading.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError

DEFAULT_INDEX = "unique_key"
REPLICATE_ALL_NODES = "all-nodes"


class IndexSettings(BaseModel):
    """Settings used when bootstrap() creates the index.

    Unknown keys are kept and handed to the store verbatim.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    shard_count: int = 1
    replication: Union[str, int] = Field(default=REPLICATE_ALL_NODES, alias="replication_mode")

    def as_dict(self) -> Dict[str, Any]:
        """Only explicitly given keys, unless nothing was given at all (then the defaults)."""
        given = {name: getattr(self, name) for name in self.model_fields_set if name in type(self).model_fields}
        given.update(self.model_extra or {})
        return given or self.model_dump()


class IndexSchema(BaseModel):
    """Per-type behaviour of the index. Everything off: the index is an existence registry only."""
    model_config = ConfigDict(frozen=True)

    store_body: bool = False
    index_fields: bool = False
    index_type_field: bool = False


class RegisterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: str = DEFAULT_INDEX


class StoreConfig(BaseModel):
    es_uri: str = "http://localhost:9200"
    # passed as `refresh` on every write
    refresh: Union[bool, Literal["wait_for"]] = "wait_for"
    request_timeout: Optional[float] = None


class Settings(BaseModel):
    registry: RegisterConfig = RegisterConfig()
    store: StoreConfig = StoreConfig()
    log_level: str = "info"


def load_settings(config_file: Optional[Path]) -> Dict[str, Any]:
    """Read a JSON settings file, raising ConfigurationError if it cannot be parsed."""
    if not config_file:
        return {}
    try:
        with open(config_file, 'r') as config_handle:
            return json.load(config_handle)
    except (OSError, ValueError) as e:
        logging.error(f"Error loading config file {config_file}: {e}")
        raise ConfigurationError(e, f"Cannot load config file {config_file}: {e}")


def load_config(config_file: Union[str, Path, None]) -> Settings:
    """
    Load and return the configuration from a JSON file.
    If the file is not found, return default configuration values.
    """
    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            try:
                return Settings.model_validate(load_settings(config_path))
            except ValidationError as e:
                raise ConfigurationError(e, f"Invalid config file {config_path}: {e}")
    logging.warning(f'Configuration file "{config_file}" not found. Using defaults.')
    return Settings()


def configure_logging(level: str = "info") -> None:
    """Configure root logging for host applications from a textual level."""
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ConfigurationError(message=f"Unknown log level: {level}")
    logging.basicConfig(
        level=numeric,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
