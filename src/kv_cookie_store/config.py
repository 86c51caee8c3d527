"""Configuration models and factories for building a cookie store.

The models mirror what a deployment would put in YAML or JSON::

    engine:
      type: sqlite
      path: /var/lib/app/cookies.db
    prefix: ["cookies", "tenant-42"]
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from kv_cookie_store.engines import Engine, InMemoryEngine, SQLiteEngine
from kv_cookie_store.exceptions import StoreConfigError
from kv_cookie_store.index import DEFAULT_PREFIX, CookieIndex


class EngineConfig(BaseModel):
    """Engine configuration.

    Attributes:
        type: Engine type ("memory" or "sqlite")
        path: Path to SQLite database file (for sqlite type)
        table: Table name holding the key-value pairs (for sqlite type)
        page_size: Rows fetched per scan round trip (for sqlite type)
    """

    type: Literal["memory", "sqlite"] = "memory"
    path: str = ""
    table: str = "cookie_kv"
    page_size: int = Field(default=128, ge=1)


class StoreConfig(BaseModel):
    """Complete cookie store configuration.

    Attributes:
        engine: Backing engine configuration
        prefix: Namespace prefix every cookie key starts with
    """

    engine: EngineConfig = Field(default_factory=EngineConfig)
    prefix: list[str] = Field(default_factory=lambda: list(DEFAULT_PREFIX))


def create_engine(config: EngineConfig) -> Engine:
    """Create an engine from configuration.

    Raises:
        StoreConfigError: If the sqlite engine has no path
    """
    if config.type == "sqlite":
        if not config.path:
            raise StoreConfigError("SQLite engine requires 'path' configuration")
        return SQLiteEngine(config.path, table=config.table, page_size=config.page_size)
    return InMemoryEngine()


def create_cookie_index(
    config: StoreConfig | dict[str, Any] | None = None,
    engine: Engine | None = None,
) -> CookieIndex:
    """Build a :class:`CookieIndex` from configuration.

    Args:
        config: Store configuration, as a model or a plain dict.
                Defaults to an in-memory engine under ``["cookies"]``.
        engine: Engine to use instead of the configured one.

    Raises:
        StoreConfigError: If the configuration is invalid
    """
    if config is None:
        config = StoreConfig()
    elif isinstance(config, dict):
        try:
            config = StoreConfig.model_validate(config)
        except ValidationError as e:
            raise StoreConfigError(f"Invalid store configuration: {e}") from e

    return CookieIndex(engine or create_engine(config.engine), prefix=config.prefix)
