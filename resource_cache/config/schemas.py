"""
resource-cache — Configuration Schemas

Typed configuration models using Pydantic for validation and type safety.

The backing store is selected by a two-variant tagged union:
- StoreConnection: connection parameters, a redis client is built from them
- StoreFactory: a zero-argument callable returning a ready client
"""

from collections.abc import Callable
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConnection(BaseModel):
    """Connection parameters for a redis client built by the cache."""

    kind: Literal["connection"] = "connection"
    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra client options passed verbatim (db, password, socket_timeout, ...)",
    )


class StoreFactory(BaseModel):
    """Caller-supplied zero-argument factory returning a ready redis client."""

    kind: Literal["factory"] = "factory"
    factory: Callable[[], Any] = Field(description="Zero-argument client factory")


StoreConfig = Annotated[StoreConnection | StoreFactory, Field(discriminator="kind")]


class CacheConfig(BaseModel):
    """Cache configuration."""

    ttl: int = Field(default=0, ge=0, description="Entry TTL in milliseconds (0 = writes disabled)")
    prefix: str = Field(default="", description="Prefix prepended to every store key")
    store: StoreConfig = Field(default_factory=StoreConnection, description="How the store client is obtained")

    @field_validator("store", mode="before")
    @classmethod
    def coerce_store(cls, v: Any) -> Any:
        """
        Accept a bare callable or a flat mapping of connection parameters.

        {"host": "h", "port": 1, "db": 2} -> StoreConnection(host="h", port=1, options={"db": 2})
        """
        if callable(v):
            return StoreFactory(factory=v)
        if isinstance(v, dict) and "kind" not in v:
            params = {name: v[name] for name in ("host", "port") if name in v}
            options = {name: value for name, value in v.items() if name not in ("host", "port")}
            return {"kind": "connection", **params, "options": options}
        return v

    model_config = ConfigDict(validate_assignment=True)


class ResourceCacheConfig(BaseModel):
    """Root configuration."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    cache: CacheConfig = Field(default_factory=CacheConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
