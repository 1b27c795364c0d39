"""
Data source and resolver registries.

Two maps plus one indirection:

    DataSourceRegistry      data source key -> DataSourceEntry
    ResolverRegistry        resolver key    -> ResolverEntry
                            resolver key    -> data source key (key index)

`find_data_source` is the one place that resolves "either a data
source key or a resolver key" to an entry. Every accessor that accepts
both goes through it.

Both registries are append-only: entries are never replaced or removed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import DuplicateKey
from .keys import normalize_resolver_key

if TYPE_CHECKING:
    from .providers.base import ComputeFunction, DataSourceVariant
    from .templates import MappingTemplate

logger = logging.getLogger(__name__)


@dataclass
class DataSourceEntry:
    """
    A realized data source.

    Attributes:
        key: Unique key within the API
        variant: Kind of backing resource
        data_source: Handle returned by the provider
        function: Compute function, only for the Lambda variant
    """

    key: str
    variant: DataSourceVariant
    data_source: Any
    function: ComputeFunction | None = None


@dataclass
class ResolverEntry:
    """A realized resolver, keyed by "<TypeName> <FieldName>"."""

    key: str
    type_name: str
    field_name: str
    data_source_key: str
    resolver: Any
    request_template: MappingTemplate | None = None
    response_template: MappingTemplate | None = None


class DataSourceRegistry:
    """Data sources by key, in registration order."""

    def __init__(self) -> None:
        self._entries: dict[str, DataSourceEntry] = {}

    def check_available(self, key: str) -> None:
        """
        Raises:
            DuplicateKey: If `key` is already registered
        """
        if key in self._entries:
            raise DuplicateKey(f'Data source "{key}" already exists')

    def add(self, entry: DataSourceEntry) -> None:
        self.check_available(entry.key)
        self._entries[entry.key] = entry
        logger.info(f"[data_sources] Registered {entry.variant.value} data source: {entry.key}")

    def get(self, key: str) -> DataSourceEntry | None:
        return self._entries.get(key)

    def functions(self) -> list[ComputeFunction]:
        """Compute functions of all Lambda data sources, in registration order."""
        return [entry.function for entry in self._entries.values() if entry.function is not None]

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[DataSourceEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<DataSourceRegistry keys={self.keys()}>"


class ResolverRegistry:
    """Resolvers by normalized key, plus the resolver -> data source key index."""

    def __init__(self) -> None:
        self._entries: dict[str, ResolverEntry] = {}
        self._data_source_keys: dict[str, str] = {}

    def check_available(self, key: str) -> None:
        """
        Raises:
            DuplicateKey: If the normalized `key` is already registered
        """
        key = normalize_resolver_key(key)
        if key in self._entries:
            raise DuplicateKey(f'Resolver "{key}" already exists')

    def add(self, entry: ResolverEntry) -> None:
        self.check_available(entry.key)
        self._data_source_keys[entry.key] = entry.data_source_key
        self._entries[entry.key] = entry
        logger.info(f"[resolvers] Registered resolver: {entry.key} -> {entry.data_source_key}")

    def get(self, key: str) -> ResolverEntry | None:
        return self._entries.get(normalize_resolver_key(key))

    def data_source_key_for(self, key: str) -> str | None:
        """Data source key a resolver was bound to, by resolver key."""
        return self._data_source_keys.get(normalize_resolver_key(key))

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_resolver_key(key) in self._entries

    def __iter__(self) -> Iterator[ResolverEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<ResolverRegistry keys={self.keys()}>"


def find_data_source(
    data_sources: DataSourceRegistry,
    resolvers: ResolverRegistry,
    key: str,
) -> DataSourceEntry | None:
    """
    Look up a data source by its own key or by a resolver key.

    The literal data source key is tried first. On a miss the key is
    treated as a resolver key: normalized, mapped through the key index,
    then looked up again. Returns None if either hop misses.
    """
    entry = data_sources.get(key)
    if entry is not None:
        return entry

    data_source_key = resolvers.data_source_key_for(key)
    if data_source_key is None:
        logger.debug(f"[data_sources] No data source for key: {key!r}")
        return None
    return data_sources.get(data_source_key)
