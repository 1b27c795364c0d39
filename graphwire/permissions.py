"""
Permission propagation.

Global grants apply to every compute function of the API, including
functions created after the grant. They are kept in attachment order
and replayed against each new function as it is registered, so the
order of "attach permissions" and "add data source" calls does not
matter.

Targeted grants apply once to one function that must already exist,
and are not kept.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .errors import UnknownTarget

if TYPE_CHECKING:
    from .providers.base import ComputeFunction
    from .registry import DataSourceEntry, DataSourceRegistry

logger = logging.getLogger(__name__)


class PermissionPropagator:
    """
    Applies permission descriptors to compute functions.

    Permission descriptors are opaque; they are handed to
    ComputeFunction.attach_permissions unchanged.
    """

    def __init__(
        self,
        data_sources: DataSourceRegistry,
        lookup: Callable[[str], DataSourceEntry | None],
    ) -> None:
        """
        Args:
            data_sources: Registry whose functions receive global grants
            lookup: Resolves a data source or resolver key to an entry
        """
        self._data_sources = data_sources
        self._lookup = lookup
        self._global_grants: list[Any] = []

    @property
    def global_grants(self) -> tuple[Any, ...]:
        return tuple(self._global_grants)

    def attach_global(self, permissions: Any) -> None:
        """Grant to every current function and remember for future ones."""
        functions = self._data_sources.functions()
        for function in functions:
            function.attach_permissions(permissions)
        self._global_grants.append(permissions)
        logger.info(f"[permissions] Attached global grant to {len(functions)} function(s)")

    def attach_targeted(self, key: str, permissions: Any) -> None:
        """
        Grant to the function behind one data source or resolver key.

        Raises:
            UnknownTarget: If no function exists for `key`
        """
        entry = self._lookup(key)
        if entry is None or entry.function is None:
            raise UnknownTarget(
                f'Failed to attach permissions. Function does not exist for key "{key}".'
            )
        entry.function.attach_permissions(permissions)
        logger.info(f"[permissions] Attached grant to data source: {entry.key}")

    def replay(self, function: ComputeFunction) -> None:
        """Apply every retained global grant to a newly created function."""
        for permissions in self._global_grants:
            function.attach_permissions(permissions)
        if self._global_grants:
            logger.debug(
                f"[permissions] Replayed {len(self._global_grants)} global grant(s) "
                f"to {function.function_name}"
            )
