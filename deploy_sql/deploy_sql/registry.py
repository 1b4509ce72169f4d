"""Connector registry and dispatch.

Maps each :class:`ConnectionType` to the coroutine function that opens a
connection of that type.  A registry never changes after construction; new
backends are added by building an extended copy with
:meth:`ConnectorRegistry.extended`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from deploy_sql.backends.mysql import create_mysql_connection
from deploy_sql.connection import ConnectionType, SqlConnection
from deploy_sql.errors import UnsupportedConnectionTypeError

logger = logging.getLogger(__name__)

Connector = Callable[..., Awaitable[SqlConnection]]


class ConnectorRegistry:
    """Immutable mapping of connection type to connector.

    Parameters
    ----------
    connectors:
        Initial mapping.  It is copied, so later changes to the argument
        do not leak into the registry.
    """

    def __init__(self, connectors: Mapping[ConnectionType, Connector] | None = None) -> None:
        self._connectors: Mapping[ConnectionType, Connector] = MappingProxyType(dict(connectors or {}))

    def extended(self, connection_type: ConnectionType | str, connector: Connector) -> ConnectorRegistry:
        """Return a new registry that also maps *connection_type* to *connector*.

        Raises
        ------
        ValueError
            If *connection_type* is already registered.
        """
        if connection_type in self._connectors:
            literal = getattr(connection_type, "value", connection_type)
            raise ValueError(f"Connection type {literal} is already registered.")
        connectors = dict(self._connectors)
        connectors[connection_type] = connector
        return ConnectorRegistry(connectors)

    def get(self, connection_type: object) -> Connector | None:
        """Look up a connector.  Returns ``None`` if the type is not registered."""
        try:
            return self._connectors.get(connection_type)  # type: ignore[call-overload]
        except TypeError:
            # Unhashable input can never be a registered type.
            return None

    def get_types(self) -> list[ConnectionType]:
        """Return all registered connection types, sorted."""
        return sorted(self._connectors, key=lambda ct: str(getattr(ct, "value", ct)))

    def __len__(self) -> int:
        return len(self._connectors)

    def __contains__(self, connection_type: object) -> bool:
        return self.get(connection_type) is not None


DEFAULT_REGISTRY = ConnectorRegistry({ConnectionType.MYSQL: create_mysql_connection})


async def open_connection(
    connection_type: ConnectionType | str,
    args: Sequence[Any] | None = None,
    *,
    registry: ConnectorRegistry | None = None,
) -> SqlConnection:
    """Open a connection of *connection_type*.

    Parameters
    ----------
    connection_type:
        The backend to use.  Plain strings equal to a member value
        (``"mysql"``) resolve like the member itself.
    args:
        Positional arguments for the connector.  The MySQL connector
        accepts at most one :class:`ConnectionOptions` (or mapping).
    registry:
        Registry to resolve against.  Defaults to :data:`DEFAULT_REGISTRY`.

    Returns
    -------
    SqlConnection
        The open connection produced by the connector.

    Raises
    ------
    UnsupportedConnectionTypeError
        If no connector is registered for *connection_type*.  Connector
        and driver exceptions propagate unchanged.
    """
    if registry is None:
        registry = DEFAULT_REGISTRY

    connector = registry.get(connection_type)
    if connector is None:
        raise UnsupportedConnectionTypeError(connection_type)

    logger.debug("Dispatching %s connection", getattr(connection_type, "value", connection_type))
    return await connector(*(args or ()))
