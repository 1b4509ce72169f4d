"""Uniform connection handle shared by every backend.

Every connector -- whatever driver it wraps -- returns a subclass of
:class:`SqlConnection` so that callers can stay backend-agnostic: they only
ever use :meth:`SqlConnection.query`, :meth:`SqlConnection.close` and the
read-only ``name`` / ``type`` / ``connection`` attributes.

Close policy: a handle becomes closed as soon as :meth:`close` is entered.
Any later :meth:`query` or :meth:`close` raises :class:`ConnectionClosedError`
without reaching the driver, even if the first close failed.
"""

from __future__ import annotations

import abc
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from deploy_sql.errors import ConnectionClosedError

logger = logging.getLogger(__name__)


class ConnectionType(str, Enum):
    """Known SQL connection types."""

    MYSQL = "mysql"


class SqlResult(BaseModel):
    """Outcome of a successful query.

    Carries no fields today.  Extra fields are allowed so that backends can
    attach rows or column metadata later without changing the contract for
    callers that only check for success.
    """

    model_config = ConfigDict(frozen=True, extra="allow")


class SqlConnection(abc.ABC):
    """Owned handle to one physical database connection.

    Parameters
    ----------
    connection:
        The underlying driver connection.  Treated as opaque; ownership
        passes to the caller together with this handle.
    name:
        Display name, ``<scheme>://<host>:<port>/<database>``.
    connection_type:
        Type tag of the backend that created the handle.
    """

    def __init__(self, connection: Any, name: str, connection_type: ConnectionType) -> None:
        self._connection = connection
        self._name = name
        self._type = connection_type
        self._closed = False

    @property
    def connection(self) -> Any:
        """The underlying driver connection."""
        return self._connection

    @property
    def name(self) -> str:
        """Display name of the connection, for diagnostics only."""
        return self._name

    @property
    def type(self) -> ConnectionType:
        """Type tag of the backend that created this connection."""
        return self._type

    @property
    def closed(self) -> bool:
        return self._closed

    async def query(self, sql: str, *args: Any) -> SqlResult:
        """Run *sql* with *args* as positional query parameters.

        Raises
        ------
        ConnectionClosedError
            If :meth:`close` was already called.
        """
        if self._closed:
            raise ConnectionClosedError(self._name)
        return await self._execute(sql, args)

    async def close(self) -> None:
        """Terminate the underlying physical connection.

        Raises
        ------
        ConnectionClosedError
            If :meth:`close` was already called.
        """
        if self._closed:
            raise ConnectionClosedError(self._name)
        self._closed = True
        logger.debug("Closing connection %s", self._name)
        await self._terminate()

    @abc.abstractmethod
    async def _execute(self, sql: str, args: tuple[Any, ...]) -> SqlResult:
        """Forward a query to the driver.  Driver errors must propagate as-is."""

    @abc.abstractmethod
    async def _terminate(self) -> None:
        """Shut down the driver connection.  Driver errors must propagate as-is."""

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<{type(self).__name__} {self._name} ({state})>"
