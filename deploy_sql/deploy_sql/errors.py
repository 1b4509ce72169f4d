"""Exceptions raised by deploy_sql itself.

Driver exceptions (``pymysql.err.*`` and friends) are never wrapped in these;
they reach the caller exactly as the driver raised them.
"""

from __future__ import annotations


class SqlConnectionError(Exception):
    """Base exception for all deploy_sql errors."""


class UnsupportedConnectionTypeError(SqlConnectionError, ValueError):
    """No connector is registered for the requested connection type."""

    def __init__(self, connection_type: object) -> None:
        self.connection_type = connection_type
        literal = getattr(connection_type, "value", connection_type)
        super().__init__(f"Type '{literal}' is not supported!")


class ConnectionClosedError(SqlConnectionError):
    """The connection handle was already closed."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Connection '{name}' is closed!")
