"""deploy_sql -- open SQL connections by type behind one async handle.

Usage::

    from deploy_sql import ConnectionType, open_connection

    conn = await open_connection(ConnectionType.MYSQL, [{"host": "db1", "database": "orders"}])
    try:
        await conn.query("UPDATE deployments SET state = %s WHERE id = %s", "done", 42)
    finally:
        await conn.close()

Connections are opened by the connector registered for the requested type;
new backends are added with :meth:`ConnectorRegistry.extended`.
"""

from deploy_sql.backends.mysql import MySqlConnection, MySqlResult, create_mysql_connection
from deploy_sql.connection import ConnectionType, SqlConnection, SqlResult
from deploy_sql.errors import ConnectionClosedError, SqlConnectionError, UnsupportedConnectionTypeError
from deploy_sql.normalizer import normalize_options
from deploy_sql.options import ConnectionOptions, NormalizedOptions, TlsOptions
from deploy_sql.registry import DEFAULT_REGISTRY, ConnectorRegistry, open_connection

__all__ = [
    # Dispatch
    "open_connection",
    "ConnectorRegistry",
    "DEFAULT_REGISTRY",
    # Connections
    "ConnectionType",
    "SqlConnection",
    "SqlResult",
    "MySqlConnection",
    "MySqlResult",
    "create_mysql_connection",
    # Options
    "ConnectionOptions",
    "NormalizedOptions",
    "TlsOptions",
    "normalize_options",
    # Exceptions
    "SqlConnectionError",
    "UnsupportedConnectionTypeError",
    "ConnectionClosedError",
]
