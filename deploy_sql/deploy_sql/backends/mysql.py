"""MySQL backend built on :mod:`aiomysql`.

Each call to :func:`create_mysql_connection` opens exactly one dedicated
connection; there is no pooling, retrying or timeout handling here.  Driver
exceptions reach the caller unchanged: aiomysql reports connect failures,
socket errors included, as ``pymysql.err.OperationalError``, while socket
errors during a query or close may surface as raw ``OSError``.
"""

from __future__ import annotations

import logging
import ssl
from collections.abc import Mapping
from typing import Any

import aiomysql

from deploy_sql.connection import ConnectionType, SqlConnection, SqlResult
from deploy_sql.normalizer import coerce_options, normalize_options, port_text, to_string_safe
from deploy_sql.options import ConnectionOptions, NormalizedOptions, TlsOptions

logger = logging.getLogger(__name__)

SCHEME = "mysql"


class MySqlResult(SqlResult):
    """Result of a successful MySQL query."""


class MySqlConnection(SqlConnection):
    """Handle around an :class:`aiomysql.Connection`."""

    def __init__(self, connection: aiomysql.Connection, name: str) -> None:
        super().__init__(connection, name, ConnectionType.MYSQL)

    async def _execute(self, sql: str, args: tuple[Any, ...]) -> MySqlResult:
        cursor = await self.connection.cursor()
        try:
            await cursor.execute(sql, args or None)
        finally:
            await cursor.close()
        return MySqlResult()

    async def _terminate(self) -> None:
        # Sends COM_QUIT before dropping the socket.
        await self.connection.ensure_closed()


def build_ssl_context(tls: TlsOptions) -> ssl.SSLContext:
    """Return an SSL context honouring ``reject_unauthorized``."""
    context = ssl.create_default_context()
    if not tls.reject_unauthorized:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def connection_name(options: NormalizedOptions, port: str | None = None) -> str:
    """Return ``mysql://<host>:<port>/<database>`` for *options*.

    *port* is the trimmed port text as the caller wrote it; the parsed
    integer is used when it is not given.
    """
    if port is None:
        port = to_string_safe(options.port)
    return f"{SCHEME}://{options.host}:{port}/{to_string_safe(options.database)}"


def _driver_kwargs(options: NormalizedOptions) -> dict[str, Any]:
    if options.port is None:
        raise ValueError("Invalid port: expected an integer")

    kwargs = options.to_connect_kwargs()
    if "database" in kwargs:
        kwargs["db"] = kwargs.pop("database")
    if "ssl" in kwargs:
        kwargs["ssl"] = build_ssl_context(kwargs["ssl"])
    # Match the MySQL server default so statements are not rolled back on close.
    kwargs["autocommit"] = True
    return kwargs


async def create_mysql_connection(
    options: ConnectionOptions | Mapping[str, Any] | None = None,
) -> MySqlConnection:
    """Open a new MySQL connection.

    Parameters
    ----------
    options:
        Sparse connection options; see :func:`normalize_options` for the
        defaults that apply.

    Returns
    -------
    MySqlConnection
        An open connection.  The caller owns it and must :meth:`close` it.
    """
    options = coerce_options(options)
    normalized = normalize_options(options)
    name = connection_name(normalized, port_text(options))
    kwargs = _driver_kwargs(normalized)

    logger.debug("Opening MySQL connection %s as %s", name, normalized.user)
    raw = await aiomysql.connect(**kwargs)
    logger.debug(
        "Opened MySQL connection %s",
        name,
        extra={"connection": {"name": name, "type": ConnectionType.MYSQL.value}},
    )

    return MySqlConnection(raw, name)
