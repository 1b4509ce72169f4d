"""Connectors for the supported database backends."""

from __future__ import annotations

from deploy_sql.backends.mysql import MySqlConnection, MySqlResult, create_mysql_connection

__all__ = [
    "MySqlConnection",
    "MySqlResult",
    "create_mysql_connection",
]
