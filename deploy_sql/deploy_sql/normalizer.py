"""Normalization of sparse connection options.

Turns a :class:`ConnectionOptions` in which any field may be missing, blank or
of the wrong type into :class:`NormalizedOptions` with concrete defaults.

Rules applied after every value is coerced to text:

* ``host``     -- trimmed, lowercased, ``127.0.0.1`` when empty.
* ``port``     -- trimmed, ``3306`` when empty, then parsed leniently as an
  integer (leading digit run).  ``None`` when no digits lead the text.
* ``user``     -- trimmed, ``root`` when empty.
* ``password`` -- omitted when empty; never trimmed, never defaulted.
* ``database`` -- trimmed, omitted when empty.
* ``rejectUnauthorized`` -- only produces a TLS block when explicitly set.

INVARIANT: normalization never raises and has no side effects.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from deploy_sql.options import ConnectionOptions, NormalizedOptions, TlsOptions

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = "3306"
DEFAULT_USER = "root"

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def to_string_safe(value: Any) -> str:
    """Coerce *value* to text; ``None`` becomes the empty string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def to_boolean_safe(value: Any, default: bool = False) -> bool:
    """Coerce *value* to a boolean by truthiness; ``None`` yields *default*."""
    if value is None:
        return default
    return bool(value)


def parse_int(text: str) -> int | None:
    """Parse the leading integer of *text*, or return ``None`` if there is none."""
    match = _LEADING_INT_RE.match(text.strip())
    if match is None:
        return None
    return int(match.group(0))


def coerce_options(options: ConnectionOptions | Mapping[str, Any] | None) -> ConnectionOptions:
    """Return *options* as :class:`ConnectionOptions`; ``None`` means no options."""
    if options is None:
        return ConnectionOptions()
    if isinstance(options, ConnectionOptions):
        return options
    return ConnectionOptions.model_validate(dict(options))


def port_text(options: ConnectionOptions) -> str:
    """Return the trimmed port text, ``3306`` when blank, before integer parsing."""
    return to_string_safe(options.port).strip() or DEFAULT_PORT


def normalize_options(
    options: ConnectionOptions | Mapping[str, Any] | None = None,
) -> NormalizedOptions:
    """Return driver-ready parameters for *options*.

    Parameters
    ----------
    options:
        The caller's options.  ``None`` and plain mappings are accepted and
        treated like an equivalent :class:`ConnectionOptions`.

    Returns
    -------
    NormalizedOptions
        Parameters with defaults filled in and blank optional values dropped.
    """
    options = coerce_options(options)

    host = to_string_safe(options.host).lower().strip() or DEFAULT_HOST
    port = port_text(options)
    user = to_string_safe(options.user).strip() or DEFAULT_USER
    password = to_string_safe(options.password) or None
    database = to_string_safe(options.database).strip() or None

    ssl: TlsOptions | None = None
    if options.reject_unauthorized is not None:
        ssl = TlsOptions(reject_unauthorized=to_boolean_safe(options.reject_unauthorized))

    return NormalizedOptions(
        host=host,
        port=parse_int(port),
        user=user,
        password=password,
        database=database,
        ssl=ssl,
    )
