"""Connection option models.

:class:`ConnectionOptions` is the sparse, caller-facing shape: every field is
optional and accepts any value.  :class:`NormalizedOptions` is what the
normalizer produces and what connectors hand to their driver.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConnectionOptions(BaseModel):
    """Sparse connection parameters as supplied by the caller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    database: Any = Field(default=None, description="Database (schema) to select after connecting.")
    host: Any = Field(default=None, description="Server host name or address.")
    port: Any = Field(default=None, description="TCP port.")
    user: Any = Field(default=None, description="User name.")
    password: Any = Field(default=None, description="Password.  Never defaulted.")
    reject_unauthorized: Any = Field(
        default=None,
        alias="rejectUnauthorized",
        description="Reject untrusted TLS certificates.  Unset means driver default.",
    )


class TlsOptions(BaseModel):
    """TLS override, only present when the caller asked for one."""

    model_config = ConfigDict(frozen=True)

    reject_unauthorized: bool


class NormalizedOptions(BaseModel):
    """Concrete, driver-ready connection parameters."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int | None
    user: str
    password: str | None = None
    database: str | None = None
    ssl: TlsOptions | None = None

    def to_connect_kwargs(self) -> dict[str, Any]:
        """Return the parameters to forward to a driver.

        Absent ``password``, ``database`` and ``ssl`` are left out entirely
        rather than being sent as ``None``.
        """
        kwargs: dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
        }
        if self.password is not None:
            kwargs["password"] = self.password
        if self.database is not None:
            kwargs["database"] = self.database
        if self.ssl is not None:
            kwargs["ssl"] = self.ssl
        return kwargs
