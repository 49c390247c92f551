"""Reference data store backed by SQLAlchemy Core.

Implements the :class:`~tenant_installer.provisioning.capabilities.DataStore`
capability over any SQLAlchemy dialect. The driver identifier chosen by the
operator (``dbType``) is used as the dialect name; SQLite databases are
stored as ``<dataRoot>/<dbName>.db``.

Besides the capability methods the store offers generic ``create`` and
``retrieve`` helpers, used by the reference auth plugin and content-plugin
registry that share its engine.

The coroutine methods run their (short, blocking) SQL statements inline:
the installer is single-threaded and awaits every call before continuing.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    insert,
    select,
)
from sqlalchemy.engine import URL, Engine, make_url

from tenant_installer.provisioning.capabilities import Filter, Tenant

logger = logging.getLogger(__name__)

metadata = MetaData()

tenant_table = Table(
    "tenant",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("name", String(255), nullable=False, unique=True),
    Column("display_name", String(255), nullable=False),
    Column("is_master", Boolean, nullable=False, default=False),
    Column("database", JSON, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=True),
)

user_table = Table(
    "user",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("tenant_id", String(32), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=True),
)

rolemapping_table = Table(
    "rolemapping",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("user_id", String(32), nullable=False),
    Column("role", String(64), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=True),
)

contentpackage_table = Table(
    "contentpackage",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("tenant_id", String(32), nullable=False),
    Column("category", String(32), nullable=False),
    Column("name", String(255), nullable=False),
    Column("version", String(64), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=True),
)

MODEL_NAMES: tuple[str, ...] = ("tenant", "user", "rolemapping", "contentpackage")


def build_url(resolved: Mapping[str, Any], data_root: Path) -> URL:
    r"""Build the SQLAlchemy URL for the resolved configuration.

    Parameters
    ----------
    resolved : Mapping[str, Any]
        Resolved configuration (``dbType``, ``dbHost``, ``dbPort``,
        ``dbName``, ``dbUser``, ``dbPass``).
    data_root : Path
        Directory holding SQLite database files.

    Returns
    -------
    sqlalchemy.engine.URL

    Examples
    --------
    >>> from pathlib import Path
    >>> build_url({"dbType": "sqlite", "dbName": "master"}, Path("/srv/data")).database
    '/srv/data/master.db'
    """
    driver = str(resolved.get("dbType") or "sqlite")
    db_name = str(resolved.get("dbName") or "tenant-master")
    if driver == "sqlite":
        return URL.create("sqlite", database=str(data_root / f"{db_name}.db"))
    port = resolved.get("dbPort")
    return URL.create(
        driver,
        username=resolved.get("dbUser") or None,
        password=resolved.get("dbPass") or None,
        host=resolved.get("dbHost") or None,
        port=int(port) if port not in (None, "") else None,
        database=db_name,
    )


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SqlDataStore:
    """Data store over a SQLAlchemy engine.

    Parameters
    ----------
    url : str or sqlalchemy.engine.URL
        Database URL.
    """

    def __init__(self, url: str | URL) -> None:
        self.url = url
        self._engine: Engine | None = None

    @classmethod
    def from_config(cls, resolved: Mapping[str, Any], data_root: Path) -> "SqlDataStore":
        """Create a store for the resolved configuration."""
        return cls(build_url(resolved, data_root))

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Data store is not connected")
        return self._engine

    def _table(self, model_name: str) -> Table:
        try:
            return metadata.tables[model_name]
        except KeyError:
            raise ValueError(f"Unknown model '{model_name}'") from None

    def _where(self, table: Table, filter: Filter | None) -> list[Any]:
        clauses = []
        for key, value in (filter or {}).items():
            if key not in table.c:
                raise ValueError(f"Unknown field '{key}' for model '{table.name}'")
            clauses.append(table.c[key] == value)
        return clauses

    async def connect(self) -> None:
        """Open the engine and create any missing tables."""
        if self._engine is not None:
            return
        url = make_url(self.url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        self._engine = create_engine(self.url)
        metadata.create_all(self._engine)
        logger.info("Connected data store %s", self._engine.url.render_as_string())

    async def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    async def create(self, model_name: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Insert ``record`` into ``model_name`` and return the stored row."""
        table = self._table(model_name)
        row = {"id": uuid.uuid4().hex, "created_at": _now(), **record}
        with self.engine.begin() as conn:
            conn.execute(insert(table).values(**row))
        return row

    async def retrieve(self, model_name: str, filter: Filter | None = None) -> list[dict[str, Any]]:
        """Return every row of ``model_name`` matching ``filter``."""
        table = self._table(model_name)
        stmt = select(table).where(*self._where(table, filter))
        with self.engine.connect() as conn:
            return [dict(row._mapping) for row in conn.execute(stmt)]

    async def destroy(self, model_name: str, filter: Filter | None) -> None:
        """Delete rows of ``model_name`` matching ``filter`` (all rows for ``None``)."""
        table = self._table(model_name)
        with self.engine.begin() as conn:
            result = conn.execute(delete(table).where(*self._where(table, filter)))
        logger.info("Deleted %s row(s) from %s", result.rowcount, model_name)

    async def get_model_names(self) -> list[str]:
        return list(MODEL_NAMES)

    async def retrieve_tenant(self, filter: Filter) -> Tenant | None:
        rows = await self.retrieve("tenant", filter)
        if not rows:
            return None
        return _to_tenant(rows[0])

    async def create_tenant(self, spec: Mapping[str, Any]) -> Tenant:
        row = await self.create(
            "tenant",
            {
                "name": spec["name"],
                "display_name": spec.get("display_name") or spec["name"],
                "is_master": bool(spec.get("is_master", False)),
                "database": dict(spec.get("database") or {}),
            },
        )
        return _to_tenant(row)

    async def delete_user(self, filter: Filter) -> dict[str, Any] | None:
        rows = await self.retrieve("user", filter)
        if not rows:
            return None
        await self.destroy("user", filter)
        return rows[0]


def _to_tenant(row: Mapping[str, Any]) -> Tenant:
    return Tenant(
        id=str(row["id"]),
        name=row["name"],
        display_name=row["display_name"],
        is_master=bool(row["is_master"]),
        database=dict(row.get("database") or {}),
    )


__all__ = ["MODEL_NAMES", "SqlDataStore", "build_url", "metadata"]
