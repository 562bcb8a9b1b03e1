"""Package store backed by SQLAlchemy (SQLite by default)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import Boolean, DateTime, Index, String, Text, create_engine, select, types
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from .models import Documentation, PackageEntry
from .models.description import DescriptionStatus

DEFAULT_DATABASE_URL = "sqlite:///documentation.db"

log = structlog.get_logger("docmapper.store")


class DocumentationJSON(types.TypeDecorator):
    """Documentation record stored as JSON text; unreadable values load as ``{}``."""

    impl = types.Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return {}
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            log.warning("store.documentation_unreadable")
            return {}


class Base(DeclarativeBase):
    pass


class PackageRow(Base):
    __tablename__ = "packages"
    __table_args__ = (Index("ix_packages_name", "name"),)

    ecosystem: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(512), primary_key=True)
    version: Mapped[str] = mapped_column(String(255), primary_key=True)
    source: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    description_status: Mapped[str] = mapped_column(
        String(32), default=DescriptionStatus.FOUND.value
    )
    documentation: Mapped[dict[str, Any]] = mapped_column(DocumentationJSON)
    manifest_path: Mapped[str | None] = mapped_column(Text)
    is_dev_dependency: Mapped[bool] = mapped_column(Boolean, default=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True))


def _to_row(entry: PackageEntry) -> PackageRow:
    return PackageRow(
        ecosystem=entry.ecosystem,
        name=entry.name,
        version=entry.version,
        source=entry.source,
        description=entry.description,
        description_status=entry.description_status,
        documentation=entry.documentation.to_dict(),
        manifest_path=entry.manifest_path,
        is_dev_dependency=entry.is_dev_dependency,
        last_updated=entry.last_updated,
    )


def _from_row(row: PackageRow) -> PackageEntry:
    last_updated = row.last_updated
    # SQLite drops the offset on the way back.
    if last_updated.tzinfo is None:
        last_updated = last_updated.replace(tzinfo=timezone.utc)
    return PackageEntry(
        ecosystem=row.ecosystem,
        name=row.name,
        version=row.version,
        description=row.description or "",
        documentation=Documentation.from_dict(row.documentation),
        last_updated=last_updated,
        source=row.source or "",
        manifest_path=row.manifest_path or "",
        is_dev_dependency=bool(row.is_dev_dependency),
        description_status=row.description_status or DescriptionStatus.FOUND.value,
    )


class PackageStore:
    """Upsert/get/query over the ``packages`` table.

    The primary key is (ecosystem, name, version); writing an existing key
    replaces the stored entry. Every upsert runs in its own transaction.
    """

    def __init__(self, url: str = DEFAULT_DATABASE_URL, *, engine: Engine | None = None) -> None:
        self._engine = engine or create_engine(url)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        log.info("store.ready", backend=self._engine.dialect.name)

    def close(self) -> None:
        self._engine.dispose()

    def __enter__(self) -> PackageStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def upsert(self, entry: PackageEntry) -> None:
        with self._session_factory.begin() as session:
            session.merge(_to_row(entry))

    def get(self, name: str, version: str, ecosystem: str) -> PackageEntry | None:
        with self._session_factory() as session:
            row = session.get(PackageRow, (ecosystem, name, version))
            return _from_row(row) if row is not None else None

    def query(
        self,
        *,
        ecosystem: str | None = None,
        name: str | None = None,
        version: str | None = None,
    ) -> list[PackageEntry]:
        """Return entries matching every given filter, ordered by name then version."""
        stmt = select(PackageRow)
        if ecosystem:
            stmt = stmt.where(PackageRow.ecosystem == ecosystem)
        if name:
            stmt = stmt.where(PackageRow.name == name)
        if version:
            stmt = stmt.where(PackageRow.version == version)
        stmt = stmt.order_by(PackageRow.name, PackageRow.version)

        with self._session_factory() as session:
            return [_from_row(row) for row in session.scalars(stmt).all()]
