"""DuckDB storage backend for variation sources."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import duckdb
import pandas as pd

from variationhub.config import StoreConfig
from variationhub.models import SOURCE_DATA_TYPES, Source, SomaticStatus, SourceType
from variationhub.storage.base import SourceNotFoundError, SourceStore

logger = logging.getLogger(__name__)

_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SOURCE_COLUMNS: tuple[str, ...] = (
    "source_id",
    "name",
    "version",
    "description",
    "url",
    "type",
    "somatic_status",
    "data_types",
)


class DuckDBSourceStore(SourceStore):
    """Keep variation sources in a DuckDB table mirroring the Ensembl schema."""

    def __init__(self, *, db_path: str | Path, table_name: str = "source") -> None:
        if not _TABLE_RE.match(table_name):
            raise ValueError(f"Unsafe table name: {table_name}")

        self.db_path = Path(db_path)
        self.table_name = table_name

    @classmethod
    def from_config(cls, config: StoreConfig) -> DuckDBSourceStore:
        return cls(db_path=config.db_path, table_name=config.table_name)

    def create_schema(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        connection = duckdb.connect(str(self.db_path))
        try:
            self._ensure_table(connection)
        finally:
            connection.close()

    def fetch_by_dbID(self, source_id: int) -> Source:  # noqa: N802
        logger.debug("Fetching source %s from %s", source_id, self.table_name)
        row = self._fetch_one("source_id = ?", [int(source_id)])
        if row is None:
            raise SourceNotFoundError(f"No source with source_id={source_id}")
        return self._to_source(row)

    def fetch_by_name(self, name: str) -> Source:
        logger.debug("Fetching source '%s' from %s", name, self.table_name)
        row = self._fetch_one("name = ?", [name])
        if row is None:
            raise SourceNotFoundError(f"No source named '{name}'")
        return self._to_source(row)

    def fetch_all(self) -> list[Source]:
        connection = self._read_connection()
        if connection is None:
            logger.debug("No %s table at %s", self.table_name, self.db_path)
            return []
        try:
            rows = connection.execute(
                f"SELECT {', '.join(SOURCE_COLUMNS)} FROM {self.table_name} ORDER BY source_id"
            ).fetchall()
        finally:
            connection.close()

        logger.debug("Fetched %d sources from %s", len(rows), self.table_name)
        return [self._to_source(row) for row in rows]

    def store(self, source: Source) -> Source:
        _check_data_types(source.data_types)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        connection = duckdb.connect(str(self.db_path))
        try:
            self._ensure_table(connection)
            source_id = source.source_id
            if source_id is None:
                source_id = self._next_id(connection)

            row = source.with_id(source_id).to_row()
            connection.execute(
                f"INSERT INTO {self.table_name} ({', '.join(SOURCE_COLUMNS)}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, CAST(? AS VARCHAR[]))",
                [row[column] for column in SOURCE_COLUMNS],
            )
        finally:
            connection.close()

        logger.debug("Stored source '%s' as source_id=%s", source.name, source_id)
        return source.with_id(source_id)

    def load_frame(self, frame: pd.DataFrame) -> int:
        """Bulk-load source rows from a DataFrame and return the inserted count.

        ``data_types`` may hold lists or comma-joined strings, the latter being
        how MySQL ``SET`` columns are exported. Rows without ``source_id`` are
        numbered after the current maximum.
        """

        if frame.empty:
            return 0

        staged = frame.copy()
        for column in SOURCE_COLUMNS:
            if column not in staged.columns:
                staged[column] = None

        staged["data_types"] = staged["data_types"].map(self._join_data_types)
        for joined in staged["data_types"].dropna():
            _check_data_types(item for item in joined.split(",") if item)
        staged["somatic_status"] = staged["somatic_status"].map(
            lambda value: SomaticStatus.GERMLINE.value if _is_missing(value) else str(value)
        )

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        connection = duckdb.connect(str(self.db_path))
        try:
            self._ensure_table(connection)

            missing_ids = staged["source_id"].isna()
            if missing_ids.any():
                next_id = self._next_id(connection)
                if not missing_ids.all():
                    next_id = max(next_id, int(staged["source_id"].max()) + 1)
                staged.loc[missing_ids, "source_id"] = list(
                    range(next_id, next_id + int(missing_ids.sum()))
                )

            staged = staged[list(SOURCE_COLUMNS)]
            # NaN would reach DuckDB as a float, not NULL
            for column in SOURCE_COLUMNS:
                staged[column] = staged[column].astype(object).where(staged[column].notna(), None)

            connection.register("source_frame", staged)
            connection.execute(
                f"""
                INSERT INTO {self.table_name} ({', '.join(SOURCE_COLUMNS)})
                SELECT
                    CAST(source_id AS INTEGER),
                    name,
                    CAST(version AS INTEGER),
                    description,
                    url,
                    type,
                    somatic_status,
                    CASE
                        WHEN data_types IS NULL OR data_types = '' THEN CAST([] AS VARCHAR[])
                        ELSE string_split(data_types, ',')
                    END
                FROM source_frame
                """
            )
            connection.unregister("source_frame")
        finally:
            connection.close()

        logger.debug("Loaded %d source rows into %s", len(staged), self.table_name)
        return len(staged)

    def _fetch_one(self, where: str, params: Sequence[Any]) -> tuple[Any, ...] | None:
        connection = self._read_connection()
        if connection is None:
            return None
        try:
            return connection.execute(
                f"SELECT {', '.join(SOURCE_COLUMNS)} FROM {self.table_name} WHERE {where}",
                list(params),
            ).fetchone()
        finally:
            connection.close()

    def _read_connection(self) -> duckdb.DuckDBPyConnection | None:
        """Open the database read-only, or return None if the table is absent.

        Reads never create the database file.
        """

        if not self.db_path.exists():
            return None

        connection = duckdb.connect(str(self.db_path), read_only=True)
        try:
            (tables,) = connection.execute(
                "SELECT COUNT(*) FROM information_schema.tables "
                "WHERE lower(table_name) = lower(?)",
                [self.table_name],
            ).fetchone()
        except Exception:
            connection.close()
            raise

        if not tables:
            connection.close()
            return None
        return connection

    def _ensure_table(self, connection: duckdb.DuckDBPyConnection) -> None:
        connection.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.table_name} (
                source_id INTEGER PRIMARY KEY,
                name VARCHAR NOT NULL UNIQUE,
                version INTEGER,
                description VARCHAR,
                url VARCHAR,
                type VARCHAR CHECK (type IN ('chip', 'lsdb')),
                somatic_status VARCHAR NOT NULL DEFAULT 'germline'
                    CHECK (somatic_status IN ('germline', 'somatic', 'mixed')),
                data_types VARCHAR[]
            )
            """
        )

    def _next_id(self, connection: duckdb.DuckDBPyConnection) -> int:
        (current,) = connection.execute(
            f"SELECT COALESCE(MAX(source_id), 0) FROM {self.table_name}"
        ).fetchone()
        return int(current) + 1

    @staticmethod
    def _join_data_types(value: Any) -> str | None:
        if isinstance(value, (list, tuple)):
            return ",".join(str(item) for item in value)
        if _is_missing(value):
            return None
        return str(value)

    @staticmethod
    def _to_source(row: Sequence[Any]) -> Source:
        values = dict(zip(SOURCE_COLUMNS, row))
        source_type = values["type"]

        return Source(
            source_id=values["source_id"],
            name=values["name"],
            version=values["version"],
            description=values["description"],
            url=values["url"],
            type=SourceType(source_type) if source_type is not None else None,
            somatic_status=SomaticStatus(values["somatic_status"]),
            data_types=tuple(values["data_types"] or ()),
        )


def _check_data_types(data_types: Iterable[str]) -> None:
    unknown = sorted(set(data_types) - set(SOURCE_DATA_TYPES))
    if unknown:
        raise ValueError(f"Unknown source data types: {', '.join(unknown)}")


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value))
