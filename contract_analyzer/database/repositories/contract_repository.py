import uuid
from pathlib import Path
from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from contract_analyzer.database.connection import Database
from contract_analyzer.database.exceptions import (
    StatusTransitionError,
    StoreReadError,
    StoreWriteError,
)
from contract_analyzer.database.models import (
    STATUS_COMPLETED,
    STATUS_PENDING,
    STATUS_PROCESSING,
    ContractRecord,
    ContractSummary,
)
from contract_analyzer.extraction.models import ContractFields, Submittal
from contract_analyzer.extraction.validator import records_to_submittals
from contract_analyzer.processor.exceptions import ContractNotFoundError

SCHEMA_FILE = Path(__file__).resolve().parent.parent / "schema.sql"

_COLUMNS = (
    "id, pdf_name, status, fields, submittals, error_message, created_at, updated_at"
)
_UPDATABLE_COLUMNS = frozenset({"fields", "submittals"})


class ContractRepository:
    """Database operations for the contracts table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def ensure_schema(self) -> None:
        """Apply the bundled schema. Safe to run on every startup."""
        ddl = SCHEMA_FILE.read_text(encoding="utf-8")
        try:
            with self._db.connection() as conn:
                conn.execute(ddl)
                conn.commit()
        except psycopg.Error as exc:
            raise StoreWriteError(f"Failed to apply schema: {exc}") from exc

    def create(self, pdf_name: str) -> ContractRecord:
        """Insert a pending record for an upload awaiting background extraction."""
        return self._insert(pdf_name, STATUS_PENDING, None, [])

    def create_completed(
        self,
        pdf_name: str,
        fields: ContractFields,
        submittals: list[Submittal],
    ) -> ContractRecord:
        """Insert a record whose extraction already finished in the request."""
        return self._insert(pdf_name, STATUS_COMPLETED, fields, submittals)

    def find_by_id(self, contract_id: str) -> ContractRecord:
        """Find a contract by ID.

        Raises:
            ContractNotFoundError: if the ID is malformed or no record exists.
            StoreReadError: if the query fails.
        """
        key = _parse_id(contract_id)
        try:
            with self._db.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT {_COLUMNS} FROM contracts WHERE id = %s",
                        (key,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StoreReadError(f"Failed to load contract {contract_id}: {exc}") from exc

        if row is None:
            raise ContractNotFoundError(f"Contract {contract_id} not found")
        return _to_record(row)

    def list_summaries(self) -> list[ContractSummary]:
        """Return every contract, newest first, without extraction payloads."""
        try:
            with self._db.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT id, pdf_name, status, created_at
                        FROM contracts
                        ORDER BY created_at DESC
                        """
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StoreReadError(f"Failed to list contracts: {exc}") from exc

        return [
            ContractSummary(
                id=str(row["id"]),
                pdf_name=row["pdf_name"],
                status=row["status"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def update(self, contract_id: str, **changes: Any) -> None:
        """Overwrite the given extraction columns of one record.

        Accepts ``fields`` (mapping or None) and ``submittals`` (list of
        Submittal).

        Raises:
            ValueError: if a column other than fields/submittals is named.
            ContractNotFoundError: if no record exists.
            StoreWriteError: if the database rejects the write.
        """
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {sorted(unknown)}")
        if not changes:
            return

        key = _parse_id(contract_id)
        assignments = [
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in changes
        ]
        query = sql.SQL("UPDATE contracts SET {}, updated_at = NOW() WHERE id = %s").format(
            sql.SQL(", ").join(assignments)
        )
        params = [_to_json(column, value) for column, value in changes.items()]
        try:
            with self._db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, (*params, key))
                    if cur.rowcount == 0:
                        raise ContractNotFoundError(f"Contract {contract_id} not found")
                conn.commit()
        except psycopg.Error as exc:
            raise StoreWriteError(f"Failed to update contract {contract_id}: {exc}") from exc

    def mark_processing(self, contract_id: str) -> None:
        """Move a pending record to processing."""
        self._transition(
            contract_id,
            sql.SQL("status = 'processing'"),
            (),
            (STATUS_PENDING,),
        )

    def mark_completed(
        self,
        contract_id: str,
        fields: ContractFields,
        submittals: list[Submittal],
    ) -> None:
        """Store extraction output and move a processing record to completed."""
        self._transition(
            contract_id,
            sql.SQL("status = 'completed', fields = %s, submittals = %s, error_message = NULL"),
            (Jsonb(fields), _submittals_json(submittals)),
            (STATUS_PROCESSING,),
        )

    def mark_failed(self, contract_id: str, error: str) -> None:
        """Record the failure of a pending or processing record."""
        self._transition(
            contract_id,
            sql.SQL("status = 'failed', error_message = %s"),
            (error,),
            (STATUS_PENDING, STATUS_PROCESSING),
        )

    def _insert(
        self,
        pdf_name: str,
        status: str,
        fields: ContractFields | None,
        submittals: list[Submittal],
    ) -> ContractRecord:
        contract_id = uuid.uuid4()
        try:
            with self._db.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO contracts (id, pdf_name, status, fields, submittals)
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING {_COLUMNS}
                        """,
                        (
                            contract_id,
                            pdf_name,
                            status,
                            Jsonb(fields) if fields is not None else None,
                            _submittals_json(submittals),
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise StoreWriteError(f"Failed to create contract record: {exc}") from exc

        if row is None:
            raise StoreWriteError("Insert returned no row")
        return _to_record(row)

    def _transition(
        self,
        contract_id: str,
        assignment: sql.Composable,
        params: tuple[Any, ...],
        from_statuses: tuple[str, ...],
    ) -> None:
        key = _parse_id(contract_id)
        query = sql.SQL(
            "UPDATE contracts SET {}, updated_at = NOW() WHERE id = %s AND status = ANY(%s)"
        ).format(assignment)
        try:
            with self._db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, (*params, key, list(from_statuses)))
                    if cur.rowcount == 0:
                        cur.execute("SELECT status FROM contracts WHERE id = %s", (key,))
                        row = cur.fetchone()
                        if row is None:
                            raise ContractNotFoundError(f"Contract {contract_id} not found")
                        raise StatusTransitionError(
                            f"Contract {contract_id} is {row[0]}, expected one of "
                            f"{list(from_statuses)}"
                        )
                conn.commit()
        except psycopg.Error as exc:
            raise StoreWriteError(
                f"Failed to change status of contract {contract_id}: {exc}"
            ) from exc


def _parse_id(contract_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(contract_id))
    except ValueError as exc:
        raise ContractNotFoundError(f"Contract {contract_id} not found") from exc


def _submittals_json(submittals: list[Submittal]) -> Jsonb:
    return Jsonb([submittal.to_dict() for submittal in submittals])


def _to_json(column: str, value: Any) -> Jsonb | None:
    if column == "submittals":
        return _submittals_json(value or [])
    return Jsonb(value) if value is not None else None


def _to_record(row: dict[str, Any]) -> ContractRecord:
    return ContractRecord(
        id=str(row["id"]),
        pdf_name=row["pdf_name"],
        status=row["status"],
        fields=row["fields"],
        submittals=records_to_submittals(row["submittals"]),
        error_message=row["error_message"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )

