from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import RecordOrm
from domain.store import RECORD_TYPES, Collection, EntityStore


class SqlEntityStore(EntityStore):
    """Entity store over a single SQLAlchemy session.

    Writes made outside `transaction()` are committed immediately. Inside it
    they are committed when the outermost scope exits cleanly and rolled back
    when an exception escapes; nested scopes join the outer one.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._depth = 0

    def get(self, collection: Collection, record_id: UUID) -> Any | None:
        row = self._find(collection, record_id)
        if row is None:
            return None
        return self._to_domain(collection, row)

    def list(self, collection: Collection, predicate: Callable[[Any], bool] | None = None) -> list[Any]:
        rows = self._session.scalars(
            select(RecordOrm).where(RecordOrm.collection == collection.value).order_by(RecordOrm.seq.asc())
        ).all()
        records = [self._to_domain(collection, row) for row in rows]
        if predicate is None:
            return records
        return [record for record in records if predicate(record)]

    def put(self, collection: Collection, record: BaseModel) -> None:
        expected = RECORD_TYPES[collection]
        if not isinstance(record, expected):
            raise TypeError(f"{collection} holds {expected.__name__} records, got {type(record).__name__}")

        record_id = getattr(record, "id", None)
        if record_id is None:
            raise ValueError(f"Records stored in {collection} must carry an id")

        payload = record.model_dump_json()
        row = self._find(collection, record_id)
        if row is None:
            self._session.add(RecordOrm(collection=collection.value, record_id=str(record_id), payload=payload))
        else:
            row.payload = payload
        self._commit_if_idle()

    def delete(self, collection: Collection, record_id: UUID) -> bool:
        row = self._find(collection, record_id)
        if row is None:
            return False
        self._session.delete(row)
        self._commit_if_idle()
        return True

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        finally:
            self._depth = 0

    def _find(self, collection: Collection, record_id: UUID) -> RecordOrm | None:
        return self._session.scalars(
            select(RecordOrm).where(
                RecordOrm.collection == collection.value,
                RecordOrm.record_id == str(record_id),
            )
        ).one_or_none()

    def _commit_if_idle(self) -> None:
        if not self._depth:
            self._session.commit()

    @staticmethod
    def _to_domain(collection: Collection, row: RecordOrm) -> Any:
        return RECORD_TYPES[collection].model_validate_json(row.payload)


__all__ = ["SqlEntityStore"]
