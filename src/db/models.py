from __future__ import annotations

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class RecordOrm(Base):
    """One record of a named collection, stored as its JSON document.

    `seq` preserves insertion order; replacing a record keeps its row.
    """

    __tablename__ = "records"
    __table_args__ = (UniqueConstraint("collection", "record_id", name="uq_records_collection_record_id"),)

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String, nullable=False, index=True)
    record_id: Mapped[str] = mapped_column(String, nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
