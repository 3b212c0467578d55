"""Sequence counter model backing human-readable business IDs."""

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


class SequenceCounter(SQLModel, table=True):
    """Named monotonic counter, one row per sequence (e.g. "medicine", "order-202501").

    Rows are created and advanced only through CounterStore, which uses a
    single INSERT ... ON CONFLICT DO UPDATE ... RETURNING statement so the
    increment and the read happen atomically in the database.
    """

    __tablename__ = "sequence_counters"
    __table_args__ = (CheckConstraint("seq >= 0", name="ck_sequence_counters_seq_non_negative"),)

    name: str = Field(primary_key=True, max_length=64)
    seq: int = Field(default=0)
