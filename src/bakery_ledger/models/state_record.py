"""
StateRecord model for persisted state snapshots.

Each row holds the latest snapshot of one collection, keyed by name
("ingredients", "products", "orders", "customers").
"""

from sqlalchemy import JSON, Column, Index, String

from .base import BaseModel


class StateRecord(BaseModel):
    """
    One persisted snapshot.

    Attributes:
        key: Collection name, unique
        payload: JSON document produced by the snapshot service
        version: Snapshot format version
    """

    __tablename__ = "state_records"

    key = Column(String(100), nullable=False, unique=True)
    payload = Column(JSON, nullable=True)
    version = Column(String(20), nullable=False)

    __table_args__ = (Index("idx_state_record_key", "key"),)

    def __repr__(self) -> str:
        return f"StateRecord(id={self.id}, key='{self.key}', version='{self.version}')"
