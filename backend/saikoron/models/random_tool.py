"""RandomTool ORM — one row per tool holding its full snapshot.

Invariants:
    - id is the tool id (opaque string, client-compatible), primary key
    - snapshot is the camelCase dict from core/tool_snapshot.py, stored as-is
    - name / source_type / timestamps denormalized from the snapshot for listing

Design Decisions:
    - JSON column for the aggregate: a tool is always loaded and saved whole,
      last write wins (ADR: no per-field updates, no history table)
    - Epoch-millisecond BigIntegers: identical to the values inside the snapshot
"""

from sqlalchemy import BigInteger, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from saikoron.db.base import Base


class RandomToolRecord(Base):
    """Persisted RandomTool snapshot."""
    __tablename__ = "random_tools"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    source_type: Mapped[str] = mapped_column(String(10), nullable=False)
    snapshot: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<RandomToolRecord(id={self.id!r}, name={self.name!r}, "
            f"source_type={self.source_type!r})>"
        )
