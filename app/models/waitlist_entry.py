import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Boolean, Uuid, UniqueConstraint, Index
from app.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WaitlistEntry(Base):
    __tablename__ = "waitlist_entries"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Stored normalized (lower-cased, trimmed); the unique constraint is the authority on duplicates
    email = Column(String(254), nullable=False)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    notified = Column(Boolean, nullable=False, default=False, index=True)
    # Set by the out-of-band notification process
    notified_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint('email', name='uq_waitlist_entries_email'),
        Index('ix_waitlist_entries_created_at', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<WaitlistEntry {self.email}>"
