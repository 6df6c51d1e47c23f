"""SQLAlchemy model for the domain-event outbox."""

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text

from campus_notify.domain.entities import OUTBOX_STATUS_PENDING
from campus_notify.infrastructure.database import Base
from campus_notify.utils import now_in_app_naive_datetime


class OutboxEventModel(Base):
    """Domain event awaiting notification fan-out."""

    __tablename__ = "domain_event_outbox"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String(50), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default=OUTBOX_STATUS_PENDING, index=True)
    attempts = Column(Integer, nullable=False, default=0)
    last_error = Column(Text, nullable=True)
    notification_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    processed_at = Column(DateTime(), nullable=True)


__all__ = ["OutboxEventModel"]
