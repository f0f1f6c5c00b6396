import uuid
from sqlalchemy import Column, String, Date, DateTime, Float, ForeignKey, Text, Index
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc


class Reminder(Base):
    __tablename__ = 'reminders'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(200), nullable=False)
    amount = Column(Float, nullable=True)
    due_date = Column(Date, nullable=False)
    note = Column(Text, nullable=False, default='')
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_reminders_user_due', 'user_id', 'due_date'),
    )
