import uuid
from sqlalchemy import Column, String, DateTime, Float, ForeignKey, Text, Index
from sqlalchemy.dialects.postgresql import UUID, JSONB
from .base import Base, now_utc

DEFAULT_CATEGORY = "Others"


class Transaction(Base):
    __tablename__ = 'transactions'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(200), nullable=False)
    # Signed: >= 0 is income, < 0 is expense
    amount = Column(Float, nullable=False)
    category = Column(String(64), nullable=False, default=DEFAULT_CATEGORY)
    note = Column(Text, nullable=False, default='')
    tags = Column(JSONB, nullable=False, default=list)
    date = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_transactions_user_date', 'user_id', 'date'),
        Index('idx_transactions_user_category', 'user_id', 'category'),
    )
