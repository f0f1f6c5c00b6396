import uuid
from sqlalchemy import Column, String, DateTime, Float, ForeignKey, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc


class Budget(Base):
    __tablename__ = 'budgets'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    category = Column(String(64), nullable=False)
    amount = Column(Float, nullable=False)
    month = Column(String(7), nullable=False)  # YYYY-MM
    note = Column(Text, nullable=False, default='')
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        UniqueConstraint('user_id', 'category', 'month', name='uq_budget_user_category_month'),
    )
