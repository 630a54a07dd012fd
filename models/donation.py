"""
Donation history model.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey

from core.database import Base


class DonationRecord(Base):
    __tablename__ = "donation_records"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Integer, ForeignKey("app_users.id", ondelete="CASCADE"), nullable=False, index=True)
    charity_name = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(64), nullable=False)
    date = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
