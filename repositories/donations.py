import logging
from decimal import Decimal, InvalidOperation
from typing import List
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.donation import DonationRecord
from repositories.base import BaseRepository
from schemas.donation import DonationCreate, PAYMENT_METHODS
from services.exceptions import InvalidDonation


logger = logging.getLogger(__name__)


def parse_amount(text: str) -> Decimal:
    """Parse a donation amount; it must be a finite decimal greater than zero."""
    try:
        amount = Decimal((text or "").strip())
        if not amount.is_finite() or amount <= 0:
            raise InvalidDonation("Amount must be greater than zero")
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise InvalidDonation(f"Invalid amount: {text!r}")


class DonationRepository(BaseRepository[DonationRecord]):
    def __init__(self, db: AsyncSession):
        super().__init__(DonationRecord, db)

    async def create(self, user_id: int, donation: DonationCreate) -> DonationRecord:
        charity_name = donation.charity_name.strip()
        if not charity_name:
            raise InvalidDonation("Charity name is required")
        if donation.payment_method not in PAYMENT_METHODS:
            raise InvalidDonation(f"Unsupported payment method: {donation.payment_method}")
        amount = parse_amount(donation.amount)

        try:
            record = DonationRecord(
                user_id=user_id,
                charity_name=charity_name,
                amount=amount,
                payment_method=donation.payment_method,
            )
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
            logger.info(f"Recorded donation {record.id} of {amount} to {charity_name} for user {user_id}")
            return record
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Database error in create donation: {str(e)}")
            raise

    async def list_for_user(self, user_id: int, query: str = "") -> List[DonationRecord]:
        """
        Newest first. A non-blank query keeps records whose charity name,
        payment method or two-decimal amount contains it (case-insensitive).
        """
        stmt = (
            select(DonationRecord)
            .where(DonationRecord.user_id == user_id)
            .order_by(DonationRecord.date.desc())
        )
        result = await self.db.execute(stmt)
        records = list(result.scalars().all())

        q = (query or "").strip().lower()
        if not q:
            return records
        return [
            r for r in records
            if q in r.charity_name.lower()
            or q in r.payment_method.lower()
            or q in f"{Decimal(r.amount):.2f}"
        ]
