from typing import Tuple

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.database.mysql import mysql_manager
from app.core.exceptions import StorageError
from app.core.logger import logger_manager
from app.models.donation_model import Donation


COMPLETED_STATUS = "completed"


class DonationCrud:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.logger = logger_manager.get_logger(__name__)

    async def get_completed_totals(self) -> Tuple[float, int]:
        """Return (sum of amounts, number of donations) for completed donations."""
        statement = select(
            func.coalesce(func.sum(Donation.amount), 0), func.count(Donation.id)
        ).where(Donation.status == COMPLETED_STATUS)
        try:
            result = await self.db.execute(statement)
            total_amount, total_donations = result.one()
        except SQLAlchemyError as e:
            self.logger.exception(f"Failed to aggregate donations: {e}")
            raise StorageError("Failed to get donation statistics") from e
        return float(total_amount or 0), int(total_donations or 0)


def get_donation_crud(
    db: AsyncSession = Depends(mysql_manager.get_db),
) -> DonationCrud:
    return DonationCrud(db)
