from typing import Dict

from fastapi import Depends

from app.crud.donation_crud import get_donation_crud, DonationCrud


class DonationService:
    def __init__(self, donation_crud: DonationCrud):
        self.donation_crud = donation_crud

    async def get_donation_stats(self) -> Dict[str, float]:
        total_amount, total_donations = await self.donation_crud.get_completed_totals()
        average = total_amount / total_donations if total_donations > 0 else 0
        return {
            "totalAmount": round(total_amount, 2),
            "totalDonations": total_donations,
            "averageDonation": round(average, 2),
        }


def get_donation_service(
    donation_crud: DonationCrud = Depends(get_donation_crud),
) -> DonationService:
    return DonationService(donation_crud=donation_crud)
