from pydantic import BaseModel


class DonationStatsResponse(BaseModel):
    totalAmount: float
    totalDonations: int
    averageDonation: float
