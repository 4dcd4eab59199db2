from fastapi import APIRouter, Depends
from app.schemas.donation_schemas import DonationStatsResponse
from app.services.donation_service import get_donation_service, DonationService


router = APIRouter(prefix="/donations", tags=["Donation"])


@router.get("/stats", response_model=DonationStatsResponse)
async def donation_stats_router(
    donation_service: DonationService = Depends(get_donation_service),
):
    """Totals over completed donations."""

    stats = await donation_service.get_donation_stats()
    return DonationStatsResponse(**stats)
