"""
Customer ingestion endpoint.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from app.core.timezone import iso_utc
from app.repositories.deps import get_campaign_service
from app.services.campaigns.service import CampaignService

router = APIRouter(prefix="/api/customers", tags=["customers"])


class CreateCustomerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    spend: Optional[float] = Field(default=None, alias="totalSpend")
    visits: Optional[int] = Field(default=None, alias="visitCount")
    last_order_date: Optional[datetime] = Field(default=None, alias="lastOrderDate")

    def to_row(self) -> dict:
        row = self.model_dump(exclude_none=True)
        if self.last_order_date:
            row["last_order_date"] = iso_utc(self.last_order_date)
        return row


@router.post("", status_code=201)
async def create_customer(
    body: CreateCustomerRequest,
    service: CampaignService = Depends(get_campaign_service),
):
    """Add one customer to the population."""
    customer = await service.create_customer(body.to_row())
    return {"message": "Customer created", "customer": customer.to_dict()}
