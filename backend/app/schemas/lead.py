from typing import List, Optional

from pydantic import BaseModel, Field

from ..services.lead_intake import FunnelStage
from .quote import FacilityProfileIn, PorterLineItemIn, RoomLineItemIn


class LeadContactIn(BaseModel):
    name: Optional[str] = None
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    company: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    address: Optional[str] = None


class LeadIntakeIn(BaseModel):
    contact: LeadContactIn
    profile: FacilityProfileIn
    rooms: List[RoomLineItemIn] = Field(default_factory=list)
    porters: List[PorterLineItemIn] = Field(default_factory=list)
    funnel_stage: FunnelStage = FunnelStage.QUOTE


class LeadRecordOut(BaseModel):
    timestamp: str
    funnel_stage: FunnelStage
    name: str
    email: str
    company: str
    phone: str
    quote_total: str
    notes: str
    industry: str
    quote_summary: str
