from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from ..quote_engine.models import (
    BuildingSize,
    FacilityProfile,
    PorterLineItem,
    RoomLineItem,
    SeatingType,
    ServiceMode,
    SizeClass,
)

# Upper bound for every numeric knob; keeps prices inside exact cent arithmetic.
MAX_INPUT = 1_000_000_000


class RoomLineItemIn(BaseModel):
    name: str = ""
    quantity: int = Field(0, ge=0, le=MAX_INPUT)
    minutes_per_unit: float = Field(0, ge=0, le=MAX_INPUT)

    def to_engine(self) -> RoomLineItem:
        return RoomLineItem(self.name, self.quantity, self.minutes_per_unit)


class PorterLineItemIn(BaseModel):
    name: str = ""
    quantity: int = Field(0, ge=0, le=MAX_INPUT)
    hours_per_day: float = Field(0, ge=0, le=MAX_INPUT)

    def to_engine(self) -> PorterLineItem:
        return PorterLineItem(self.name, self.quantity, self.hours_per_day)


class FacilityProfileIn(BaseModel):
    # Free text so unrecognised industries still get the default estimate.
    industry: str = "office"
    service_mode: ServiceMode = ServiceMode.RECURRING
    square_footage: float = Field(0, ge=0, le=MAX_INPUT)
    frequency_per_week: float = Field(0, ge=0, le=MAX_INPUT)
    hotel_rooms: float = Field(0, ge=0, le=MAX_INPUT)
    church_capacity: Optional[float] = Field(None, ge=0, le=MAX_INPUT)
    seating_type: SeatingType = SeatingType.CHAIRS
    building_size: BuildingSize = BuildingSize.MEDIUM
    retail_size: SizeClass = SizeClass.MEDIUM
    labor_hours_per_day: float = Field(0, ge=0, le=MAX_INPUT)
    warehouse_scrubbing_sqft: float = Field(0, ge=0, le=MAX_INPUT)
    shower_count: float = Field(0, ge=0, le=MAX_INPUT)
    has_sauna: bool = False
    student_count: Optional[float] = Field(None, ge=0, le=MAX_INPUT)
    changing_stations: float = Field(0, ge=0, le=MAX_INPUT)
    include_periodic_specialty: bool = False

    def to_engine(self) -> FacilityProfile:
        data = self.model_dump()
        for key in ("service_mode", "seating_type", "building_size", "retail_size"):
            data[key] = data[key].value
        return FacilityProfile(**data)


class QuoteEstimateIn(BaseModel):
    profile: FacilityProfileIn
    rooms: List[RoomLineItemIn] = Field(default_factory=list)
    porters: List[PorterLineItemIn] = Field(default_factory=list)
    include_internal: bool = False


class BreakdownLineOut(BaseModel):
    label: str
    value: Decimal

    model_config = {"from_attributes": True}


class InternalCostBreakdownOut(BaseModel):
    labor_cost: Decimal
    supplies_cost: Decimal
    overhead_cost: Decimal
    net_profit: Decimal
    profit_margin_pct: Decimal
    total_monthly_hours: Decimal
    target_total: Decimal

    model_config = {"from_attributes": True}


class QuoteOut(BaseModel):
    grand_total: Decimal
    method: str
    justification: str
    breakdown: List[BreakdownLineOut]
    internal: Optional[InternalCostBreakdownOut] = None
    industry: str
    service_mode: str

    model_config = {"from_attributes": True}


class IndustryOut(BaseModel):
    industry: str
    label: str
    description: str
    pricing_basis: str


class RoomPresetOut(BaseModel):
    name: str
    minutes_per_unit: float


class TierBandOut(BaseModel):
    tier: str
    label: str
    lower: str
    upper: str
    amount: Decimal


class TierTablesOut(BaseModel):
    retail_visit_rates: List[TierBandOut]
    hoa_monthly_bands: List[TierBandOut]


class QuoteDefaultsOut(BaseModel):
    profile: FacilityProfileIn
    rooms: List[RoomLineItemIn]
    porters: List[PorterLineItemIn]
    quote: QuoteOut
