from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class Industry(str, Enum):
    EDUCATION = "education"
    OFFICE = "office"
    MEDICAL = "medical"
    RETAIL = "retail"
    WAREHOUSE = "warehouse"
    HOA = "hoa"
    HOTEL = "hotel"
    GOVERNMENT = "government"
    CHURCH = "church"
    FITNESS = "fitness"
    DAYCARE = "daycare"


class ServiceMode(str, Enum):
    RECURRING = "recurring"
    ONETIME = "onetime"


class SeatingType(str, Enum):
    PEWS = "pews"
    CHAIRS = "chairs"


@dataclass(frozen=True)
class TierBand:
    """Human-readable bounds of a pricing tier (e.g. ``2 floors`` to ``4 floors``)."""

    label: str
    lower: str
    upper: str


class SizeClass(str, Enum):
    """Retail store scale, smallest first."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def band(self) -> TierBand:
        return RETAIL_SIZE_BANDS[self]


class BuildingSize(str, Enum):
    """HOA building classification, smallest first."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    LUXURY = "luxury"

    @property
    def band(self) -> TierBand:
        return BUILDING_SIZE_BANDS[self]


RETAIL_SIZE_BANDS = {
    SizeClass.SMALL: TierBand("Small Retail", "1,000 sq ft", "3,000 sq ft"),
    SizeClass.MEDIUM: TierBand("Mid-Market", "3,000 sq ft", "7,000 sq ft"),
    SizeClass.LARGE: TierBand("Big Box", "7,000 sq ft", "no upper limit"),
}

BUILDING_SIZE_BANDS = {
    BuildingSize.SMALL: TierBand("Small Buildings", "2 floors", "4 floors"),
    BuildingSize.MEDIUM: TierBand("Mid-Rise", "5 floors", "12 floors"),
    BuildingSize.LARGE: TierBand("High-Rise", "13 floors", "no upper limit"),
    BuildingSize.LUXURY: TierBand("Luxury Portfolio", "full amenity package", "no upper limit"),
}


@dataclass
class RoomLineItem:
    name: str = ""
    quantity: int = 0
    minutes_per_unit: float = 0


@dataclass
class PorterLineItem:
    name: str = ""
    quantity: int = 0
    hours_per_day: float = 0


@dataclass
class FacilityProfile:
    # Kept as a plain string so unknown tags reach the default strategy.
    industry: str = Industry.OFFICE.value
    service_mode: str = ServiceMode.RECURRING.value
    square_footage: float = 0
    frequency_per_week: float = 0
    hotel_rooms: float = 0
    church_capacity: Optional[float] = None
    seating_type: str = SeatingType.CHAIRS.value
    building_size: str = BuildingSize.MEDIUM.value
    retail_size: str = SizeClass.MEDIUM.value
    labor_hours_per_day: float = 0
    warehouse_scrubbing_sqft: float = 0
    shower_count: float = 0
    has_sauna: bool = False
    student_count: Optional[float] = None
    changing_stations: float = 0
    include_periodic_specialty: bool = False


@dataclass
class BreakdownLine:
    label: str
    value: Decimal


@dataclass
class InternalCostBreakdown:
    labor_cost: Decimal
    supplies_cost: Decimal
    overhead_cost: Decimal
    net_profit: Decimal
    profit_margin_pct: Decimal
    total_monthly_hours: Decimal
    target_total: Decimal


@dataclass
class QuoteResult:
    grand_total: Decimal
    method: str
    justification: str
    breakdown: List[BreakdownLine] = field(default_factory=list)
    internal: Optional[InternalCostBreakdown] = None
    industry: str = "default"
    service_mode: str = ServiceMode.RECURRING.value
