"""Facility maintenance quote engine."""

from .estimate import compute_quote
from .models import (
    BreakdownLine,
    BuildingSize,
    FacilityProfile,
    Industry,
    InternalCostBreakdown,
    PorterLineItem,
    QuoteResult,
    RoomLineItem,
    SeatingType,
    ServiceMode,
    SizeClass,
    TierBand,
)
from .rates import DEFAULT_RATE_TABLE, RateTable, RateTableError, load_rate_table

__all__ = [
    "compute_quote",
    "BreakdownLine",
    "BuildingSize",
    "FacilityProfile",
    "Industry",
    "InternalCostBreakdown",
    "PorterLineItem",
    "QuoteResult",
    "RoomLineItem",
    "SeatingType",
    "ServiceMode",
    "SizeClass",
    "TierBand",
    "DEFAULT_RATE_TABLE",
    "RateTable",
    "RateTableError",
    "load_rate_table",
]
