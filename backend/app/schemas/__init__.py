from .quote import (
    RoomLineItemIn,
    PorterLineItemIn,
    FacilityProfileIn,
    QuoteEstimateIn,
    BreakdownLineOut,
    InternalCostBreakdownOut,
    QuoteOut,
    IndustryOut,
    RoomPresetOut,
    TierBandOut,
    TierTablesOut,
    QuoteDefaultsOut,
)
from .lead import LeadContactIn, LeadIntakeIn, LeadRecordOut
