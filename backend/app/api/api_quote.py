from fastapi import APIRouter, Depends, status
import logging
from typing import List

from ..core.config import settings
from ..quote_engine import BuildingSize, Industry, QuoteResult, RateTable, SizeClass, compute_quote
from ..quote_engine.presets import default_inventory, room_presets
from ..quote_engine.strategies import STRATEGIES
from ..schemas.lead import LeadIntakeIn, LeadRecordOut
from ..schemas.quote import (
    FacilityProfileIn,
    IndustryOut,
    PorterLineItemIn,
    QuoteDefaultsOut,
    QuoteEstimateIn,
    QuoteOut,
    RoomLineItemIn,
    RoomPresetOut,
    TierBandOut,
    TierTablesOut,
)
from ..services.lead_intake import build_lead_record
from ..utils import error_response
from .dependencies import get_rate_table

router = APIRouter(tags=["Quotes"])
logger = logging.getLogger(__name__)


def _quote_out(result: QuoteResult, include_internal: bool) -> QuoteOut:
    out = QuoteOut.model_validate(result)
    if not (include_internal and settings.INCLUDE_INTERNAL_BREAKDOWN):
        out.internal = None
    return out


@router.post(
    "/quotes/estimate",
    response_model=QuoteOut,
    response_model_exclude_none=True,
)
def estimate_quote(body: QuoteEstimateIn, rates: RateTable = Depends(get_rate_table)):
    """Stateless facility estimate.

    Delegates to :func:`app.quote_engine.compute_quote`; the internal margin
    view is only returned when the caller asks for it and the deployment
    enables ``INCLUDE_INTERNAL_BREAKDOWN``.
    """
    result = compute_quote(
        body.profile.to_engine(),
        [room.to_engine() for room in body.rooms],
        [porter.to_engine() for porter in body.porters],
        rates,
    )
    logger.info(
        "Quote estimated",
        extra={
            "industry": result.industry,
            "service_mode": result.service_mode,
            "grand_total": str(result.grand_total),
        },
    )
    return _quote_out(result, body.include_internal)


@router.get("/quotes/industries", response_model=List[IndustryOut])
def list_industries():
    """Industries the calculator prices, with the basis each one is priced on."""
    return [
        IndustryOut(
            industry=s.key,
            label=s.label,
            description=s.description,
            pricing_basis=s.pricing_basis,
        )
        for s in STRATEGIES.values()
    ]


@router.get("/quotes/presets/{industry}", response_model=List[RoomPresetOut])
def industry_room_presets(industry: str):
    try:
        tag = Industry(industry.strip().lower())
    except ValueError:
        raise error_response(
            "Unknown industry",
            {"industry": "not_found"},
            status.HTTP_404_NOT_FOUND,
        )
    return [RoomPresetOut(name=r.name, minutes_per_unit=r.minutes_per_unit) for r in room_presets(tag)]


@router.get("/quotes/tiers", response_model=TierTablesOut)
def tier_tables(rates: RateTable = Depends(get_rate_table)):
    """Retail visit rates and HOA monthly bands, smallest tier first."""
    return TierTablesOut(
        retail_visit_rates=[
            TierBandOut(tier=size.value, label=size.band.label, lower=size.band.lower, upper=size.band.upper, amount=rates.retail_visit_rates[size.value])
            for size in SizeClass
        ],
        hoa_monthly_bands=[
            TierBandOut(tier=size.value, label=size.band.label, lower=size.band.lower, upper=size.band.upper, amount=rates.hoa_monthly_bands[size.value])
            for size in BuildingSize
        ],
    )


@router.get("/quotes/defaults", response_model=QuoteDefaultsOut, response_model_exclude_none=True)
def quote_defaults(rates: RateTable = Depends(get_rate_table)):
    """The calculator's opening facility and the quote it produces."""
    profile, rooms, porters = default_inventory()
    result = compute_quote(profile, rooms, porters, rates, include_internal=False)
    return QuoteDefaultsOut(
        profile=FacilityProfileIn.model_validate(profile, from_attributes=True),
        rooms=[RoomLineItemIn.model_validate(r, from_attributes=True) for r in rooms],
        porters=[PorterLineItemIn.model_validate(p, from_attributes=True) for p in porters],
        quote=_quote_out(result, False),
    )


@router.post("/quotes/lead", response_model=LeadRecordOut)
def quote_lead(body: LeadIntakeIn, rates: RateTable = Depends(get_rate_table)):
    """Price the visitor's facility and return the lead-intake record for it."""
    rooms = [room.to_engine() for room in body.rooms]
    result = compute_quote(
        body.profile.to_engine(),
        rooms,
        [porter.to_engine() for porter in body.porters],
        rates,
        include_internal=False,
    )
    record = build_lead_record(
        body.contact.model_dump(),
        result,
        funnel_stage=body.funnel_stage,
        rooms=rooms,
    )
    return LeadRecordOut(**record)
