"""Per-industry pricing strategies and the dispatch table that selects them.

Each strategy reads the facility knobs it cares about, prices them with the
shared primitives and returns unrounded breakdown lines; rounding, the
one-time adjustment and the internal view are applied by
:func:`app.quote_engine.estimate.compute_quote`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from .models import BreakdownLine, BuildingSize, Industry, SeatingType, SizeClass
from .primitives import (
    amortized_specialty_cost,
    money,
    non_negative,
    porter_labor_cost,
    porter_labor_hours,
    read_field,
    room_labor_cost,
    room_labor_hours,
    tier_lookup,
)
from .rates import RateTable

_TWELVE = Decimal("12")
_ONE_DAY = Decimal("1")
_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class StrategyOutcome:
    breakdown: List[BreakdownLine]
    method: str
    justification: str
    # Monthly labor hours behind the quote; None when the formula is not hour-based.
    monthly_hours: Optional[Decimal] = None


StrategyFn = Callable[[Any, Sequence[Any], Sequence[Any], RateTable], StrategyOutcome]


@dataclass(frozen=True)
class IndustryStrategy:
    key: str
    label: str
    description: str
    pricing_basis: str
    compute: StrategyFn


# --- profile readers -------------------------------------------------------


def _num(profile: Any, key: str, default: Decimal = Decimal("0")) -> Decimal:
    return non_negative(read_field(profile, (key,)), default)


def _flag(profile: Any, key: str) -> bool:
    value = read_field(profile, (key,))
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def _choice(profile: Any, key: str, enum_cls, default):
    raw = read_field(profile, (key,))
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, Enum):
        raw = raw.value
    try:
        return enum_cls(str(raw or "").strip().lower())
    except ValueError:
        return default


def _count(value: Decimal) -> str:
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{money(value):,}".rstrip("0").rstrip(".")


def _with_periodic_specialty(
    profile: Any,
    rates: RateTable,
    lines: List[BreakdownLine],
    base_labor: Decimal,
    justification: str,
) -> str:
    """Append the amortized periodic floor-care line when the profile asks for it."""
    if not _flag(profile, "include_periodic_specialty"):
        return justification
    amount = amortized_specialty_cost(base_labor, rates.specialty_annual_factor)
    lines.append(BreakdownLine("Periodic Floor Care (Included)", amount))
    return (
        f"{justification} Annual floor stripping and carpet care are spread evenly "
        f"across 12 monthly invoices: included, not extra."
    )


# --- strategies ------------------------------------------------------------


def price_education(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    days = rates.work_days_per_month
    room_cost = room_labor_cost(rooms, rates.blended_hourly_rate, days)
    porter_cost = porter_labor_cost(porters, rates.porter_hourly_rate, days)
    room_hours = room_labor_hours(rooms, days)
    porter_hours = porter_labor_hours(porters, days)
    lines = [
        BreakdownLine("Academic Area Maintenance", room_cost),
        BreakdownLine("Day Porter Logistics", porter_cost),
    ]
    justification = (
        f"A hybrid model combining {_count(room_labor_hours(rooms, _ONE_DAY))} hours of nightly academic "
        f"sanitation with {_count(porter_labor_hours(porters, _ONE_DAY))} hours of on-site Day Porter "
        f"logistics per day for restroom rotations."
    )
    justification = _with_periodic_specialty(profile, rates, lines, room_cost, justification)
    return StrategyOutcome(
        breakdown=lines,
        method="Integrated Campus Labor Model",
        justification=justification,
        monthly_hours=room_hours + porter_hours,
    )


def price_office(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    sqft = _num(profile, "square_footage")
    return StrategyOutcome(
        breakdown=[BreakdownLine("Portfolio-Wide Logistics", sqft * rates.office_rate_per_sqft)],
        method="Class-A Portfolio Maintenance",
        justification=(
            f"Managed precision for {_count(sqft)} sq ft at ${rates.office_rate_per_sqft}/sq ft, "
            f"focused on high-visibility lobby care and common area tenant retention."
        ),
    )


def price_medical(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    sqft = _num(profile, "square_footage")
    return StrategyOutcome(
        breakdown=[BreakdownLine("Terminal Sanitation Labor", sqft * rates.medical_rate_per_sqft)],
        method="Sterile-Grade Terminal Cleaning",
        justification=(
            f"Pricing for {_count(sqft)} sq ft of clinical space at "
            f"${rates.medical_rate_per_sqft}/sq ft, based on clinical-level pathogen logs "
            f"and high-intensity disinfection for medical suites."
        ),
    )


def price_retail(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    size = _choice(profile, "retail_size", SizeClass, SizeClass.MEDIUM)
    visit_rate = tier_lookup(size, rates.retail_visit_rates, SizeClass.MEDIUM)
    visits = _num(profile, "frequency_per_week")
    monthly = visit_rate * visits * rates.visit_weeks_per_year / _TWELVE
    return StrategyOutcome(
        breakdown=[BreakdownLine("Scheduled Visit Service", monthly)],
        method="Visit-Based Retail Model",
        justification=(
            f"Based on {_count(visits)} visits per week for a {size.band.label} store "
            f"at ${visit_rate} per visit, averaged over {_count(rates.visit_weeks_per_year)} weeks a year."
        ),
    )


def price_warehouse(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    daily_hours = _num(profile, "labor_hours_per_day")
    scrub_sqft = _num(profile, "warehouse_scrubbing_sqft")
    monthly_hours = daily_hours * rates.work_days_per_month
    return StrategyOutcome(
        breakdown=[
            BreakdownLine("Managed Man-Hours", monthly_hours * rates.warehouse_hourly_rate),
            BreakdownLine("Machine Scrubbing Service", scrub_sqft * rates.warehouse_scrub_rate_per_sqft),
        ],
        method="Industrial Performance Model",
        justification=(
            f"Calculated for {_count(daily_hours)} managed labor hours per day in high-bay logistics "
            f"with ride-on scrubber allocation for {_count(scrub_sqft)} sq ft of heavy floor maintenance."
        ),
        monthly_hours=monthly_hours,
    )


def price_hotel(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    guest_rooms = _num(profile, "hotel_rooms")
    sqft = _num(profile, "square_footage")
    return StrategyOutcome(
        breakdown=[
            BreakdownLine("BOH Operational Support", guest_rooms * rates.hotel_per_room_rate),
            BreakdownLine("FOH Public Visibility", sqft * rates.hotel_public_rate_per_sqft),
        ],
        method="Hospitality Support Framework",
        justification=(
            f"Integrated BOH operational support for {_count(guest_rooms)} guest rooms with premium "
            f"FOH visibility maintenance across {_count(sqft)} sq ft of public area."
        ),
    )


def price_hoa(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    size = _choice(profile, "building_size", BuildingSize, BuildingSize.MEDIUM)
    amount = tier_lookup(size, rates.hoa_monthly_bands, BuildingSize.MEDIUM)
    return StrategyOutcome(
        breakdown=[BreakdownLine("Amenity Maintenance", amount)],
        method="Common-Area Amenity Pricing",
        justification=(
            f"Predictable fixed-band management for a {size.band.label} multi-family property, "
            f"based on amenity and corridor density."
        ),
    )


def price_government(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    daily_hours = _num(profile, "labor_hours_per_day")
    monthly_hours = daily_hours * rates.work_days_per_month
    return StrategyOutcome(
        breakdown=[BreakdownLine("Municipal Labor Allocation", monthly_hours * rates.government_hourly_rate)],
        method="Public-Sector Labor Model",
        justification=(
            f"Priced on {_count(daily_hours)} municipal labor hours per day over "
            f"{rates.work_days_per_month} work days per month for public buildings."
        ),
        monthly_hours=monthly_hours,
    )


def price_church(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    days = rates.work_days_per_month
    room_cost = room_labor_cost(rooms, rates.blended_hourly_rate, days)
    capacity = _num(profile, "church_capacity", rates.default_church_capacity)
    seating = _choice(profile, "seating_type", SeatingType, SeatingType.CHAIRS)
    surcharge = tier_lookup(seating, rates.seating_surcharges, SeatingType.CHAIRS)
    sanctuary = capacity * rates.church_per_seat_rate * surcharge * rates.church_weeks_per_month
    lines = [
        BreakdownLine("Sanctuary Intensive Care", sanctuary),
        BreakdownLine("Administrative & Annex Areas", room_cost),
    ]
    justification = (
        f"Calculated based on a {_count(capacity)}-seat sanctuary with {seating.value} seating, "
        f"accounting for high-traffic post-service turnover cycles."
    )
    justification = _with_periodic_specialty(profile, rates, lines, room_cost, justification)
    return StrategyOutcome(
        breakdown=lines,
        method="Capacity-Driven Maintenance Model",
        justification=justification,
        monthly_hours=room_labor_hours(rooms, days),
    )


def price_fitness(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    sqft = _num(profile, "square_footage")
    showers = _num(profile, "shower_count")
    has_sauna = _flag(profile, "has_sauna")
    wet_area = showers * rates.shower_surcharge
    if has_sauna:
        wet_area += rates.sauna_surcharge
    sauna_note = " and a sauna" if has_sauna else ""
    return StrategyOutcome(
        breakdown=[
            BreakdownLine("Floor & Equipment Hygiene", sqft * rates.fitness_rate_per_sqft),
            BreakdownLine("Wet Area Sanitation", wet_area),
        ],
        method="High-Intensity Wellness Hygiene",
        justification=(
            f"Optimized for high-frequency equipment sanitization across {_count(sqft)} sq ft and "
            f"specialized 'Wet Area' maintenance for {_count(showers)} shower units{sauna_note}."
        ),
    )


def price_daycare(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    days = rates.work_days_per_month
    room_cost = room_labor_cost(rooms, rates.blended_hourly_rate, days)
    students = _num(profile, "student_count", rates.default_student_count)
    stations = _num(profile, "changing_stations")
    surcharge = students * rates.daycare_per_student_rate + stations * rates.daycare_per_station_rate
    lines = [
        BreakdownLine("Core Facility Labor", room_cost),
        BreakdownLine("Disinfection Frequency Surcharge", surcharge),
    ]
    justification = (
        f"Managed protocol for {_count(students)} students focusing on daily disinfection of "
        f"{_count(stations)} changing stations using child-safe EPA N-List chemicals."
    )
    justification = _with_periodic_specialty(profile, rates, lines, room_cost, justification)
    return StrategyOutcome(
        breakdown=lines,
        method="Child-Safe Managed Enrollment Model",
        justification=justification,
        monthly_hours=room_labor_hours(rooms, days),
    )


def price_default(profile, rooms, porters, rates: RateTable) -> StrategyOutcome:
    sqft = _num(profile, "square_footage")
    return StrategyOutcome(
        breakdown=[BreakdownLine("General Facility Maintenance", sqft * rates.default_rate_per_sqft)],
        method="Standard Square-Footage Model",
        justification=(
            f"Standard maintenance pricing for {_count(sqft)} sq ft at "
            f"${rates.default_rate_per_sqft}/sq ft."
        ),
    )


# --- dispatch table --------------------------------------------------------

STRATEGIES: Dict[str, IndustryStrategy] = {
    s.key: s
    for s in (
        IndustryStrategy(Industry.EDUCATION.value, "Education", "K-12, Charter & Universities", "room inventory + day porters", price_education),
        IndustryStrategy(Industry.OFFICE.value, "Commercial Office", "Class A/B & Mixed-Use", "per square foot", price_office),
        IndustryStrategy(Industry.MEDICAL.value, "Medical/Clinical", "Clinics & Specialized Med", "per square foot", price_medical),
        IndustryStrategy(Industry.RETAIL.value, "Retail/Strip Mall", "Retail & Shopping Centers", "per visit by store size", price_retail),
        IndustryStrategy(Industry.WAREHOUSE.value, "Industrial/Warehouse", "Logistics & Storage", "labor hours + machine scrubbing", price_warehouse),
        IndustryStrategy(Industry.HOA.value, "HOA/Apartment", "Common Area Maintenance", "fixed monthly band", price_hoa),
        IndustryStrategy(Industry.HOTEL.value, "Hospitality/Hotel", "Back-of-House & Public", "per guest room + public square feet", price_hotel),
        IndustryStrategy(Industry.GOVERNMENT.value, "Government", "Municipal & Public Bldgs", "labor hours", price_government),
        IndustryStrategy(Industry.CHURCH.value, "Religious/Church", "Places of Worship", "seating capacity + room inventory", price_church),
        IndustryStrategy(Industry.FITNESS.value, "Fitness & Wellness", "Gyms, Studios & Clubs", "per square foot + wet areas", price_fitness),
        IndustryStrategy(Industry.DAYCARE.value, "Daycare/Preschool", "Childcare Facilities", "room inventory + enrollment", price_daycare),
    )
}

DEFAULT_STRATEGY = IndustryStrategy("default", "General Facility", "Any other facility", "per square foot", price_default)


def resolve_strategy(industry: Any) -> IndustryStrategy:
    """Return the strategy for ``industry``; unknown tags get :data:`DEFAULT_STRATEGY`."""
    if isinstance(industry, Industry):
        industry = industry.value
    return STRATEGIES.get(str(industry or "").strip().lower(), DEFAULT_STRATEGY)
