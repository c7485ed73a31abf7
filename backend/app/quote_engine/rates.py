"""Canonical rate table for the facility quote engine.

Every price, rate and factor the strategies use lives on :class:`RateTable`.
The defaults below are the production table; deployments may override any
subset from a JSON file (see :func:`load_rate_table`), e.g.::

    {"blended_hourly_rate": "26.00", "hoa_monthly_bands": {"large": 3400}}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Mapping

from .models import BuildingSize, SeatingType, SizeClass

logger = logging.getLogger(__name__)


class RateTableError(ValueError):
    """Raised when a rate override file cannot be read or holds bad values."""


def _d(value: str) -> Decimal:
    return Decimal(value)


@dataclass(frozen=True)
class RateTable:
    # Labor
    work_days_per_month: Decimal = _d("21.67")
    blended_hourly_rate: Decimal = _d("25.50")
    porter_hourly_rate: Decimal = _d("24.50")

    # Internal (non customer-facing) cost model
    internal_labor_rate: Decimal = _d("18.50")
    supplies_pct: Decimal = _d("0.03")
    overhead_pct: Decimal = _d("0.05")
    target_margin_pct: Decimal = _d("0.20")

    # Periodic specialty work (stripping, shampoo) as months of base labor per year
    specialty_annual_factor: Decimal = _d("1.5")

    onetime_multiplier: Decimal = _d("0.70")

    # Per-square-foot industries
    office_rate_per_sqft: Decimal = _d("0.15")
    medical_rate_per_sqft: Decimal = _d("0.26")
    default_rate_per_sqft: Decimal = _d("0.18")

    # Retail visit model
    visit_weeks_per_year: Decimal = _d("52")
    retail_visit_rates: Dict[str, Decimal] = field(
        default_factory=lambda: {
            SizeClass.SMALL.value: _d("90"),
            SizeClass.MEDIUM.value: _d("135"),
            SizeClass.LARGE.value: _d("190"),
        }
    )

    # Warehouse / government labor
    warehouse_hourly_rate: Decimal = _d("48")
    warehouse_scrub_rate_per_sqft: Decimal = _d("0.10")
    government_hourly_rate: Decimal = _d("52")

    # Hotel BOH / FOH
    hotel_per_room_rate: Decimal = _d("15")
    hotel_public_rate_per_sqft: Decimal = _d("0.17")

    # HOA flat monthly bands
    hoa_monthly_bands: Dict[str, Decimal] = field(
        default_factory=lambda: {
            BuildingSize.SMALL.value: _d("1100"),
            BuildingSize.MEDIUM.value: _d("2600"),
            BuildingSize.LARGE.value: _d("3200"),
            BuildingSize.LUXURY.value: _d("5500"),
        }
    )

    # Church sanctuary
    church_per_seat_rate: Decimal = _d("1.25")
    church_weeks_per_month: Decimal = _d("4.33")
    default_church_capacity: Decimal = _d("250")
    seating_surcharges: Dict[str, Decimal] = field(
        default_factory=lambda: {
            SeatingType.PEWS.value: _d("1.32"),
            SeatingType.CHAIRS.value: _d("1.00"),
        }
    )

    # Fitness wet areas
    fitness_rate_per_sqft: Decimal = _d("0.22")
    shower_surcharge: Decimal = _d("45")
    sauna_surcharge: Decimal = _d("150")

    # Daycare enrollment
    daycare_per_student_rate: Decimal = _d("18.50")
    daycare_per_station_rate: Decimal = _d("35")
    default_student_count: Decimal = _d("20")


DEFAULT_RATE_TABLE = RateTable()

# Tier tables must stay exhaustive over their enum.
_TIER_TABLES = {
    "retail_visit_rates": SizeClass,
    "hoa_monthly_bands": BuildingSize,
    "seating_surcharges": SeatingType,
}


def _coerce_decimal(key: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise RateTableError(f"Rate '{key}' must be numeric, got {value!r}")
    try:
        dec = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise RateTableError(f"Rate '{key}' must be numeric, got {value!r}")
    if not dec.is_finite() or dec < 0:
        raise RateTableError(f"Rate '{key}' must be a non-negative number, got {value!r}")
    return dec


def rate_table_from_mapping(
    data: Mapping[str, Any], base: RateTable = DEFAULT_RATE_TABLE
) -> RateTable:
    """Return ``base`` with the overrides in ``data`` applied.

    Tier tables are merged class by class so a partial override keeps the
    remaining bands. Unknown top-level keys are logged and ignored.
    """
    known = {f.name for f in fields(RateTable)}
    changes: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown rate table key %s", key)
            continue
        if key in _TIER_TABLES:
            if not isinstance(value, Mapping):
                raise RateTableError(f"Rate '{key}' must be an object of tier amounts")
            allowed = {member.value for member in _TIER_TABLES[key]}
            merged = dict(getattr(base, key))
            for tier, amount in value.items():
                if tier not in allowed:
                    raise RateTableError(f"Unknown tier '{tier}' for '{key}'")
                merged[tier] = _coerce_decimal(f"{key}.{tier}", amount)
            changes[key] = merged
        else:
            changes[key] = _coerce_decimal(key, value)
    return replace(base, **changes)


def load_rate_table(path: str | Path) -> RateTable:
    """Read a JSON rate override file and return the resulting table."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RateTableError(f"Cannot read rate table at {p}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RateTableError(f"Rate table at {p} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise RateTableError(f"Rate table at {p} must be a JSON object")
    table = rate_table_from_mapping(raw)
    logger.info("Loaded rate table overrides", extra={"path": str(p), "keys": sorted(raw)})
    return table
