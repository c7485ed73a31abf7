from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Sequence, Tuple

from .models import BreakdownLine, QuoteResult, ServiceMode
from .primitives import decompose_margin, money, non_negative, read_field
from .rates import DEFAULT_RATE_TABLE, RateTable
from .strategies import DEFAULT_STRATEGY, StrategyOutcome, resolve_strategy

logger = logging.getLogger(__name__)

ONETIME_METHOD = "Project-Based Scope Estimate"


def _service_mode(profile: Any) -> ServiceMode:
    raw = read_field(profile, ("service_mode", "service_type"))
    if isinstance(raw, ServiceMode):
        return raw
    try:
        return ServiceMode(str(raw or "").strip().lower())
    except ValueError:
        return ServiceMode.RECURRING


def _rounded(outcome: StrategyOutcome) -> StrategyOutcome:
    return StrategyOutcome(
        breakdown=[BreakdownLine(line.label, money(non_negative(line.value))) for line in outcome.breakdown],
        method=outcome.method,
        justification=outcome.justification,
        monthly_hours=outcome.monthly_hours,
    )


def _apply_service_mode(
    outcome: StrategyOutcome, mode: ServiceMode, rates: RateTable
) -> Tuple[StrategyOutcome, Decimal]:
    """Scale a rounded recurring outcome down to a one-time project estimate.

    The one-time total is the recurring total times the multiplier, rounded
    once. Each line is scaled and rounded on its own, and the cent left over
    from rounding is booked to the largest line so the lines still add up.
    """
    total = sum((line.value for line in outcome.breakdown), Decimal("0.00"))
    if mode is not ServiceMode.ONETIME:
        return outcome, total
    factor = non_negative(rates.onetime_multiplier)
    hours = outcome.monthly_hours * factor if outcome.monthly_hours is not None else None
    lines = [BreakdownLine(line.label, money(line.value * factor)) for line in outcome.breakdown]
    onetime_total = money(total * factor)
    remainder = onetime_total - sum((line.value for line in lines), Decimal("0.00"))
    if lines and remainder:
        largest = max(lines, key=lambda line: line.value)
        largest.value += remainder
    return (
        StrategyOutcome(
            breakdown=lines,
            method=ONETIME_METHOD,
            justification=outcome.justification,
            monthly_hours=hours,
        ),
        onetime_total,
    )


def compute_quote(
    profile: Any,
    rooms: Optional[Sequence[Any]] = None,
    porters: Optional[Sequence[Any]] = None,
    rates: Optional[RateTable] = None,
    *,
    include_internal: bool = True,
) -> QuoteResult:
    """Price a facility profile.

    ``profile`` and the line items may be the engine dataclasses or plain
    mappings with the same field names. The call never raises for bad
    numeric input: missing or negative values count as zero (or the field's
    documented default) and unknown industries use the per-square-foot
    fallback.

    The internal cost view is attached only for hour-based industries and
    when ``include_internal`` is true.
    """
    rates = rates or DEFAULT_RATE_TABLE
    rooms = list(rooms or ())
    porters = list(porters or ())

    industry = read_field(profile, ("industry",))
    strategy = resolve_strategy(industry)
    if strategy is DEFAULT_STRATEGY:
        logger.debug("No pricing strategy for industry, using default", extra={"industry": industry})

    mode = _service_mode(profile)
    outcome, grand_total = _apply_service_mode(
        _rounded(strategy.compute(profile, rooms, porters, rates)), mode, rates
    )
    breakdown = outcome.breakdown

    internal = None
    if include_internal and outcome.monthly_hours is not None:
        internal = decompose_margin(
            grand_total,
            outcome.monthly_hours,
            rates.internal_labor_rate,
            supplies_pct=rates.supplies_pct,
            overhead_pct=rates.overhead_pct,
            target_margin_pct=rates.target_margin_pct,
        )

    return QuoteResult(
        grand_total=grand_total,
        method=outcome.method,
        justification=outcome.justification,
        breakdown=breakdown,
        internal=internal,
        industry=strategy.key,
        service_mode=mode.value,
    )
