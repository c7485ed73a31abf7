from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from enum import Enum
from typing import Any, Iterable, Mapping

from .models import InternalCostBreakdown

_CENT = Decimal("0.01")
_ZERO = Decimal("0")
_SIXTY = Decimal("60")
_TWELVE = Decimal("12")
_HUNDRED = Decimal("100")


def to_decimal(value: Any, default: Decimal = _ZERO) -> Decimal:
    """Coerce ``value`` to a finite Decimal; ``None`` and junk become ``default``."""
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, bool):
        return Decimal(int(value))
    try:
        dec = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return default
    return dec if dec.is_finite() else default


def non_negative(value: Any, default: Decimal = _ZERO) -> Decimal:
    dec = to_decimal(value, default)
    return dec if dec > _ZERO else _ZERO


def money(value: Decimal) -> Decimal:
    """Round to cents; precision grows with the value so large totals never trap."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def read_field(source: Any, keys: tuple[str, ...]) -> Any:
    """Return the first non-None value for ``keys`` on a mapping or object."""
    if source is None:
        return None
    for key in keys:
        if isinstance(source, Mapping):
            value = source.get(key)
        else:
            value = getattr(source, key, None)
        if value is not None:
            return value
    return None


_QUANTITY_KEYS = ("quantity", "qty")
_MINUTES_KEYS = ("minutes_per_unit", "minutes_per_room", "minutesPerUnit", "minutesPerRoom")
_HOURS_KEYS = ("hours_per_day", "hoursPerDay")


def room_labor_hours(rooms: Iterable[Any], work_days_per_month: Decimal) -> Decimal:
    """Monthly labor hours implied by a room inventory."""
    daily_minutes = _ZERO
    for room in rooms or ():
        qty = non_negative(read_field(room, _QUANTITY_KEYS))
        minutes = non_negative(read_field(room, _MINUTES_KEYS))
        daily_minutes += qty * minutes
    return daily_minutes / _SIXTY * work_days_per_month


def room_labor_cost(
    rooms: Iterable[Any], blended_rate: Decimal, work_days_per_month: Decimal
) -> Decimal:
    return room_labor_hours(rooms, work_days_per_month) * blended_rate


def porter_labor_hours(porters: Iterable[Any], work_days_per_month: Decimal) -> Decimal:
    """Monthly hours of dedicated on-site staffing."""
    daily_hours = _ZERO
    for porter in porters or ():
        qty = non_negative(read_field(porter, _QUANTITY_KEYS))
        hours = non_negative(read_field(porter, _HOURS_KEYS))
        daily_hours += qty * hours
    return daily_hours * work_days_per_month


def porter_labor_cost(
    porters: Iterable[Any], porter_rate: Decimal, work_days_per_month: Decimal
) -> Decimal:
    return porter_labor_hours(porters, work_days_per_month) * porter_rate


def amortized_specialty_cost(base_labor_cost: Decimal, annual_factor: Decimal) -> Decimal:
    """Spread a year of periodic specialty work evenly over 12 invoices."""
    return non_negative(base_labor_cost) * non_negative(annual_factor) / _TWELVE


def tier_lookup(size_class: Any, table: Mapping[str, Decimal], fallback: Any) -> Decimal:
    """Return the table amount for ``size_class``, or the ``fallback`` class amount."""

    def _key(v: Any) -> str:
        if isinstance(v, Enum):
            v = v.value
        return str(v or "").strip().lower()

    key = _key(size_class)
    if key in table:
        return table[key]
    return table.get(_key(fallback), _ZERO)


def apply_markup(cost: Decimal, margin_pct: Decimal) -> Decimal:
    """Price at which ``margin_pct`` (a fraction of price) is left over after ``cost``.

    A margin at or above 100 % cannot be priced; the cost is returned as-is.
    """
    cost = non_negative(cost)
    margin = to_decimal(margin_pct)
    if margin >= 1 or margin < 0:
        return cost
    return cost / (Decimal("1") - margin)


def decompose_margin(
    total: Decimal,
    labor_hours: Decimal,
    labor_rate: Decimal,
    *,
    supplies_pct: Decimal,
    overhead_pct: Decimal,
    target_margin_pct: Decimal,
) -> InternalCostBreakdown:
    """Split a customer total into labor, supplies, overhead and profit.

    Net profit is whatever remains after the three rounded cost components,
    so the four parts always add back to ``total`` to the cent.
    """
    total = money(non_negative(total))
    hours = non_negative(labor_hours)
    labor = money(hours * non_negative(labor_rate))
    supplies = money(total * non_negative(supplies_pct))
    overhead = money(total * non_negative(overhead_pct))
    net = total - labor - supplies - overhead
    if total > _ZERO:
        margin_pct = money(net / total * _HUNDRED)
    else:
        margin_pct = money(_ZERO)
    target = apply_markup(labor, non_negative(supplies_pct) + non_negative(overhead_pct) + non_negative(target_margin_pct))
    return InternalCostBreakdown(
        labor_cost=labor,
        supplies_cost=supplies,
        overhead_cost=overhead,
        net_profit=net,
        profit_margin_pct=margin_pct,
        total_monthly_hours=money(hours),
        target_total=money(target),
    )
