"""Build the record handed to the lead-capture backend.

The lead sheet stores one row per lead with the quote total as text, so the
record carries ``quote_total`` pre-formatted (``"7424.68"``) together with a
plain-text summary of the breakdown for the notification body. Delivery of
the record is handled outside this service.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from ..quote_engine import QuoteResult, ServiceMode
from ..quote_engine.primitives import non_negative, read_field
from ..quote_engine.strategies import resolve_strategy

logger = logging.getLogger(__name__)

DEFAULT_LEAD_NAME = "Instant Lead"
DEFAULT_LEAD_COMPANY = "Website Inquiry"


class FunnelStage(str, Enum):
    UNLOCK = "UNLOCK"
    RESOURCE = "RESOURCE"
    QUOTE = "QUOTE"


def format_currency(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def format_quote_total(amount: Decimal) -> str:
    """Render a grand total the way the lead sheet stores it (no symbol, two decimals)."""
    return f"{amount:.2f}"


def _room_summary(rooms: Iterable[Any]) -> str:
    parts = []
    for room in rooms or ():
        qty = non_negative(read_field(room, ("quantity", "qty")))
        if qty <= 0:
            continue
        name = read_field(room, ("name",)) or "Unnamed Area"
        parts.append(f"{name}: {int(qty) if qty == qty.to_integral_value() else qty}")
    return ", ".join(parts) or "None listed"


def build_quote_summary(
    quote: QuoteResult,
    *,
    company: str,
    rooms: Iterable[Any] = (),
    address: Optional[str] = None,
) -> str:
    suffix = "/mo" if quote.service_mode == ServiceMode.RECURRING.value else ""
    lines = [
        "FACILITY SUMMARY:",
        f"Organization: {company}",
        f"Sector: {resolve_strategy(quote.industry).label}",
    ]
    if address:
        lines.append(f"Location: {address}")
    lines.append(f"Breakdown: {_room_summary(rooms)}")
    lines.append("")
    lines.append("BUDGET DETAILS:")
    for item in quote.breakdown:
        lines.append(f"{item.label}: {format_currency(item.value)}{suffix}")
    lines.append(f"GRAND TOTAL: {format_currency(quote.grand_total)}{suffix}")
    lines.append(f"Method: {quote.method}")
    return "\n".join(lines)


def build_lead_record(
    contact: Dict[str, Any],
    quote: QuoteResult,
    *,
    funnel_stage: FunnelStage = FunnelStage.QUOTE,
    rooms: Iterable[Any] = (),
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """Return the flat lead record for ``contact`` and the quote they saw.

    Blank name and company fall back to the capture defaults so every row in
    the lead sheet is labelled.
    """
    name = (contact.get("name") or "").strip() or DEFAULT_LEAD_NAME
    company = (contact.get("company") or "").strip() or DEFAULT_LEAD_COMPANY
    stamp = (now or datetime.now(timezone.utc)).isoformat(timespec="seconds")
    record = {
        "timestamp": stamp,
        "funnel_stage": FunnelStage(funnel_stage).value,
        "name": name,
        "email": (contact.get("email") or "").strip(),
        "company": company,
        "phone": (contact.get("phone") or "").strip(),
        "quote_total": format_quote_total(quote.grand_total),
        "notes": (contact.get("notes") or "").strip(),
        "industry": quote.industry,
        "quote_summary": build_quote_summary(
            quote, company=company, rooms=rooms, address=contact.get("address")
        ),
    }
    logger.info(
        "Lead record prepared",
        extra={"funnel_stage": record["funnel_stage"], "industry": record["industry"], "quote_total": record["quote_total"]},
    )
    return record
