from functools import lru_cache

from fastapi import status

from ..core.config import settings
from ..quote_engine import DEFAULT_RATE_TABLE, RateTable, RateTableError, load_rate_table
from ..utils import error_response


@lru_cache(maxsize=8)
def _rate_table_for(path: str) -> RateTable:
    if not path:
        return DEFAULT_RATE_TABLE
    return load_rate_table(path)


def get_rate_table() -> RateTable:
    """Rate table for this process: defaults plus ``PRICING_RATES_FILE`` overrides."""
    try:
        return _rate_table_for(settings.PRICING_RATES_FILE)
    except RateTableError as exc:
        raise error_response(
            "Pricing configuration unavailable",
            {"rates": str(exc)},
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )


def clear_rate_table_cache() -> None:
    _rate_table_for.cache_clear()
