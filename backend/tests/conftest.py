from pathlib import Path
from dotenv import load_dotenv
import pytest

# Load environment variables for tests
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test')


@pytest.fixture(autouse=True)
def fresh_rate_table():
    """Drop cached rate tables so a test's PRICING_RATES_FILE takes effect."""
    from app.api.dependencies import clear_rate_table_cache

    clear_rate_table_cache()
    yield
    clear_rate_table_cache()


@pytest.fixture
def education_rooms():
    return [
        {"name": "Classroom", "quantity": 15, "minutes_per_unit": 15},
        {"name": "Restroom", "quantity": 6, "minutes_per_unit": 20},
    ]


@pytest.fixture
def day_porter():
    return [{"name": "Day Porter", "quantity": 1, "hours_per_day": 8}]
