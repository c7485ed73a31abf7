import logging
import threading
from dataclasses import replace
from decimal import Decimal

import pytest

from app.quote_engine import (
    DEFAULT_RATE_TABLE,
    FacilityProfile,
    PorterLineItem,
    RoomLineItem,
    compute_quote,
)
from app.quote_engine.estimate import ONETIME_METHOD
from app.quote_engine.primitives import money


def test_education_example_with_internal_view(education_rooms, day_porter):
    result = compute_quote({"industry": "education"}, education_rooms, day_porter)
    assert result.grand_total == Decimal("7424.68")
    assert result.industry == "education"
    assert result.service_mode == "recurring"
    view = result.internal
    assert view.labor_cost == Decimal("5512.31")
    assert view.supplies_cost == Decimal("222.74")
    assert view.overhead_cost == Decimal("371.23")
    assert view.net_profit == Decimal("1318.40")
    assert view.total_monthly_hours == Decimal("297.96")
    assert view.profit_margin_pct == Decimal("17.76")
    assert view.target_total == Decimal("7655.99")


def test_engine_accepts_dataclasses():
    profile = FacilityProfile(industry="education")
    rooms = [RoomLineItem("Classroom", 15, 15), RoomLineItem("Restroom", 6, 20)]
    porters = [PorterLineItem("Day Porter", 1, 8)]
    assert compute_quote(profile, rooms, porters).grand_total == Decimal("7424.68")


def test_grand_total_is_sum_of_rounded_lines(education_rooms, day_porter):
    result = compute_quote({"industry": "education", "service_mode": "onetime"}, education_rooms, day_porter)
    assert result.grand_total == sum(line.value for line in result.breakdown)
    for line in result.breakdown:
        assert line.value == line.value.quantize(Decimal("0.01"))


def test_onetime_scales_recurring():
    recurring = compute_quote({"industry": "office", "square_footage": 10000})
    onetime = compute_quote({"industry": "office", "square_footage": 10000, "service_mode": "onetime"})
    assert onetime.grand_total == Decimal("1050.00")
    assert onetime.grand_total == recurring.grand_total * Decimal("0.70")
    assert onetime.method == ONETIME_METHOD
    assert onetime.service_mode == "onetime"
    assert onetime.justification == recurring.justification


def test_onetime_scales_every_line(education_rooms, day_porter):
    recurring = compute_quote({"industry": "education"}, education_rooms, day_porter)
    onetime = compute_quote({"industry": "education", "service_type": "onetime"}, education_rooms, day_porter)
    assert [l.label for l in onetime.breakdown] == [l.label for l in recurring.breakdown]
    for r_line, o_line in zip(recurring.breakdown, onetime.breakdown):
        assert abs(o_line.value - r_line.value * Decimal("0.70")) <= Decimal("0.01")
    assert onetime.grand_total == Decimal("5197.28")
    assert onetime.grand_total == sum(line.value for line in onetime.breakdown)
    assert onetime.internal.total_monthly_hours == Decimal("208.57")


@pytest.mark.parametrize(
    "profile",
    [
        {"industry": "education", "include_periodic_specialty": True},
        {"industry": "church", "seating_type": "pews", "church_capacity": 333},
        {"industry": "daycare", "student_count": 17, "changing_stations": 3},
        {"industry": "warehouse", "labor_hours_per_day": 7.3, "warehouse_scrubbing_sqft": 4321},
        {"industry": "hotel", "hotel_rooms": 77, "square_footage": 12345},
        {"industry": "fitness", "square_footage": 9999, "shower_count": 3, "has_sauna": True},
    ],
)
def test_onetime_total_is_rounded_recurring_total(profile, education_rooms, day_porter):
    recurring = compute_quote(profile, education_rooms, day_porter)
    onetime = compute_quote({**profile, "service_mode": "onetime"}, education_rooms, day_porter)
    assert onetime.grand_total == money(recurring.grand_total * Decimal("0.70"))
    assert onetime.grand_total == sum(line.value for line in onetime.breakdown)
    assert all(line.value >= 0 for line in onetime.breakdown)


def test_unknown_service_mode_is_recurring():
    result = compute_quote({"industry": "office", "square_footage": 100, "service_mode": "weekly"})
    assert result.service_mode == "recurring"
    assert result.method != ONETIME_METHOD


def test_zero_inventory_prices_to_zero():
    result = compute_quote({"industry": "education"}, [{"quantity": 0, "minutes_per_unit": 15}], [])
    assert result.grand_total == Decimal("0.00")
    assert result.internal.profit_margin_pct == Decimal("0.00")
    assert "0 hours of nightly academic sanitation" in result.justification


def test_bad_numeric_input_never_raises():
    profile = {"industry": "office", "square_footage": "lots"}
    assert compute_quote(profile).grand_total == Decimal("0.00")
    profile = {"industry": "warehouse", "labor_hours_per_day": -4, "warehouse_scrubbing_sqft": None}
    assert compute_quote(profile).grand_total == Decimal("0.00")
    assert compute_quote(None).industry == "default"
    assert compute_quote({"industry": "office", "square_footage": 1e30}).grand_total == Decimal("1.5E+29")
    profile = {"industry": "warehouse", "labor_hours_per_day": "100000000000000000000000000.5"}
    assert "100,000,000,000,000,000,000,000,000.5 managed labor hours" in compute_quote(profile).justification


def test_unknown_industry_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="app.quote_engine.estimate")
    compute_quote({"industry": "spaceport", "square_footage": 10})
    assert any("default" in r.getMessage() and r.industry == "spaceport" for r in caplog.records)


def test_internal_view_only_for_hour_based_industries():
    assert compute_quote({"industry": "hoa"}).internal is None
    assert compute_quote({"industry": "government", "labor_hours_per_day": 1}).internal is not None
    assert compute_quote({"industry": "government"}, include_internal=False).internal is None


def test_decomposition_always_sums_to_total(education_rooms, day_porter):
    for industry in ("education", "church", "daycare", "warehouse", "government"):
        profile = {
            "industry": industry,
            "labor_hours_per_day": 6,
            "warehouse_scrubbing_sqft": 1234,
            "changing_stations": 2,
        }
        view = compute_quote(profile, education_rooms, day_porter).internal
        total = compute_quote(profile, education_rooms, day_porter).grand_total
        assert view.labor_cost + view.supplies_cost + view.overhead_cost + view.net_profit == total


@pytest.mark.parametrize(
    "profile, field",
    [
        ({"industry": "office"}, "square_footage"),
        ({"industry": "medical"}, "square_footage"),
        ({"industry": "retail", "retail_size": "small"}, "frequency_per_week"),
        ({"industry": "warehouse"}, "labor_hours_per_day"),
        ({"industry": "warehouse"}, "warehouse_scrubbing_sqft"),
        ({"industry": "hotel"}, "hotel_rooms"),
        ({"industry": "hotel"}, "square_footage"),
        ({"industry": "government"}, "labor_hours_per_day"),
        ({"industry": "church"}, "church_capacity"),
        ({"industry": "fitness"}, "square_footage"),
        ({"industry": "fitness"}, "shower_count"),
        ({"industry": "daycare"}, "student_count"),
        ({"industry": "daycare"}, "changing_stations"),
        ({"industry": "spaceport"}, "square_footage"),
    ],
)
def test_total_is_monotone_in_inputs(profile, field):
    totals = [compute_quote({**profile, field: value}).grand_total for value in (0, 10, 500, 5000)]
    assert totals == sorted(totals)
    assert totals[-1] > totals[0]


def test_total_is_monotone_in_rooms_and_porters():
    base = compute_quote({"industry": "education"}, [{"quantity": 2, "minutes_per_unit": 15}], []).grand_total
    more_rooms = compute_quote({"industry": "education"}, [{"quantity": 3, "minutes_per_unit": 15}], []).grand_total
    with_porter = compute_quote(
        {"industry": "education"},
        [{"quantity": 3, "minutes_per_unit": 15}],
        [{"quantity": 1, "hours_per_day": 2}],
    ).grand_total
    assert base < more_rooms < with_porter


def test_custom_rate_table_is_used():
    rates = replace(DEFAULT_RATE_TABLE, office_rate_per_sqft=Decimal("0.20"))
    assert compute_quote({"industry": "office", "square_footage": 1000}, rates=rates).grand_total == Decimal("200.00")
    assert DEFAULT_RATE_TABLE.office_rate_per_sqft == Decimal("0.15")


def test_compute_quote_is_thread_safe(education_rooms, day_porter):
    results = []

    def worker():
        results.append(compute_quote({"industry": "education"}, education_rooms, day_porter).grand_total)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == [Decimal("7424.68")] * 8
