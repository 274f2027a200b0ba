import pytest

from photobooth.domain.booking.pricing import ALLOWED_DURATIONS, calculate_total_price


@pytest.mark.parametrize(
    "base_price,duration,expected",
    [
        (650, 8, 1300),
        (750, 3, 563),
        (750, 4, 750),
        (890, 5, 1113),
        (0, 6, 0),
        (499.99, 4, 500),
    ],
)
def test_price_scales_from_four_hour_unit(base_price, duration, expected):
    assert calculate_total_price(base_price, duration) == expected


def test_halves_round_up():
    assert calculate_total_price(750, 3) == 563
    assert calculate_total_price(250, 6) == 375
    assert calculate_total_price(10, 6) == 15


def test_no_product_selected_costs_nothing():
    for duration in ALLOWED_DURATIONS:
        assert calculate_total_price(None, duration) == 0


def test_matches_rounded_ratio_for_every_duration():
    for base_price in (0, 1, 99, 650, 750, 1234):
        for duration in ALLOWED_DURATIONS:
            exact = base_price * duration / 4
            assert calculate_total_price(base_price, duration) == int(exact + 0.5)
