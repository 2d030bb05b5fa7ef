from decimal import Decimal

from apps.carts.totals import compute_total, fits_money, line_subtotal, to_money


def test_line_subtotal_multiplies_price_by_quantity():
    assert line_subtotal(Decimal("10.00"), 3) == Decimal("30.00")
    assert line_subtotal("19.99", 2) == Decimal("39.98")


def test_compute_total_sums_lines():
    total = compute_total([(Decimal("10"), 3), (Decimal("5"), 1)])
    assert total == Decimal("35.00")


def test_compute_total_of_nothing_is_zero():
    assert compute_total([]) == Decimal("0.00")


def test_to_money_rounds_half_up_to_cents():
    assert to_money("2.005") == Decimal("2.01")
    assert to_money(1) == Decimal("1.00")
    assert str(to_money(Decimal("35"))) == "35.00"


def test_fits_money_respects_column_precision():
    assert fits_money("99999999.99", 10)
    assert not fits_money("100000000.00", 10)
    assert fits_money(Decimal("9999999999.99"), 12)
    assert not fits_money(10**12, 12)


def test_fits_money_rejects_values_that_cannot_be_rounded():
    assert not fits_money("1e30", 12)
    assert not fits_money("nonsense", 12)
