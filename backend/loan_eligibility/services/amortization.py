"""Fixed-rate amortized payment calculation."""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")

# Enough digits to quantize any finite float to cents.
ROUNDING_PRECISION = 400


def amortized_monthly_payment(
    principal: float,
    term_months: int,
    annual_rate_percent: float,
) -> float:
    """
    Compute the fixed monthly payment that retires a loan over its term.

    Uses the standard amortization formula
    ``P * r * (1 + r)^n / ((1 + r)^n - 1)`` with ``r`` the monthly rate,
    falling back to straight-line ``P / n`` when the rate is zero. When
    ``(1 + r)^n`` is too large for a float the payment is its limit
    ``P * r``.

    Args:
        principal: Loan principal
        term_months: Number of monthly payments
        annual_rate_percent: Nominal annual interest rate in percent

    Returns:
        Payment rounded to cents, half away from zero. Zero when the
        principal or term is not positive.
    """
    if term_months <= 0 or principal <= 0:
        return 0.0

    monthly_rate = annual_rate_percent / 100.0 / 12.0
    if monthly_rate == 0:
        return _round_cents(principal / term_months)

    try:
        growth = (1 + monthly_rate) ** term_months
        payment = principal * (monthly_rate * growth) / (growth - 1)
    except OverflowError:
        payment = math.inf

    if not math.isfinite(payment):
        payment = principal * monthly_rate

    return _round_cents(payment)


def _round_cents(value: float) -> float:
    """Round to two decimals, half away from zero."""
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = ROUNDING_PRECISION
        return float(Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP))
