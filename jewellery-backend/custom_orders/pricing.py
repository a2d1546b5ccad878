# custom_orders/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional

from django.conf import settings

from .models import PaymentStatus

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def money(q: Decimal) -> Decimal:
    return q.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value, default: Decimal = ZERO) -> Decimal:
    """Coerce DB/JSON values (None, "", str, float) to Decimal."""
    if value is None or value == "":
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def max_profit_percentage() -> Decimal:
    return to_decimal(getattr(settings, "CUSTOM_ORDER_MAX_PROFIT_PERCENTAGE", "15"), Decimal("15"))


def effective_quantity(quantity) -> int:
    """Missing, zero or negative quantities price as a single piece."""
    try:
        qty = int(quantity or 0)
    except (TypeError, ValueError):
        qty = 0
    return qty if qty > 0 else 1


def clamp_profit_percentage(value) -> Optional[Decimal]:
    """
    Write-time cap on the markup. Blank means "no markup" and stays None.
    Callers reject negatives before getting here.
    """
    if value is None or value == "":
        return None
    return min(to_decimal(value), max_profit_percentage())


def compute_customer_price(estimated_amount, profit_percentage=None, quantity=1) -> Decimal:
    """
    (estimated + estimated * pct / 100) * qty when pct > 0, else estimated * qty.

    The stored percentage is honoured as-is; the cap only applies when orders
    are written.
    """
    base = to_decimal(estimated_amount)
    pct = to_decimal(profit_percentage)
    qty = Decimal(effective_quantity(quantity))
    if pct > 0:
        unit = base + (base * pct / Decimal("100"))
    else:
        unit = base
    return money(unit * qty)


def derive_payment_status(balance: Decimal, total_paid: Decimal) -> str:
    if balance <= 0:
        return PaymentStatus.FULLY_PAID
    if total_paid > 0:
        return PaymentStatus.PARTIALLY_PAID
    return PaymentStatus.NOT_PAID


@dataclass
class PaymentPosition:
    """Where an order stands against its customer price."""
    price: Decimal
    total_paid: Decimal
    simple_total: Decimal = ZERO
    ledger_total: Decimal = ZERO
    ledger_min_balance: Optional[Decimal] = None

    @property
    def balance(self) -> Decimal:
        return money(self.price - self.total_paid)

    @property
    def status(self) -> str:
        return derive_payment_status(self.balance, self.total_paid)

    @property
    def reconciled_status(self) -> str:
        """
        Status used when healing stored orders. Any one of the signals below
        is enough for "Fully Paid"; ledger snapshots may have been written
        against an older price.
        """
        fully_paid = (
            self.balance <= 0
            or (self.ledger_min_balance is not None and self.ledger_min_balance <= 0)
            or self.ledger_total >= self.price
            or self.simple_total >= self.price
        )
        if fully_paid:
            return PaymentStatus.FULLY_PAID
        if self.total_paid > 0:
            return PaymentStatus.PARTIALLY_PAID
        return PaymentStatus.NOT_PAID
