# jewellery-backend/payments/services.py
import logging
from decimal import Decimal
from typing import Optional

from common.references import save_with_reference
from .models import AdvancePayment

logger = logging.getLogger(__name__)

ADVANCE_REFERENCE_PREFIX = "ADV"


def create_ledger_entry(
    *,
    order_id: int,
    customer_name: str,
    total_amount: Decimal,
    amount: Decimal,
    balance_amount: Decimal,
    payment_status: str,
    payment_method: str = "Cash",
    notes: Optional[str] = None,
    created_by: Optional[int] = None,
    branch=None,
    is_custom_order: bool = True,
    source_payment=None,
) -> AdvancePayment:
    """
    Append a snapshot row to the advance-payment ledger.

    The reference is `ADV-<year>-<seq>`, sequenced across the whole table.
    """
    entry = AdvancePayment(
        customer_name=customer_name,
        total_amount=total_amount,
        advance_amount=amount,
        balance_amount=balance_amount,
        payment_status=payment_status,
        payment_method=payment_method or "Cash",
        notes=notes,
        created_by=created_by,
        branch=branch,
        is_custom_order=is_custom_order,
        order_id=order_id,
        source_payment=source_payment,
    )
    save_with_reference(entry, "payment_reference", ADVANCE_REFERENCE_PREFIX)
    logger.info(
        "Ledger entry %s for order %s: amount=%s balance=%s status=%s",
        entry.payment_reference, order_id, amount, balance_amount, payment_status,
    )
    return entry
