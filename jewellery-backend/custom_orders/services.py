# custom_orders/services.py
"""
Pricing and payment ledger for custom orders.

Money for an order can land in two places: `CustomOrderPayment` (the simple
per-order payments, capped per order) and the shop-wide `AdvancePayment`
ledger. What the customer has paid is always the combination of both; reading
only one of them understates the total. Ledger rows written by
`record_payment` are snapshots of a simple payment (`source_payment` is set)
and are not counted a second time.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import (
    Count, DecimalField, ExpressionWrapper, F, IntegerField, Min, OuterRef, Subquery, Sum, Value,
)
from django.db.models.functions import Coalesce
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from catalog.models import Category
from common.references import save_with_reference
from payments.models import AdvancePayment
from payments.services import create_ledger_entry
from .exceptions import InvalidAmount, OrderNotFound, PaymentLimitReached, PickupNotAllowed
from .models import CustomOrder, CustomOrderMaterial, CustomOrderPayment, OrderStatus
from .pricing import (
    PaymentPosition, ZERO, clamp_profit_percentage, compute_customer_price, derive_payment_status,
    effective_quantity, money, to_decimal,
)

logger = logging.getLogger(__name__)

ORDER_REFERENCE_PREFIX = "CUST"
INITIAL_PAYMENT_NOTE = "Initial advance payment"
LEDGER_PAYMENT_NOTE = "Additional payment for custom order"

DEC = DecimalField(max_digits=12, decimal_places=2)


def max_payments() -> int:
    return int(getattr(settings, "CUSTOM_ORDER_MAX_PAYMENTS", 3))


def get_order(order_id, *, for_update: bool = False) -> CustomOrder:
    qs = CustomOrder.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=order_id)
    except (CustomOrder.DoesNotExist, ValueError, TypeError):
        raise OrderNotFound()


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def simple_payments(order_id):
    return CustomOrderPayment.objects.filter(order_id=order_id)


def ledger_payments(order_id):
    return AdvancePayment.objects.filter(order_id=order_id, is_custom_order=True)


def aggregate_total_paid(order_id) -> Decimal:
    """Everything paid against an order, across both payment tables."""
    zero = Value(ZERO, output_field=DEC)
    simple = simple_payments(order_id).aggregate(total=Coalesce(Sum("payment_amount"), zero))["total"]
    ledger = (
        ledger_payments(order_id)
        .filter(source_payment__isnull=True)
        .aggregate(total=Coalesce(Sum("advance_amount"), zero))["total"]
    )
    return money(to_decimal(simple) + to_decimal(ledger))


def with_payment_totals(qs):
    """
    Annotate orders with the same figures `aggregate_total_paid` computes, in
    one query: simple_total, ledger_extra_total (ledger rows that are not
    snapshots), total_paid, ledger_total, ledger_min_balance, payment_count.
    """
    zero = Value(ZERO, output_field=DEC)
    simple = (
        CustomOrderPayment.objects.filter(order=OuterRef("pk")).order_by()
        .values("order").annotate(total=Sum("payment_amount")).values("total")[:1]
    )
    simple_count = (
        CustomOrderPayment.objects.filter(order=OuterRef("pk")).order_by()
        .values("order").annotate(n=Count("id")).values("n")[:1]
    )
    ledger = AdvancePayment.objects.filter(order_id=OuterRef("pk"), is_custom_order=True).order_by()
    ledger_extra = (
        ledger.filter(source_payment__isnull=True)
        .values("order_id").annotate(total=Sum("advance_amount")).values("total")[:1]
    )
    ledger_total = ledger.values("order_id").annotate(total=Sum("advance_amount")).values("total")[:1]
    ledger_min = ledger.values("order_id").annotate(low=Min("balance_amount")).values("low")[:1]

    return qs.annotate(
        simple_total=Coalesce(Subquery(simple, output_field=DEC), zero),
        ledger_extra_total=Coalesce(Subquery(ledger_extra, output_field=DEC), zero),
        ledger_total=Coalesce(Subquery(ledger_total, output_field=DEC), zero),
        ledger_min_balance=Subquery(ledger_min, output_field=DEC),
        payment_count=Coalesce(Subquery(simple_count, output_field=IntegerField()), Value(0)),
    ).annotate(
        total_paid=ExpressionWrapper(F("simple_total") + F("ledger_extra_total"), output_field=DEC),
    )


def customer_price(order: CustomOrder) -> Decimal:
    return compute_customer_price(order.estimated_amount, order.profit_percentage, order.quantity)


def payment_position(order: CustomOrder) -> PaymentPosition:
    if not hasattr(order, "total_paid"):
        order = with_payment_totals(CustomOrder.objects.filter(pk=order.pk)).get()
    ledger_min = order.ledger_min_balance
    return PaymentPosition(
        price=customer_price(order),
        total_paid=money(to_decimal(order.total_paid)),
        simple_total=to_decimal(order.simple_total),
        ledger_total=to_decimal(order.ledger_total),
        ledger_min_balance=None if ledger_min is None else to_decimal(ledger_min),
    )


# ---------------------------------------------------------------------------
# Order intake
# ---------------------------------------------------------------------------

def create_order(*, advance_amount=None, **fields) -> CustomOrder:
    """
    Create an order in "Pending" with a fresh CUST reference. A positive
    advance is booked as the order's first simple payment in the same
    transaction.
    """
    advance = money(to_decimal(advance_amount))
    fields["profit_percentage"] = clamp_profit_percentage(fields.get("profit_percentage"))
    fields["quantity"] = effective_quantity(fields.get("quantity"))
    price = compute_customer_price(fields["estimated_amount"], fields["profit_percentage"], fields["quantity"])

    with transaction.atomic():
        order = CustomOrder(
            order_status=OrderStatus.PENDING,
            payment_status=derive_payment_status(price - advance, advance),
            advance_amount=advance,
            **fields,
        )
        save_with_reference(order, "order_reference", ORDER_REFERENCE_PREFIX)
        if advance > 0:
            CustomOrderPayment.objects.create(
                order=order,
                payment_amount=advance,
                payment_method="Cash",
                notes=INITIAL_PAYMENT_NOTE,
            )

    logger.info("Created custom order %s (%s) price=%s advance=%s", order.order_reference, order.pk, price, advance)
    return order


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

@dataclass
class PaymentOutcome:
    payment_id: int
    ledger_reference: str
    total_paid: Decimal
    payment_status: str
    balance: Decimal
    payment_count: int
    remaining_payments: int

    def as_dict(self) -> dict:
        return {
            "message": "Payment added successfully",
            "payment_id": self.payment_id,
            "ledger_reference": self.ledger_reference,
            "new_advance_amount": self.total_paid,
            "payment_status": self.payment_status,
            "balance_amount": self.balance,
            "payment_count": self.payment_count,
            "remaining_payments": self.remaining_payments,
        }


def record_payment(order_id, amount, method: Optional[str] = None, reference: Optional[str] = None,
                   notes: Optional[str] = None) -> PaymentOutcome:
    """
    Book a payment against a custom order.

    One unit of work: simple payment row, ledger snapshot row and the cached
    totals on the order either all commit or none do.
    """
    amount = to_decimal(amount)
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmount()
    amount = money(amount)
    limit = max_payments()

    with transaction.atomic():
        order = get_order(order_id, for_update=True)
        count = order.payments.count()
        if count >= limit:
            logger.warning("Payment limit reached for order %s (%s payments)", order.pk, count)
            raise PaymentLimitReached(count, limit)

        payment = CustomOrderPayment.objects.create(
            order=order,
            payment_amount=amount,
            payment_method=method or "Cash",
            payment_reference=reference or None,
            notes=notes or None,
        )

        position = PaymentPosition(price=customer_price(order), total_paid=aggregate_total_paid(order.pk))
        status = position.status

        entry = create_ledger_entry(
            order_id=order.pk,
            customer_name=order.customer_name,
            total_amount=position.price,
            amount=amount,
            balance_amount=position.balance,
            payment_status=status,
            payment_method=payment.payment_method,
            notes=notes or LEDGER_PAYMENT_NOTE,
            created_by=order.created_by,
            branch=order.branch,
            source_payment=payment,
        )

        order.advance_amount = position.total_paid
        order.payment_status = status
        order.save(update_fields=["advance_amount", "payment_status", "updated_at"])

    new_count = count + 1
    logger.info(
        "Order %s payment %s: total_paid=%s balance=%s status=%s",
        order.pk, payment.pk, position.total_paid, position.balance, status,
    )
    return PaymentOutcome(
        payment_id=payment.pk,
        ledger_reference=entry.payment_reference,
        total_paid=position.total_paid,
        payment_status=status,
        balance=position.balance,
        payment_count=new_count,
        remaining_payments=max(0, limit - new_count),
    )


def refresh_payment_status(order: CustomOrder) -> str:
    """
    Bring the cached payment_status/advance_amount on `order` in line with the
    payment tables. Writes only when something changed, so repeated calls are
    no-ops.
    """
    position = payment_position(order)
    status = position.reconciled_status
    total_paid = position.total_paid
    if order.payment_status != status or to_decimal(order.advance_amount) != total_paid:
        CustomOrder.objects.filter(pk=order.pk).update(
            payment_status=status,
            advance_amount=total_paid,
            updated_at=timezone.now(),
        )
        logger.info(
            "Reconciled order %s payment status %s -> %s (paid %s)",
            order.pk, order.payment_status, status, total_paid,
        )
        order.payment_status = status
        order.advance_amount = total_paid
    return status


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------

def update_order_status(order_id, order_status: str, supplier_notes: Optional[str] = None) -> CustomOrder:
    """
    Any status may replace any other, except "Picked Up", which goes through
    `mark_picked_up` and its "Completed" guard.
    """
    if order_status not in OrderStatus.values:
        raise ValidationError({"order_status": f"Unknown order status '{order_status}'"})
    if order_status == OrderStatus.PICKED_UP:
        return mark_picked_up(order_id, supplier_notes=supplier_notes)

    updates = {"order_status": order_status, "updated_at": timezone.now()}
    if supplier_notes:
        updates["supplier_notes"] = supplier_notes
    try:
        changed = CustomOrder.objects.filter(pk=order_id).update(**updates)
    except (ValueError, TypeError):
        changed = 0
    if not changed:
        raise OrderNotFound()
    logger.info("Order %s status set to %s", order_id, order_status)
    return get_order(order_id)


def mark_picked_up(order_id, pickup_notes: Optional[str] = None,
                   supplier_notes: Optional[str] = None) -> CustomOrder:
    with transaction.atomic():
        order = get_order(order_id, for_update=True)
        if order.order_status != OrderStatus.COMPLETED:
            raise PickupNotAllowed(order.order_status)
        order.order_status = OrderStatus.PICKED_UP
        order.pickup_date = timezone.now()
        order.pickup_notes = pickup_notes or None
        fields = ["order_status", "pickup_date", "pickup_notes", "updated_at"]
        if supplier_notes:
            order.supplier_notes = supplier_notes
            fields.append("supplier_notes")
        order.save(update_fields=fields)
    logger.info("Order %s picked up at %s", order.pk, order.pickup_date)
    return order


def add_materials(order_id, materials: list) -> int:
    order = get_order(order_id)
    rows = [
        CustomOrderMaterial(
            order=order,
            material_name=m["material_name"],
            quantity=m["quantity"],
            unit=m.get("unit") or "g",
            cost_per_unit=m.get("cost_per_unit"),
            total_cost=m.get("total_cost"),
            supplier=m.get("supplier"),
        )
        for m in materials
    ]
    CustomOrderMaterial.objects.bulk_create(rows)
    return len(rows)


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

def payment_history(order_id) -> dict:
    """Both payment tables for one order, oldest first, tagged by source."""
    order = get_order(order_id)
    rows = [
        {
            "source": "custom_order_payments",
            "payment_id": p.pk,
            "amount": p.payment_amount,
            "payment_date": p.payment_date,
            "payment_method": p.payment_method,
            "reference": p.payment_reference,
            "notes": p.notes,
            "mirrors_payment_id": None,
        }
        for p in simple_payments(order.pk)
    ]
    rows += [
        {
            "source": "advance_payments",
            "payment_id": e.pk,
            "amount": e.advance_amount,
            "payment_date": e.payment_date,
            "payment_method": e.payment_method,
            "reference": e.payment_reference,
            "notes": e.notes,
            "mirrors_payment_id": e.source_payment_id,
        }
        for e in ledger_payments(order.pk)
    ]
    rows.sort(key=lambda r: (r["payment_date"], r["source"], r["payment_id"]))

    position = payment_position(order)
    return {
        "order": {
            "order_id": order.pk,
            "order_reference": order.order_reference,
            "customer_name": order.customer_name,
            "estimated_amount": order.estimated_amount,
        },
        "payments": rows,
        "total_paid": position.total_paid,
        "total_amount_with_profit": position.price,
        "remaining_balance": position.balance,
        "payment_count": len(rows),
    }


def category_supplier_summary() -> list:
    """Per category, the suppliers its orders' materials came from."""
    summary = {
        c.pk: {"category_id": c.pk, "category_name": c.category_name, "suppliers": []}
        for c in Category.objects.order_by("category_name", "id")
    }
    rows = (
        CustomOrderMaterial.objects
        .filter(order__category__isnull=False, supplier__isnull=False)
        .values("order__category_id", "supplier_id", "supplier__supplier_name")
        .annotate(order_count=Count("order", distinct=True))
        .order_by("supplier__supplier_name", "supplier_id")
    )
    for row in rows:
        entry = summary.get(row["order__category_id"])
        if entry is None:
            continue
        entry["suppliers"].append({
            "supplier_id": row["supplier_id"],
            "supplier_name": row["supplier__supplier_name"],
            "order_count": row["order_count"],
        })
    return list(summary.values())
