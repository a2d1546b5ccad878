# jewellery-backend/custom_orders/views.py
import django_filters
from django.http import Http404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, parsers, status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import OrderNotFound
from .models import CustomOrder, OrderStatus
from .notifications import send_completion_notification, send_payment_reminder
from .serializers import (
    CompletionNotificationSerializer, CustomOrderCreateSerializer, CustomOrderDetailSerializer,
    CustomOrderImageSerializer, CustomOrderListSerializer, ImageUploadSerializer, MaterialsCreateSerializer,
    OrderStatusUpdateSerializer, PaymentCreateSerializer, PickupSerializer,
)
from .services import (
    add_materials, category_supplier_summary, create_order, get_order, mark_picked_up, max_payments,
    payment_history, payment_position, record_payment, refresh_payment_status, update_order_status,
    with_payment_totals,
)
from .uploads import save_order_image


def _orders_with_totals():
    return with_payment_totals(
        CustomOrder.objects.select_related("category", "supplier", "branch")
    )


class CustomOrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(field_name="order_status", choices=OrderStatus.choices)
    branch_id = django_filters.NumberFilter(field_name="branch_id")

    class Meta:
        model = CustomOrder
        fields = ["status", "branch_id"]


class CustomOrderListView(generics.ListAPIView):
    """
    GET /api/v1/custom-orders/?status=&branch_id=
    Totals and `current_payment_status` are computed per row; nothing is written.
    Use the refresh endpoint or `reconcile_payment_status` to persist them.
    """
    serializer_class = CustomOrderListSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = CustomOrderFilter
    pagination_class = None

    def get_queryset(self):
        return _orders_with_totals().order_by("-order_date", "-id")


class CustomOrderCreateView(APIView):
    def post(self, request):
        s = CustomOrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        order = create_order(**s.validated_data)
        return Response(
            {
                "message": "Custom order created successfully",
                "order_id": order.pk,
                "order_reference": order.order_reference,
                "payment_status": order.payment_status,
            },
            status=status.HTTP_201_CREATED,
        )


class CompletedOrdersView(generics.ListAPIView):
    """GET /api/v1/custom-orders/completed-orders?branch_id=&include_picked_up=true"""
    serializer_class = CustomOrderListSerializer
    pagination_class = None

    def get_queryset(self):
        statuses = [OrderStatus.COMPLETED]
        include = (self.request.query_params.get("include_picked_up") or "").strip().lower()
        if include in ("1", "true", "yes"):
            statuses.append(OrderStatus.PICKED_UP)

        qs = _orders_with_totals().filter(order_status__in=statuses)
        branch_id = self.request.query_params.get("branch_id")
        if branch_id:
            if not branch_id.isdigit():
                raise ValidationError({"branch_id": "Must be an integer."})
            qs = qs.filter(branch_id=branch_id)
        return qs.order_by("-updated_at", "-id")


class CategorySupplierSummaryView(APIView):
    def get(self, request):
        return Response(category_supplier_summary())


class CustomOrderDetailView(generics.RetrieveAPIView):
    serializer_class = CustomOrderDetailSerializer

    def get_queryset(self):
        return _orders_with_totals().prefetch_related("payments", "materials__supplier", "images")

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise OrderNotFound()

    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        ctx["max_payments"] = max_payments()
        return ctx


class OrderStatusView(APIView):
    def put(self, request, pk):
        s = OrderStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        order = update_order_status(pk, s.validated_data["order_status"], s.validated_data.get("supplier_notes"))
        return Response({
            "message": "Order status updated successfully",
            "order_id": order.pk,
            "order_status": order.order_status,
        })


class OrderPaymentsView(APIView):
    def post(self, request, pk):
        s = PaymentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        outcome = record_payment(
            pk,
            data["payment_amount"],
            method=data.get("payment_method"),
            reference=data.get("payment_reference"),
            notes=data.get("notes"),
        )
        return Response(outcome.as_dict(), status=status.HTTP_201_CREATED)


class OrderMaterialsView(APIView):
    def post(self, request, pk):
        s = MaterialsCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        count = add_materials(pk, s.validated_data["materials"])
        return Response(
            {"message": "Materials added successfully", "count": count},
            status=status.HTTP_201_CREATED,
        )


class OrderImagesView(APIView):
    parser_classes = [parsers.MultiPartParser, parsers.FormParser]

    def post(self, request, pk):
        s = ImageUploadSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        image = save_order_image(pk, s.validated_data["image"])
        body = CustomOrderImageSerializer(image, context={"request": request}).data
        body["message"] = "Image uploaded successfully"
        return Response(body, status=status.HTTP_201_CREATED)


class PaymentHistoryView(APIView):
    def get(self, request, pk):
        return Response(payment_history(pk))


class RefreshPaymentStatusView(APIView):
    def post(self, request, pk):
        order = get_order(pk)
        before = (order.payment_status, order.advance_amount)
        refreshed = refresh_payment_status(order)
        position = payment_position(order)
        return Response({
            "order_id": order.pk,
            "previous_payment_status": before[0],
            "payment_status": refreshed,
            "total_paid": position.total_paid,
            "total_amount_with_profit": position.price,
            "balance_amount": position.balance,
            "updated": before != (order.payment_status, order.advance_amount),
        })


class SendReminderView(APIView):
    def post(self, request, pk):
        return Response(send_payment_reminder(pk))


class SendCompletionNotificationView(APIView):
    def post(self, request, pk):
        s = CompletionNotificationSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return Response(send_completion_notification(pk, s.validated_data.get("pickup_location")))


class MarkPickedUpView(APIView):
    def put(self, request, pk):
        s = PickupSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        order = mark_picked_up(pk, s.validated_data.get("pickup_notes"))
        return Response({
            "message": "Order marked as picked up successfully",
            "order_id": order.pk,
            "order_status": order.order_status,
            "pickup_date": order.pickup_date,
        })
