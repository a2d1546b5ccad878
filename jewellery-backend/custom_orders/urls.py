# jewellery-backend/custom_orders/urls.py
from django.urls import path
from .views import (
    CustomOrderListView, CustomOrderCreateView, CompletedOrdersView, CategorySupplierSummaryView,
    CustomOrderDetailView, OrderStatusView, OrderPaymentsView, OrderMaterialsView, OrderImagesView,
    PaymentHistoryView, RefreshPaymentStatusView, SendReminderView, SendCompletionNotificationView,
    MarkPickedUpView,
)


app_name = "custom_orders"

urlpatterns = [
    path("", CustomOrderListView.as_view(), name="order-list"),
    path("create", CustomOrderCreateView.as_view(), name="order-create"),
    path("completed-orders", CompletedOrdersView.as_view(), name="completed-orders"),
    path("categories/suppliers", CategorySupplierSummaryView.as_view(), name="category-suppliers"),
    path("<int:pk>", CustomOrderDetailView.as_view(), name="order-detail"),
    path("<int:pk>/status", OrderStatusView.as_view(), name="order-status"),
    path("<int:pk>/payments", OrderPaymentsView.as_view(), name="order-payments"),
    path("<int:pk>/materials", OrderMaterialsView.as_view(), name="order-materials"),
    path("<int:pk>/images", OrderImagesView.as_view(), name="order-images"),
    path("<int:pk>/payment-history", PaymentHistoryView.as_view(), name="payment-history"),
    path("<int:pk>/refresh-payment-status", RefreshPaymentStatusView.as_view(), name="refresh-payment-status"),
    path("<int:pk>/send-reminder", SendReminderView.as_view(), name="send-reminder"),
    path("<int:pk>/send-completion-notification", SendCompletionNotificationView.as_view(),
         name="send-completion-notification"),
    path("<int:pk>/mark-as-picked-up", MarkPickedUpView.as_view(), name="mark-picked-up"),
]
