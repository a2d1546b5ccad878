from django.apps import AppConfig


class CustomOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "custom_orders"
    verbose_name = "Custom orders"
