# custom_orders/uploads.py
import logging
import os
import random
import time

from django.conf import settings

from .exceptions import FileTooLarge, UnsupportedFileType
from .models import CustomOrderImage
from .services import get_order

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"jpeg", "jpg", "png", "gif"}


def max_image_bytes() -> int:
    return int(getattr(settings, "CUSTOM_ORDER_MAX_IMAGE_BYTES", 5 * 1024 * 1024))


def _extension(name: str) -> str:
    return os.path.splitext(name or "")[1].lstrip(".").lower()


def validate_order_image(file):
    """Size first, then extension and declared media type; both must name an allowed format."""
    limit = max_image_bytes()
    if file.size > limit:
        raise FileTooLarge(f"File size exceeds maximum of {limit / (1024 * 1024):.0f}MB")

    ext = _extension(file.name)
    content_type = (getattr(file, "content_type", "") or "").lower()
    subtype = content_type.split("/", 1)[1] if content_type.startswith("image/") else ""
    if ext not in ALLOWED_EXTENSIONS or subtype not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileType()
    return file


def order_image_name(original_name: str) -> str:
    ext = _extension(original_name) or "jpg"
    stamp = int(time.time() * 1000)
    return f"custom-order-{stamp}-{random.randint(0, 10**9)}.{ext}"


def save_order_image(order_id, file) -> CustomOrderImage:
    order = get_order(order_id)
    validate_order_image(file)
    image = CustomOrderImage(order=order)
    image.image.save(order_image_name(file.name), file, save=False)
    image.save()
    logger.info("Stored image %s for order %s", image.image.name, order.pk)
    return image
