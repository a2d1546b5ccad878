"""
Order image intake: size and type checks, storage naming, upload endpoint.
"""
import shutil
import tempfile
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework.test import APIRequestFactory

from custom_orders.exceptions import FileTooLarge, OrderNotFound, UnsupportedFileType
from custom_orders.services import create_order
from custom_orders.uploads import save_order_image, validate_order_image
from custom_orders.views import OrderImagesView

# 1x1 transparent GIF
GIF_BYTES = (
    b"GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04\x01\x00\x00\x00\x00"
    b",\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
)


def upload(name, content_type, data=GIF_BYTES):
    return SimpleUploadedFile(name, data, content_type=content_type)


class ValidateOrderImageTests(TestCase):
    def test_accepts_allowed_formats(self):
        for name, ctype in (("a.jpg", "image/jpeg"), ("a.JPEG", "image/jpeg"), ("a.png", "image/png"),
                            ("a.gif", "image/gif")):
            self.assertIsNotNone(validate_order_image(upload(name, ctype)))

    def test_extension_and_media_type_must_both_match(self):
        for name, ctype in (("a.pdf", "application/pdf"), ("a.png", "application/pdf"),
                            ("a.exe", "image/png"), ("noext", "image/png"), ("a.webp", "image/webp")):
            with self.assertRaises(UnsupportedFileType, msg=name):
                validate_order_image(upload(name, ctype))

    @override_settings(CUSTOM_ORDER_MAX_IMAGE_BYTES=16)
    def test_size_limit(self):
        with self.assertRaises(FileTooLarge):
            validate_order_image(upload("a.gif", "image/gif"))


class SaveOrderImageTests(TestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.settings_override = override_settings(MEDIA_ROOT=self.media_root)
        self.settings_override.enable()
        self.order = create_order(customer_name="Dilan", estimated_amount=Decimal("250.00"))

    def tearDown(self):
        self.settings_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_stores_under_generated_name(self):
        image = save_order_image(self.order.pk, upload("Ring Sketch.GIF", "image/gif"))
        self.assertRegex(image.image.name, r"^custom_orders/custom-order-\d+-\d+\.gif$")
        self.assertEqual(self.order.images.count(), 1)

    def test_unknown_order(self):
        with self.assertRaises(OrderNotFound):
            save_order_image(999999, upload("a.gif", "image/gif"))

    def test_endpoint(self):
        factory = APIRequestFactory()
        view = OrderImagesView.as_view()
        url = f"/api/v1/custom-orders/{self.order.pk}/images"

        req = factory.post(url, {"image": upload("design.png", "image/png")}, format="multipart")
        resp = view(req, pk=self.order.pk)
        self.assertEqual(resp.status_code, 201)
        self.assertIn("custom-order-", resp.data["image"])

        req = factory.post(url, {"image": upload("design.pdf", "application/pdf")}, format="multipart")
        resp = view(req, pk=self.order.pk)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.order.images.count(), 1)

        resp = view(factory.post(url, {}, format="multipart"), pk=self.order.pk)
        self.assertEqual(resp.status_code, 400)
