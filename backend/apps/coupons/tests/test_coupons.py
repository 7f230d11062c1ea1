from datetime import timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.common.i18n import Messages
from apps.coupons.models import Coupon, DiscountType
from apps.users.models import User


class TestCouponValidate(APITestCase):
    url = "/api/coupons/validate"

    def setUp(self):
        self.user = User.objects.create_user(
            username="teacher", email="teacher@example.com", password="TestPass123"
        )
        Coupon.objects.create(
            code="WELCOME10",
            description_ar="خصم ترحيبي",
            description_en="Welcome discount",
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
        )
        Coupon.objects.create(
            code="SAVE20",
            discount_type=DiscountType.FIXED,
            discount_value=Decimal("20"),
            min_order_amount=Decimal("100"),
        )
        Coupon.objects.create(
            code="EXPIRED",
            discount_type=DiscountType.FIXED,
            discount_value=Decimal("5"),
            expires_at=timezone.now() - timedelta(days=1),
        )

    def test_valid_code_returns_discount(self):
        res = self.client.post(self.url, {"code": "welcome10", "order_total": 150}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["message"], Messages.COUPON_VALID)
        data = res.data["data"]
        self.assertTrue(data["valid"])
        self.assertEqual(data["calculated_discount"], Decimal("15.00"))
        self.assertEqual(data["new_total"], Decimal("135.00"))
        self.assertEqual(data["coupon"]["code"], "WELCOME10")
        self.assertEqual(data["coupon"]["formatted_discount"], "10%")
        self.assertEqual(data["coupon"]["description"], "خصم ترحيبي")

    def test_english_description(self):
        res = self.client.post(
            self.url + "?lang=en", {"code": "WELCOME10", "order_total": 50}, format="json"
        )
        self.assertEqual(res.data["data"]["coupon"]["description"], "Welcome discount")

    def test_unknown_code(self):
        res = self.client.post(self.url, {"code": "NOPE", "order_total": 100}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(res.data["success"])
        self.assertEqual(res.data["message"], Messages.COUPON_NOT_FOUND)
        self.assertEqual(res.data["data"], {"valid": False, "error": "not_found"})

    def test_expired_code(self):
        res = self.client.post(self.url, {"code": "EXPIRED", "order_total": 100}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["message"], Messages.COUPON_EXPIRED)

    def test_minimum_order(self):
        res = self.client.post(self.url, {"code": "SAVE20", "order_total": 60}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["data"]["error"], "min_order_not_met")
        self.assertEqual(res.data["data"]["min_order_amount"], 100.0)

    def test_missing_code_is_validation_error(self):
        res = self.client.post(self.url, {"order_total": 60}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("code", res.data["error"]["details"])


class TestAdminCoupons(APITestCase):
    list_url = "/api/admin/coupons/"

    def setUp(self):
        self.admin = User.objects.create_user(
            username="admin", email="admin@example.com", password="AdminPass123", is_staff=True
        )
        self.teacher = User.objects.create_user(
            username="teacher", email="teacher@example.com", password="TestPass123"
        )

    def detail_url(self, coupon_id):
        return f"/api/admin/coupons/{coupon_id}/"

    def test_requires_staff(self):
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_401_UNAUTHORIZED)
        self.client.force_authenticate(user=self.teacher)
        res = self.client.get(self.list_url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data["error"]["code"], "FORBIDDEN")

    def test_crud(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.post(
            self.list_url,
            {"code": " spring ", "discount_type": "percentage", "discount_value": "25"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["message"], Messages.COUPON_CREATED)
        coupon_id = res.data["data"]["id"]
        self.assertEqual(res.data["data"]["code"], "SPRING")

        res = self.client.get(self.list_url)
        self.assertEqual(res.data["meta"]["total"], 1)

        res = self.client.put(self.detail_url(coupon_id), {"is_active": False}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["data"]["is_active"])
        self.assertEqual(res.data["data"]["discount_value"], Decimal("25.00"))

        res = self.client.get(self.list_url, {"active": "true"})
        self.assertEqual(res.data["meta"]["total"], 0)

        res = self.client.delete(self.detail_url(coupon_id))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Coupon.objects.filter(id=coupon_id).exists())

    def test_percentage_over_100_rejected(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.post(
            self.list_url,
            {"code": "MEGA", "discount_type": "percentage", "discount_value": "120"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)

    def test_duplicate_code_rejected(self):
        Coupon.objects.create(code="SAVE20", discount_type="fixed", discount_value=Decimal("20"))
        self.client.force_authenticate(user=self.admin)
        res = self.client.post(
            self.list_url,
            {"code": "save20", "discount_type": "fixed", "discount_value": "5"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("code", res.data["error"]["details"])

    def test_delete_missing_is_404(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.delete(self.detail_url("00000000-0000-0000-0000-000000000000"))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
