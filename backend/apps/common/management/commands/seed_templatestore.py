from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.catalog.models import Template, TemplateType
from apps.coupons.models import Coupon, CouponUsage, DiscountType
from apps.orders.models import Order, OrderItem
from apps.users.models import User
from apps.wishlist.models import Wishlist

# (slug, name_ar, name_en, price, discount_price, type)
TEMPLATES = [
    ("smart-notes-record", "سجل الملاحظات الذكي", "Smart Notes Record", "49.99", "39.99", TemplateType.INTERACTIVE),
    ("student-evaluation-template", "نموذج تقييم الطالب", "Student Evaluation Template", "19.99", None, TemplateType.READY),
    ("attendance-record", "سجل الحضور والغياب", "Attendance Record", "34.99", "29.99", TemplateType.INTERACTIVE),
    ("detailed-lesson-plan", "خطة درس تفصيلية", "Detailed Lesson Plan", "24.99", "19.99", TemplateType.READY),
    ("behavioral-tracking", "سجل المتابعة السلوكية", "Behavioral Tracking Record", "44.99", None, TemplateType.INTERACTIVE),
    ("appreciation-certificate", "شهادة شكر وتقدير", "Appreciation Certificate", "9.99", None, TemplateType.READY),
]

# (code, description_ar, description_en, type, value, max_discount, min_order, max_uses, per_user, starts_in_days, expires_in_days)
COUPONS = [
    ("WELCOME10", "خصم 10% للمستخدمين الجدد", "10% discount for new users", DiscountType.PERCENTAGE, "10", "50", "20", 1000, 1, -30, 365),
    ("SAVE20", "خصم 20 ريال مباشر", "20 SAR direct discount", DiscountType.FIXED, "20", None, "50", 500, 2, -7, 90),
    ("HALFPRICE", "خصم 50% لفترة محدودة", "50% off for limited time", DiscountType.PERCENTAGE, "50", "100", "0", 100, 1, 0, 14),
    ("TEACHER25", "خصم خاص للمعلمين 25%", "Special 25% teacher discount", DiscountType.PERCENTAGE, "25", "75", "30", 500, 3, 0, 180),
]

USERS = [
    {
        "username": "teacher",
        "email": "teacher@templatestore.test",
        "first_name": "Sara",
        "last_name": "Ahmed",
        "password": "TeacherPass123!",
    },
    {
        "username": "admin",
        "email": "admin@templatestore.test",
        "first_name": "admin",
        "last_name": "user",
        "password": "AdminPass123!",
        "is_superuser": True,
    },
]


def _decimal(value):
    return Decimal(value) if value is not None else None


class Command(BaseCommand):
    help = "Seed demo templates, coupons and users for the template store."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            CouponUsage.objects.all().delete()
            OrderItem.objects.all().delete()
            Order.objects.all().delete()
            Wishlist.objects.all().delete()
            Coupon.objects.all().delete()
            Template.objects.all().delete()
            User.objects.all().delete()

        self.stdout.write("Seeding templates...")
        for slug, name_ar, name_en, price, discount_price, template_type in TEMPLATES:
            Template.objects.update_or_create(
                slug=slug,
                defaults=dict(
                    name_ar=name_ar,
                    name_en=name_en,
                    price=Decimal(price),
                    discount_price=_decimal(discount_price),
                    type=template_type,
                    is_active=True,
                ),
            )

        self.stdout.write("Seeding coupons...")
        now = timezone.now()
        for (
            code,
            description_ar,
            description_en,
            discount_type,
            value,
            max_discount,
            min_order,
            max_uses,
            per_user,
            starts_in,
            expires_in,
        ) in COUPONS:
            Coupon.objects.update_or_create(
                code=code,
                defaults=dict(
                    description_ar=description_ar,
                    description_en=description_en,
                    discount_type=discount_type,
                    discount_value=Decimal(value),
                    max_discount=_decimal(max_discount),
                    min_order_amount=Decimal(min_order),
                    max_uses=max_uses,
                    max_uses_per_user=per_user,
                    starts_at=now + timedelta(days=starts_in),
                    expires_at=now + timedelta(days=expires_in),
                    is_active=True,
                ),
            )

        self.stdout.write("Seeding users...")
        for payload in USERS:
            attrs = dict(payload)
            raw_password = attrs.pop("password")
            is_superuser = attrs.pop("is_superuser", False)
            defaults = {
                **attrs,
                # Superusers must also be staff
                "is_staff": is_superuser,
                "is_superuser": is_superuser,
            }
            user, created = User.objects.get_or_create(
                username=attrs["username"], defaults=defaults
            )
            if not created:
                for field, value in defaults.items():
                    setattr(user, field, value)
            user.set_password(raw_password)
            user.save()

        self.stdout.write(self.style.SUCCESS("Template store seed completed."))
