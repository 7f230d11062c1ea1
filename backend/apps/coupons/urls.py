from django.urls import re_path

from .views import CouponValidateView

urlpatterns = [
    re_path(r"^/validate/?$", CouponValidateView.as_view(), name="api-coupons-validate"),
]
