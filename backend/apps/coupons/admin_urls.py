from django.urls import re_path

from .views import AdminCouponDetailView, AdminCouponListView

urlpatterns = [
    re_path(r"^/?$", AdminCouponListView.as_view(), name="api-admin-coupons-list"),
    re_path(
        r"^/(?P<coupon_id>[0-9a-fA-F-]{36})/?$",
        AdminCouponDetailView.as_view(),
        name="api-admin-coupons-detail",
    ),
]
