from django.urls import re_path

from .views import OrderDetailView, OrderListView, OrderPayView

urlpatterns = [
    re_path(r"^/?$", OrderListView.as_view(), name="api-orders-list"),
    re_path(
        r"^/(?P<order_id>[0-9a-fA-F-]{36})/?$",
        OrderDetailView.as_view(),
        name="api-orders-detail",
    ),
    re_path(
        r"^/(?P<order_id>[0-9a-fA-F-]{36})/pay/?$",
        OrderPayView.as_view(),
        name="api-orders-pay",
    ),
]
