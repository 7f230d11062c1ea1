from django.urls import path, include

# Prefixes carry no trailing slash; each app's patterns accept an optional one
# so both ``/api/orders`` and ``/api/orders/`` resolve.
urlpatterns = [
    path("templates", include("apps.catalog.urls")),
    path("coupons", include("apps.coupons.urls")),
    path("admin/coupons", include("apps.coupons.admin_urls")),
    path("wishlist", include("apps.wishlist.urls")),
    path("orders", include("apps.orders.urls")),
    path("auth/", include("apps.auth.urls")),
]
