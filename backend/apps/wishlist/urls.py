from django.urls import re_path

from .views import (
    WishlistCheckView,
    WishlistIdsView,
    WishlistItemView,
    WishlistToggleView,
    WishlistView,
)

urlpatterns = [
    re_path(r"^/?$", WishlistView.as_view(), name="api-wishlist"),
    re_path(r"^/ids/?$", WishlistIdsView.as_view(), name="api-wishlist-ids"),
    re_path(
        r"^/toggle/(?P<template_id>[^/]+)/?$",
        WishlistToggleView.as_view(),
        name="api-wishlist-toggle",
    ),
    re_path(
        r"^/check/(?P<template_id>[^/]+)/?$",
        WishlistCheckView.as_view(),
        name="api-wishlist-check",
    ),
    re_path(
        r"^/(?P<template_id>[0-9a-fA-F-]{36})/?$",
        WishlistItemView.as_view(),
        name="api-wishlist-item",
    ),
]
