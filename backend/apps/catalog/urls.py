from django.urls import re_path

from .views import TemplateDetailView, TemplateListView

urlpatterns = [
    re_path(r"^/?$", TemplateListView.as_view(), name="api-templates-list"),
    re_path(
        r"^/(?P<identifier>[^/]+)/?$",
        TemplateDetailView.as_view(),
        name="api-templates-detail",
    ),
]
