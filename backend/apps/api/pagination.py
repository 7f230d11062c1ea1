from rest_framework.pagination import PageNumberPagination

from apps.api.utils import success_response


class EnvelopePagination(PageNumberPagination):
    """Page-number pagination rendered into the ``success/data/meta`` envelope."""

    page_size = 10
    # Clients override the page size with ``?limit=`` (``per_page`` also accepted)
    page_size_query_param = 'limit'
    max_page_size = 100

    def get_page_size(self, request):
        if 'per_page' in request.query_params and self.page_size_query_param not in request.query_params:
            try:
                value = int(request.query_params['per_page'])
            except (TypeError, ValueError):
                return self.page_size
            if value > 0:
                return min(value, self.max_page_size)
        return super().get_page_size(request)

    def get_paginated_response(self, data):
        return success_response(
            data,
            extra={
                'meta': {
                    'current_page': self.page.number,
                    'last_page': self.page.paginator.num_pages,
                    'per_page': self.page.paginator.per_page,
                    'total': self.page.paginator.count,
                }
            },
        )
