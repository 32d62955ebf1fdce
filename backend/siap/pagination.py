# backend/siap/pagination.py
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class SiapPagination(PageNumberPagination):
    """Pagination ?page=&limit= dengan bentuk respons {data, total, page, limit}."""
    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 200

    def get_paginated_response(self, data):
        return Response({
            'data': data,
            'total': self.page.paginator.count,
            'page': self.page.number,
            'limit': self.get_page_size(self.request),
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'required': ['data', 'total', 'page', 'limit'],
            'properties': {
                'data': schema,
                'total': {'type': 'integer'},
                'page': {'type': 'integer'},
                'limit': {'type': 'integer'},
            },
        }
