from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    page_size = 25
    page_size_query_param = "page_size"
    max_page_size = 250


def paginate(request, queryset, serializer_class, *, paginator: PageNumberPagination | None = None) -> Response:
    """Page a queryset for a custom action, returning { count, next, previous, results }."""
    p = paginator or StandardPagination()
    context = {"request": request}
    page = p.paginate_queryset(queryset, request)
    if page is None:
        return Response(serializer_class(queryset, many=True, context=context).data)
    return p.get_paginated_response(serializer_class(page, many=True, context=context).data)
