from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'pageSize'
    max_page_size = 100

    def paginate_queryset(self, queryset, request, view=None):
        # A page past the end is an empty page, not a 404
        self.request = request
        self.paginator = self.django_paginator_class(queryset, self.get_page_size(request))
        try:
            self.page_number = max(int(request.query_params.get(self.page_query_param, 1)), 1)
        except (TypeError, ValueError):
            self.page_number = 1
        if self.page_number > self.paginator.num_pages:
            self.page = None
            return []
        self.page = self.paginator.page(self.page_number)
        return list(self.page)

    def get_paginated_response(self, data):
        return Response({
            'data': data,
            'meta': {
                'page': self.page_number,
                'pageSize': self.get_page_size(self.request),
                'total': self.paginator.count,
                'totalPages': self.paginator.num_pages,
            }
        })


def paginate(request, queryset, serializer_class, **serializer_kwargs):
    """Paginate a queryset and wrap it in the {data, meta} envelope."""
    paginator = StandardResultsSetPagination()
    paginated_queryset = paginator.paginate_queryset(queryset, request)
    serializer = serializer_class(paginated_queryset, many=True, **serializer_kwargs)
    return paginator.get_paginated_response(serializer.data)
