"""Pagination for API v1 list endpoints."""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """``page`` / ``page_size`` query parameters; a month of targets fits in one page."""

    page_size = 25
    page_size_query_param = "page_size"
    max_page_size = 100
