"""Offset pagination over PagerDuty list endpoints."""

from .paginator import Paginator, decode_page
from .schemas import APIListObject, ListOptions, ListResult, Page

__all__ = [
    "APIListObject",
    "ListOptions",
    "ListResult",
    "Page",
    "Paginator",
    "decode_page",
]
