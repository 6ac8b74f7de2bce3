"""
OpenAPI v3 to TypeScript interface generator.

Resolves the path, query, request body and response body types of an
operation into flat, deduplicated TypeScript interfaces and renders them
with jinja2.
"""

from .models import Field, Interface, Notice, ParseResult, PendingRef
from .parser import parse_operation

__version__ = "0.1.0"

__all__ = [
    "Field",
    "Interface",
    "Notice",
    "ParseResult",
    "PendingRef",
    "parse_operation",
]
