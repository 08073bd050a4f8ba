"""
Converter module.

Contains reference resolution and the OpenAPI to IR conversion.
"""

from __future__ import annotations

from .converter import HTTP_METHODS, ModuleBuilder, OpenAPIConverter, convert, operation_fallback_name
from .reference_resolver import ReferenceResolver

__all__ = [
    "HTTP_METHODS",
    "ModuleBuilder",
    "OpenAPIConverter",
    "ReferenceResolver",
    "convert",
    "operation_fallback_name",
]
