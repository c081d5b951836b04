"""Утилиты для генератора"""

from .formatting import comment_text, indent, indent_block
from .naming import (
    derive_operation_id,
    format_property_key,
    generate_class_name,
    member_access,
    quote_string,
    sanitize_method_name,
)

__all__ = [
    "comment_text",
    "indent",
    "indent_block",
    "derive_operation_id",
    "format_property_key",
    "generate_class_name",
    "member_access",
    "quote_string",
    "sanitize_method_name",
]
