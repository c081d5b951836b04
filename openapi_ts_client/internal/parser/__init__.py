from .openapi import OpenApiParser, validate_document

__all__ = ["OpenApiParser", "validate_document"]
