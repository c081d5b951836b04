from .exceptions import DocumentLoadError, InvalidDocumentError, OpenApiClientError
from .generator import ApiClientGenerator, generate_client

__all__ = [
    "ApiClientGenerator",
    "generate_client",
    "OpenApiClientError",
    "DocumentLoadError",
    "InvalidDocumentError",
]
