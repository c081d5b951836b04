"""
Исключения генератора TypeScript клиентов
"""

from typing import List, Optional, Union


class OpenApiClientError(ValueError):
    """Базовое исключение генератора"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DocumentLoadError(OpenApiClientError):
    """Документ не удалось прочитать или разобрать как JSON/YAML"""

    def __init__(self, source: str, cause: Union[Exception, str, None] = None):
        self.source = source
        self.cause = cause
        message = f"Не удалось загрузить спецификацию из '{source}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class InvalidDocumentError(OpenApiClientError):
    """В документе отсутствуют обязательные поля верхнего уровня"""

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = errors or []
        message = "Некорректная OpenAPI спецификация"
        if self.errors:
            message += ": " + "; ".join(self.errors)
        super().__init__(message)
