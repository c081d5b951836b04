"""
Главный модуль генератора - чистый интерфейс
"""

from typing import Dict, Any, List

from .internal.generator.client_generator import DEFAULT_CLIENT_FILE, ClientGenerator
from .internal.parser.openapi import OpenApiParser
from .internal.types.models import Endpoint, Project


class ApiClientGenerator:
    """Чистый интерфейс для генерации TypeScript клиентов"""

    def __init__(
        self,
        openapi_spec: Dict[str, Any],
        source_url: str = None,
        client_file: str = DEFAULT_CLIENT_FILE,
        include_example: bool = True,
    ):
        self.parser = OpenApiParser(openapi_spec, source_url)
        self.client_generator = ClientGenerator(
            self.parser, client_file=client_file, include_example=include_example
        )

    @property
    def class_name(self) -> str:
        return self.client_generator.class_name

    @property
    def endpoints(self) -> List[Endpoint]:
        return self.parser.extract_endpoints()

    def generate(self) -> Project:
        """Генерация проекта клиента"""
        return self.client_generator.generate()


def generate_client(
    openapi_spec: Dict[str, Any], source_url: str = None, **kwargs
) -> Project:
    """Создание TypeScript клиента из OpenAPI спецификации"""
    generator = ApiClientGenerator(openapi_spec, source_url, **kwargs)
    return generator.generate()
