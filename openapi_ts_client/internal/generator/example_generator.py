import json
from typing import List, Optional

from ..types.models import Endpoint
from ..types.schema_resolver import ReferenceResolver, SchemaRegistry
from ..utils.formatting import indent
from ..utils.naming import format_property_key, quote_string, sanitize_method_name
from .templates import templates

EXAMPLE_ENDPOINTS_LIMIT = 3
EXAMPLE_QUERY_LIMIT = 2


class ExampleGenerator:
    """Генератор файла с примерами вызовов клиента"""

    def __init__(
        self,
        endpoints: List[Endpoint],
        class_name: str,
        base_url: str,
        client_module: str = "./generated-client.js",
        resolver: Optional[ReferenceResolver] = None,
    ):
        self.endpoints = endpoints
        self.class_name = class_name
        self.base_url = base_url
        self.client_module = client_module
        self.resolver = resolver or ReferenceResolver(SchemaRegistry())

    def generate(self) -> str:
        """Примеры для первых эндпоинтов, чтобы файл оставался коротким"""
        code = templates.example_header.format(
            class_name=self.class_name,
            client_module=quote_string(self.client_module),
            base_url=quote_string(self.base_url),
        )

        for endpoint in self.endpoints[:EXAMPLE_ENDPOINTS_LIMIT]:
            code += self._generate_endpoint_example(endpoint, level=2)

        return code + templates.example_footer

    def _generate_endpoint_example(self, endpoint: Endpoint, level: int) -> str:
        method_name = sanitize_method_name(endpoint.operation_id)
        title = (endpoint.summary or endpoint.operation_id).splitlines()

        params = []
        if endpoint.path_parameters:
            values = ", ".join(
                f"{format_property_key(p.name)}: "
                + ("123" if self.resolver.is_numeric(p.schema_node) else '"example-value"')
                for p in endpoint.path_parameters
            )
            params.append(f"{{ {values} }}")

        if endpoint.query_parameters:
            values = ", ".join(
                f"{format_property_key(p.name)}: {self._query_value(p)}"
                for p in endpoint.query_parameters[:EXAMPLE_QUERY_LIMIT]
            )
            params.append(f"{{ {values} }}")

        if endpoint.request_body:
            params.append("{ /* your request body */ }")

        # Каждый пример в своем блоке, иначе const result объявится повторно
        lines = [
            "",
            f"// Example: {title[0] if title else endpoint.operation_id}",
            "{",
            f"  const result = await client.{method_name}({', '.join(params)});",
            "",
            "  // Type-safe error handling",
            "  if (result._tag === 'Success') {",
            "    console.log('Success:', result.data);",
            "  } else {",
            "    console.error('API Error:', result.status, result.message);",
            "  }",
            "}",
        ]

        return "".join(
            (indent(level) + line if line else "") + "\n" for line in lines
        )

    def _query_value(self, parameter) -> str:
        if self.resolver.is_numeric(parameter.schema_node):
            return "10"

        enum_value = self.resolver.first_enum_value(parameter.schema_node)
        if enum_value is not None:
            return json.dumps(str(enum_value), ensure_ascii=False)

        return '"value"'
