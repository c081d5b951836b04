import json
import logging
import re
from typing import Dict, List, Optional

from ..parser.openapi import OpenApiParser
from ..types.models import (
    CodeBlock,
    Endpoint,
    Parameter,
    Project,
    RequestBody,
    Response,
)
from ..types.type_synthesizer import UNKNOWN_TYPE, TypeSynthesizer
from ..utils.formatting import comment_text, indent, indent_block
from ..utils.naming import (
    format_property_key,
    generate_class_name,
    member_access,
    quote_string,
    sanitize_method_name,
)
from .example_generator import ExampleGenerator
from .templates import templates

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_FILE = "generated-client.ts"
JSON_MEDIA_TYPE = "application/json"

# Порядок проверки успешных статусов, побеждает первый найденный
SUCCESS_STATUSES = ("200", "201", "204")
ERROR_STATUS_THRESHOLD = 400

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1000


def example_file_name(client_file: str) -> str:
    """
    Имя файла с примерами рядом с клиентом.

    Examples:
        >>> example_file_name("petstore.ts")
        'petstore-example.ts'
    """
    if client_file.endswith(".ts"):
        return client_file[: -len(".ts")] + "-example.ts"
    return client_file + "-example.ts"


def client_module_path(client_file: str) -> str:
    """Путь импорта клиента из файла примеров: ./petstore.js"""
    if client_file.endswith(".ts"):
        client_file = client_file[: -len(".ts")] + ".js"
    return "./" + client_file


class ClientGenerator:
    """Генератор TypeScript клиента из OpenAPI"""

    def __init__(
        self,
        parser: OpenApiParser,
        client_file: str = DEFAULT_CLIENT_FILE,
        include_example: bool = True,
    ):
        self.parser = parser
        self.client_file = client_file
        self.include_example = include_example
        self.synthesizer = TypeSynthesizer(parser.registry)

        # Все схемы реестра объявляются в файле как type alias,
        # поэтому в сигнатурах методов на них можно ссылаться по имени
        self.declared_names = frozenset(parser.registry.names())

    @property
    def class_name(self) -> str:
        return generate_class_name(self.parser.title)

    def generate(self) -> Project:
        """Основная генерация"""
        endpoints = self.parser.extract_endpoints()
        project = Project(name=self.class_name)

        client = project.add_file(self.client_file)
        client.add_code_block(CodeBlock(code=self._generate_header(), order=0))
        client.add_code_block(CodeBlock(code=self._generate_types(), order=1))
        client.add_code_block(
            CodeBlock(code=self._generate_client_class(endpoints, level=0), order=2)
        )
        client.add_code_block(CodeBlock(code=self._generate_exports(), order=3))

        if self.include_example:
            example = ExampleGenerator(
                endpoints,
                self.class_name,
                self.parser.get_base_url(),
                client_module=client_module_path(self.client_file),
                resolver=self.synthesizer.resolver,
            )
            project.add_file(example_file_name(self.client_file)).add_code_block(
                CodeBlock(code=example.generate())
            )

        logger.info(
            "Сгенерирован клиент %s: %d эндпоинтов, %d типов",
            self.class_name,
            len(endpoints),
            len(self.declared_names),
        )
        return project

    def _generate_header(self) -> str:
        source = ""
        if self.parser.source_url:
            source = f"\n * Source: {comment_text(self.parser.source_url)}"

        return templates.file_header.format(source=source) + templates.result_types

    def _generate_types(self) -> str:
        """Один type alias на каждую схему реестра в порядке объявления"""
        code = "// Type definitions\n\n"

        for name, schema in self.parser.registry.items():
            type_expression = self.synthesizer.synthesize(schema, {name})
            code += f"export type {name} = {type_expression};\n\n"

        return code

    def _generate_client_class(self, endpoints: List[Endpoint], level: int) -> str:
        body_level = level + 1

        code = indent(level) + f"export class {self.class_name} {{\n"
        code += self._generate_fields(body_level)

        for scaffold in (
            templates.constructor,
            templates.auth_methods,
            templates.interceptor_methods,
            templates.retry_methods,
            templates.internal_fetch,
        ):
            code += indent_block(scaffold, body_level)

        method_names = set()
        for endpoint in endpoints:
            method_name = sanitize_method_name(endpoint.operation_id)
            if method_name in method_names:
                logger.warning(
                    "Метод %s объявлен повторно (%s %s)",
                    method_name,
                    endpoint.method.value.upper(),
                    endpoint.path,
                )
            method_names.add(method_name)

            code += self._generate_endpoint_method(endpoint, body_level)

        code += indent(level) + "}\n\n"
        return code

    def _generate_fields(self, level: int) -> str:
        fields = [
            f"private baseUrl: string = {json.dumps(self.parser.get_base_url())};",
            "private apiKey?: string;",
            "private bearerToken?: string;",
            "private requestInterceptors: RequestInterceptor[] = [];",
            "private responseInterceptors: ResponseInterceptor[] = [];",
            f"private maxRetries: number = {DEFAULT_MAX_RETRIES};",
            f"private retryDelay: number = {DEFAULT_RETRY_DELAY};",
        ]
        return "".join(indent(level) + field + "\n" for field in fields) + "\n"

    def _generate_exports(self) -> str:
        return f"export default {self.class_name};\n"

    def _generate_endpoint_method(self, endpoint: Endpoint, level: int) -> str:
        method_name = sanitize_method_name(endpoint.operation_id)
        path_params = endpoint.path_parameters
        query_params = endpoint.query_parameters

        body_type = (
            self._request_body_type(endpoint.request_body)
            if endpoint.request_body
            else None
        )
        response_type = self._response_type(endpoint.responses)
        error_type = self._error_type(endpoint.responses)

        result_type = (
            f"ApiResult<{response_type}, {error_type}>"
            if error_type
            else f"ApiResult<{response_type}>"
        )

        code = self._generate_jsdoc(
            endpoint, method_name, path_params, query_params, body_type, level
        )

        signature = self._signature_parameters(
            endpoint, path_params, query_params, body_type
        )
        if signature:
            code += indent(level) + f"async {method_name}(\n"
            code += ",\n".join(indent(level + 1) + param for param in signature)
            code += "\n" + indent(level) + f"): Promise<{result_type}> {{\n"
        else:
            code += indent(level) + f"async {method_name}(): Promise<{result_type}> {{\n"

        code += self._generate_url_construction(endpoint.path, path_params, level + 1)
        code += self._generate_fetch_call(
            endpoint, query_params, body_type is not None, response_type, level + 1
        )

        code += indent(level) + "}\n\n"
        return code

    def _signature_parameters(
        self,
        endpoint: Endpoint,
        path_params: List[Parameter],
        query_params: List[Parameter],
        body_type: Optional[str],
    ) -> List[str]:
        """Параметры метода: path, query, body - строго в этом порядке"""
        body_required = bool(endpoint.request_body and endpoint.request_body.required)
        params = []

        if path_params:
            params.append(f"params: {self._path_params_type(path_params)}")

        if query_params:
            query_type = self._query_params_type(query_params)
            if any(p.required for p in query_params):
                params.append(f"query: {query_type}")
            elif body_required:
                # Необязательный параметр не может стоять перед обязательным
                params.append(f"query: {query_type} = {{}}")
            else:
                params.append(f"query?: {query_type}")

        if body_type is not None:
            params.append(f"body{'' if body_required else '?'}: {body_type}")

        return params

    def _parameter_type(self, parameter: Parameter) -> str:
        if parameter.schema_node is None:
            return "string"
        return self.synthesizer.synthesize(parameter.schema_node, self.declared_names)

    def _path_params_type(self, params: List[Parameter]) -> str:
        props = "; ".join(
            f"{format_property_key(p.name)}: {self._parameter_type(p)}" for p in params
        )
        return f"{{ {props} }}"

    def _query_params_type(self, params: List[Parameter]) -> str:
        props = "; ".join(
            f"{format_property_key(p.name)}{'' if p.required else '?'}: "
            f"{self._parameter_type(p)}"
            for p in params
        )
        return f"{{ {props} }}"

    def _request_body_type(self, request_body: RequestBody) -> str:
        schema = request_body.content.get(JSON_MEDIA_TYPE)
        if schema is None:
            return UNKNOWN_TYPE
        return self.synthesizer.synthesize(schema, self.declared_names)

    def _response_type(self, responses: Dict[str, Response]) -> str:
        """Тип успешного ответа: 200, затем 201, затем 204"""
        for status_code in SUCCESS_STATUSES:
            if status_code not in responses:
                continue

            schema = responses[status_code].content.get(JSON_MEDIA_TYPE)
            if schema is None:
                return UNKNOWN_TYPE
            return self.synthesizer.synthesize(schema, self.declared_names)

        return UNKNOWN_TYPE

    @staticmethod
    def _error_type(responses: Dict[str, Response]) -> Optional[str]:
        """Объединение кодов ответов >= 400 или None, если их нет"""
        statuses = []
        for status_code in responses:
            if not status_code.isdigit():
                logger.debug("Код ответа %s пропущен", status_code)
                continue

            if int(status_code) >= ERROR_STATUS_THRESHOLD:
                statuses.append(str(int(status_code)))

        if not statuses:
            return None
        return " | ".join(statuses)

    def _generate_jsdoc(
        self,
        endpoint: Endpoint,
        method_name: str,
        path_params: List[Parameter],
        query_params: List[Parameter],
        body_type: Optional[str],
        level: int,
    ) -> str:
        lines = ["/**"]
        summary = endpoint.summary or endpoint.operation_id
        lines.extend(f" * {line}".rstrip() for line in comment_text(summary).splitlines())

        if endpoint.description:
            lines.append(" *")
            lines.extend(
                f" * {line}".rstrip()
                for line in comment_text(endpoint.description).splitlines()
            )
        lines.append(" *")

        if path_params:
            lines.append(" * @param params - Path parameters")
            for p in path_params:
                description = comment_text(p.description or p.name)
                lines.append(f" * @param params.{p.name} - {description}")

        if query_params:
            lines.append(" * @param query - Query parameters")
            for p in query_params:
                description = comment_text(p.description or p.name)
                requirement = "(required)" if p.required else "(optional)"
                lines.append(f" * @param query.{p.name} - {description} {requirement}")

        if body_type is not None:
            lines.append(" * @param body - Request body")

        lines.append(
            " * @returns Promise resolving to API result with type-safe success/error handling"
        )
        lines.append(" *")
        lines.append(" * @example")
        lines.append(" * ```typescript")
        lines.extend(
            f" * {line}".rstrip()
            for line in self._example_call(
                method_name, path_params, query_params, body_type
            ).splitlines()
        )
        lines.append(" * ```")
        lines.append(" */")

        return "".join(indent(level) + line + "\n" for line in lines)

    def _example_call(
        self,
        method_name: str,
        path_params: List[Parameter],
        query_params: List[Parameter],
        body_type: Optional[str],
    ) -> str:
        args = []

        if path_params:
            values = ", ".join(
                f"{format_property_key(p.name)}: {self._example_value(p, '123')}"
                for p in path_params
            )
            args.append(f"{{ {values} }}")

        if query_params:
            values = ", ".join(
                f"{format_property_key(p.name)}: {self._example_value(p, '10')}"
                for p in query_params[:2]
            )
            args.append(f"{{ {values} }}")

        if body_type is not None:
            args.append("{}")

        return (
            f"const result = await client.{method_name}({', '.join(args)});\n"
            "if (result._tag === 'Success') {\n"
            "  console.log(result.data);\n"
            "} else {\n"
            "  console.error('Error:', result.status, result.message);\n"
            "}"
        )

    def _example_value(self, parameter: Parameter, numeric_value: str) -> str:
        if self.synthesizer.resolver.is_numeric(parameter.schema_node):
            return numeric_value
        return '"value"'

    @staticmethod
    def _generate_url_construction(
        path: str, path_params: List[Parameter], level: int
    ) -> str:
        declared = {p.name for p in path_params}

        def substitute(match: "re.Match") -> str:
            name = match.group(1)
            if name not in declared:
                return match.group(0)
            return (
                "${encodeURIComponent(String("
                + member_access("params", name)
                + "))}"
            )

        template_path = re.sub(r"\{([^{}]+)\}", substitute, path.replace("`", "\\`"))
        return indent(level) + f"const url = `${{this.baseUrl}}{template_path}`;\n"

    def _generate_fetch_call(
        self,
        endpoint: Endpoint,
        query_params: List[Parameter],
        has_body: bool,
        response_type: str,
        level: int,
    ) -> str:
        code = ""

        if query_params:
            code += indent(level) + "const searchParams = new URLSearchParams();\n"
            code += indent(level) + "if (query) {\n"
            for p in query_params:
                access = member_access("query", p.name)
                code += (
                    indent(level + 1)
                    + f"if ({access} !== undefined) "
                    + f"searchParams.set({quote_string(p.name)}, String({access}));\n"
                )
            code += indent(level) + "}\n"
            code += indent(level) + "const queryString = searchParams.toString();\n"
            code += (
                indent(level)
                + "const finalUrl = queryString ? `${url}?${queryString}` : url;\n\n"
            )
        else:
            code += indent(level) + "const finalUrl = url;\n\n"

        code += indent(level) + "const options: RequestInit = {\n"
        code += indent(level + 1) + f"method: '{endpoint.method.value.upper()}',\n"
        if has_body:
            if endpoint.request_body.required:
                code += indent(level + 1) + "body: JSON.stringify(body),\n"
            else:
                code += (
                    indent(level + 1)
                    + "body: body !== undefined ? JSON.stringify(body) : undefined,\n"
                )
        code += indent(level) + "};\n\n"

        code += indent_block(
            templates.result_wrapping.replace("{response_type}", response_type), level
        )
        return code
