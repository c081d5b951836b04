import logging
from typing import Dict, Any, List, Optional

from pydantic import ValidationError

from ...exceptions import InvalidDocumentError
from ..types.models import (
    HTTP_METHODS,
    Endpoint,
    OpenApiDocument,
    Parameter,
    ParameterLocation,
    RequestBody,
    Response,
    optional_text,
    parse_schema,
)
from ..types.schema_resolver import SchemaRegistry
from ..utils.naming import derive_operation_id

logger = logging.getLogger(__name__)

PARAMETER_REF_PREFIX = "#/components/parameters/"
DEFAULT_BASE_URL = "https://api.example.com"


def validate_document(openapi_dict: Any) -> OpenApiDocument:
    """Проверка обязательных полей верхнего уровня"""
    if not isinstance(openapi_dict, dict):
        raise InvalidDocumentError(["документ должен быть объектом"])

    try:
        return OpenApiDocument.model_validate(openapi_dict)
    except ValidationError as e:
        raise InvalidDocumentError(
            [
                f"{'.'.join(map(str, error['loc']))}: {error['msg']}"
                for error in e.errors()
            ]
        ) from e


class OpenApiParser:
    """Парсер OpenAPI спецификации"""

    def __init__(self, openapi_dict: Dict[str, Any], source_url: str = None):
        self.document = validate_document(openapi_dict)
        self.source_url = source_url
        self.registry = SchemaRegistry.load(self.document)

    @property
    def title(self) -> str:
        return self.document.info.title

    def get_base_url(self) -> str:
        """URL первого сервера или заглушка, если серверы не объявлены"""
        if self.document.servers:
            return self.document.servers[0].url
        return DEFAULT_BASE_URL

    def extract_endpoints(self) -> List[Endpoint]:
        """
        Нормализованный список эндпоинтов.

        Порядок: пути в порядке документа, внутри пути
        get, post, put, patch, delete.
        """
        endpoints = []

        for path, path_spec in self.document.paths.items():
            path_parameters = self._parse_parameters(path_spec.get("parameters"))

            for method in HTTP_METHODS:
                operation = path_spec.get(method.value)
                if not isinstance(operation, dict):
                    continue

                endpoints.append(
                    Endpoint(
                        method=method,
                        path=path,
                        operation_id=(
                            optional_text(operation.get("operationId"))
                            or derive_operation_id(method.value, path)
                        ),
                        summary=optional_text(operation.get("summary")),
                        description=optional_text(operation.get("description")),
                        # Одноименные параметры не схлопываются
                        parameters=path_parameters
                        + self._parse_parameters(operation.get("parameters")),
                        request_body=self._parse_request_body(
                            operation.get("requestBody")
                        ),
                        responses=self._parse_responses(operation.get("responses")),
                        tags=self._parse_tags(operation.get("tags")),
                    )
                )

        logger.debug("Найдено эндпоинтов: %d", len(endpoints))
        return endpoints

    def _parse_parameters(self, raw_parameters: Any) -> List[Parameter]:
        parameters = []

        for raw in raw_parameters or []:
            raw = self._dereference_parameter(raw)
            if raw is None:
                continue

            try:
                location = ParameterLocation(raw.get("in"))
            except ValueError:
                logger.warning(
                    "Параметр %s пропущен: неподдерживаемое расположение %r",
                    raw.get("name"),
                    raw.get("in"),
                )
                continue

            if not raw.get("name"):
                logger.warning("Параметр без имени пропущен")
                continue

            parameters.append(
                Parameter(
                    name=str(raw["name"]),
                    location=location,
                    required=bool(raw.get("required", False)),
                    description=optional_text(raw.get("description")),
                    schema_node=(
                        parse_schema(raw["schema"]) if "schema" in raw else None
                    ),
                )
            )

        return parameters

    @staticmethod
    def _parse_tags(raw_tags: Any) -> Optional[List[str]]:
        if not isinstance(raw_tags, list):
            return None
        return [str(tag) for tag in raw_tags]

    def _dereference_parameter(self, raw: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(raw, dict):
            return None

        ref = raw.get("$ref")
        if ref is None:
            return raw

        components = self.document.components
        target = None
        if isinstance(ref, str) and ref.startswith(PARAMETER_REF_PREFIX) and components:
            target = components.parameters.get(ref[len(PARAMETER_REF_PREFIX) :])

        if not isinstance(target, dict):
            logger.warning("Не удалось разрешить ссылку на параметр %s", ref)
            return None

        return target

    @staticmethod
    def _parse_content(raw_content: Any) -> Dict[str, Any]:
        content = {}
        if not isinstance(raw_content, dict):
            return content

        for media_type, media in raw_content.items():
            schema = media.get("schema") if isinstance(media, dict) else None
            content[media_type] = parse_schema(schema) if schema is not None else None
        return content

    def _parse_request_body(self, raw: Any) -> Optional[RequestBody]:
        if not isinstance(raw, dict):
            return None

        return RequestBody(
            required=bool(raw.get("required", False)),
            content=self._parse_content(raw.get("content")),
        )

    def _parse_responses(self, raw: Any) -> Dict[str, Response]:
        responses = {}

        if not isinstance(raw, dict):
            return responses

        for status_code, response_spec in raw.items():
            if not isinstance(response_spec, dict):
                response_spec = {}

            # YAML отдает коды ответов числами
            responses[str(status_code)] = Response(
                description=optional_text(response_spec.get("description")) or "",
                content=self._parse_content(response_spec.get("content")),
            )

        return responses
