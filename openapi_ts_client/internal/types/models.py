from enum import Enum
from typing import Optional, Union, Literal, Any, Dict, List, FrozenSet

from pydantic import BaseModel, ConfigDict


class HttpMethod(str, Enum):
    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


# Порядок важен: эндпоинты одного пути выводятся именно в нем
HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.PATCH,
    HttpMethod.DELETE,
)


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class CombinatorKind(str, Enum):
    ONE_OF = "oneOf"
    ALL_OF = "allOf"
    ANY_OF = "anyOf"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrimitiveSchema(_Node):
    kind: Literal["string", "number", "integer", "boolean"]
    enum_values: Optional[List[Any]] = None
    default_value: Any = None
    format: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_numeric(self) -> bool:
        return self.kind in ("number", "integer")


class ArraySchema(_Node):
    element: "SchemaNode"


class ObjectSchema(_Node):
    properties: Dict[str, "SchemaNode"] = {}
    required_names: FrozenSet[str] = frozenset()
    allow_additional: Union[bool, "SchemaNode"] = True
    description: Optional[str] = None


class ReferenceSchema(_Node):
    # Полный путь ссылки, например "#/components/schemas/Pet"
    ref: str


class CombinatorSchema(_Node):
    kind: CombinatorKind
    members: List["SchemaNode"] = []


class UnknownSchema(_Node):
    """Узел, который не удалось отнести ни к одному варианту"""

    raw: Any = None


SchemaNode = Union[
    PrimitiveSchema,
    ArraySchema,
    ObjectSchema,
    ReferenceSchema,
    CombinatorSchema,
    UnknownSchema,
]

ArraySchema.model_rebuild()
ObjectSchema.model_rebuild()
CombinatorSchema.model_rebuild()


_PRIMITIVE_TYPES = ("string", "number", "integer", "boolean")


def optional_text(value: Any) -> Optional[str]:
    """
    Текстовое поле документа как строка.

    YAML читает `summary: 404` или `description: yes` как число и bool.

    Examples:
        >>> optional_text(2024)
        '2024'
        >>> optional_text(None) is None
        True
    """
    if value is None:
        return None
    return str(value)


def parse_schema(raw: Any) -> SchemaNode:
    """
    Преобразование сырой схемы из документа в типизированный узел.

    Приоритет вариантов: $ref, type, properties без type,
    oneOf, allOf, anyOf. Все остальное становится UnknownSchema.
    """
    if not isinstance(raw, dict):
        return UnknownSchema(raw=raw)

    if isinstance(raw.get("$ref"), str):
        return ReferenceSchema(ref=raw["$ref"])

    schema_type = raw.get("type")

    if schema_type in _PRIMITIVE_TYPES:
        enum_values = raw.get("enum")
        return PrimitiveSchema(
            kind=schema_type,
            enum_values=list(enum_values) if isinstance(enum_values, list) else None,
            default_value=raw.get("default"),
            format=optional_text(raw.get("format")),
            description=optional_text(raw.get("description")),
        )

    if schema_type == "array":
        return ArraySchema(element=parse_schema(raw.get("items")))

    if schema_type == "object" or (schema_type is None and "properties" in raw):
        properties = raw.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        additional = raw.get("additionalProperties", True)
        required = raw.get("required")

        return ObjectSchema(
            properties={
                str(name): parse_schema(value) for name, value in properties.items()
            },
            required_names=frozenset(required if isinstance(required, list) else []),
            allow_additional=(
                additional if isinstance(additional, bool) else parse_schema(additional)
            ),
            description=optional_text(raw.get("description")),
        )

    for kind in CombinatorKind:
        members = raw.get(kind.value)
        if isinstance(members, list):
            return CombinatorSchema(
                kind=kind, members=[parse_schema(member) for member in members]
            )

    return UnknownSchema(raw=raw)


class Parameter(_Node):
    name: str
    location: ParameterLocation
    required: bool = False
    description: Optional[str] = None
    schema_node: Optional[SchemaNode] = None


class RequestBody(_Node):
    required: bool = False
    content: Dict[str, Optional[SchemaNode]] = {}


class Response(_Node):
    description: str = ""
    content: Dict[str, Optional[SchemaNode]] = {}


class Endpoint(_Node):
    method: HttpMethod
    path: str
    operation_id: str
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[Parameter] = []
    request_body: Optional[RequestBody] = None
    responses: Dict[str, Response] = {}
    tags: Optional[List[str]] = None

    @property
    def path_parameters(self) -> List[Parameter]:
        return [p for p in self.parameters if p.location == ParameterLocation.PATH]

    @property
    def query_parameters(self) -> List[Parameter]:
        return [p for p in self.parameters if p.location == ParameterLocation.QUERY]


class OpenApiInfo(BaseModel):
    # YAML читает "version: 1.0" как число
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str
    version: str
    description: Optional[str] = None


class OpenApiServer(BaseModel):
    url: str
    description: Optional[str] = None


class OpenApiComponents(BaseModel):
    schemas: Dict[str, Any] = {}
    parameters: Dict[str, Any] = {}


class OpenApiDocument(BaseModel):
    """Обязательные поля верхнего уровня OpenAPI документа"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    openapi: str
    info: OpenApiInfo
    servers: List[OpenApiServer] = []
    paths: Dict[str, Dict[str, Any]]
    components: Optional[OpenApiComponents] = None


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", "  ")


class CodeFile(BaseModel):
    file_name: str

    code_blocks: list[CodeBlock] = []

    def __str__(self):
        return "".join(
            map(str, sorted(self.code_blocks, key=lambda x: x.order))
        )

    def add_code_block(
        self, code_block: Union["CodeBlock", str], **kwargs
    ) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: Union["CodeFile", str], **kwargs) -> "CodeFile":
        if isinstance(file_name, str):
            file_name = CodeFile(file_name=file_name, **kwargs)

        self.files.append(file_name)
        return file_name

    def get_file(self, file_name: str) -> Optional[CodeFile]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None
