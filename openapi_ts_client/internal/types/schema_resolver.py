import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .models import (
    OpenApiDocument,
    PrimitiveSchema,
    ReferenceSchema,
    SchemaNode,
    parse_schema,
)

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"


class SchemaRegistry:
    """Реестр именованных схем из components/schemas"""

    def __init__(self, schemas: Optional[Dict[str, SchemaNode]] = None):
        # Порядок объявления сохраняется: от него зависит порядок вывода типов
        self._schemas: Dict[str, SchemaNode] = dict(schemas or {})

    @classmethod
    def load(cls, document: OpenApiDocument) -> "SchemaRegistry":
        """Загрузка всех схем документа в порядке объявления"""
        raw_schemas = document.components.schemas if document.components else {}

        registry = cls(
            {str(name): parse_schema(raw) for name, raw in raw_schemas.items()}
        )
        logger.debug("Загружено схем: %d", len(registry))
        return registry

    def lookup(self, name: str) -> Optional[SchemaNode]:
        """Схема по имени или None, если такой нет"""
        return self._schemas.get(name)

    def names(self) -> List[str]:
        return list(self._schemas)

    def items(self) -> Iterator[Tuple[str, SchemaNode]]:
        return iter(list(self._schemas.items()))

    def __contains__(self, name: str) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


class ReferenceResolver:
    """Разрешение $ref ссылок через реестр схем"""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    @staticmethod
    def reference_name(ref: str) -> str:
        """
        Голое имя схемы из пути ссылки.

        Examples:
            >>> ReferenceResolver.reference_name("#/components/schemas/Pet")
            'Pet'
            >>> ReferenceResolver.reference_name("common.yaml#/definitions/Error")
            'Error'
        """
        if ref.startswith(SCHEMA_REF_PREFIX):
            return ref[len(SCHEMA_REF_PREFIX) :]

        return ref.rsplit("/", 1)[-1]

    def resolve(self, node: SchemaNode) -> SchemaNode:
        """
        Конкретная схема, на которую указывает узел.

        Узел без ссылки возвращается как есть. Ссылка на отсутствующую
        схему тоже возвращается без изменений: в выводе она станет голым
        именем типа.
        """
        if not isinstance(node, ReferenceSchema):
            return node

        target = self.registry.lookup(self.reference_name(node.ref))
        if target is None:
            logger.debug("Схема для ссылки %s не найдена", node.ref)
            return node

        return target

    def is_numeric(self, node: Optional[SchemaNode]) -> bool:
        """Разрешается ли узел в number/integer"""
        if node is None:
            return False

        resolved = self.resolve(node)
        return isinstance(resolved, PrimitiveSchema) and resolved.is_numeric

    def first_enum_value(self, node: Optional[SchemaNode]) -> Optional[Any]:
        if node is None:
            return None

        resolved = self.resolve(node)
        if isinstance(resolved, PrimitiveSchema) and resolved.enum_values:
            return resolved.enum_values[0]
        return None
