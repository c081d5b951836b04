import json
from typing import AbstractSet, FrozenSet

from ..utils.formatting import indent
from ..utils.naming import format_property_key
from .models import (
    ArraySchema,
    CombinatorKind,
    CombinatorSchema,
    ObjectSchema,
    PrimitiveSchema,
    ReferenceSchema,
    SchemaNode,
)
from .schema_resolver import ReferenceResolver, SchemaRegistry

UNKNOWN_TYPE = "unknown"

_OPENING = "{[(<"
_CLOSING = "}])>"


def has_top_level_operator(expression: str) -> bool:
    """
    Есть ли в выражении | или & вне скобок и строковых литералов.

    Examples:
        >>> has_top_level_operator("string | number")
        True
        >>> has_top_level_operator("Array<string | number>")
        False
        >>> has_top_level_operator('"a | b"')
        False
    """
    depth = 0
    in_string = False
    escaped = False

    for char in expression:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in _OPENING:
            depth += 1
        elif char in _CLOSING:
            depth -= 1
        elif char in "|&" and depth == 0:
            return True

    return False


class TypeSynthesizer:
    """
    Преобразование схем в выражения типов TypeScript.

    Обход рекурсивный, но каждая ссылка на именованную схему раскрывается
    не больше одного раза на пути от корня: имена уже раскрытых схем
    передаются в visited_names, и повторная ссылка выводится голым именем.
    Так завершаются само- и взаимно-рекурсивные схемы.

    level задает отступ закрывающей скобки объектного типа, свойства
    выводятся на уровень глубже.
    """

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry
        self.resolver = ReferenceResolver(registry)

    def synthesize(
        self,
        node: SchemaNode,
        visited_names: AbstractSet[str] = frozenset(),
        level: int = 0,
    ) -> str:
        visited_names = frozenset(visited_names)

        if isinstance(node, ReferenceSchema):
            return self._synthesize_reference(node, visited_names, level)

        if isinstance(node, PrimitiveSchema):
            return self._synthesize_primitive(node)

        if isinstance(node, ArraySchema):
            # Массив не является границей ссылки, набор не копируется
            return f"Array<{self.synthesize(node.element, visited_names, level)}>"

        if isinstance(node, ObjectSchema):
            return self._synthesize_object(node, visited_names, level)

        if isinstance(node, CombinatorSchema):
            return self._synthesize_combinator(node, visited_names, level)

        return UNKNOWN_TYPE

    def _synthesize_reference(
        self, node: ReferenceSchema, visited_names: FrozenSet[str], level: int
    ) -> str:
        name = self.resolver.reference_name(node.ref)

        if name in visited_names:
            return name

        resolved = self.resolver.resolve(node)
        if resolved is node:
            # Схемы нет в реестре, считаем что тип объявлен где-то еще
            return name

        return self.synthesize(resolved, visited_names | {name}, level)

    @staticmethod
    def _synthesize_primitive(node: PrimitiveSchema) -> str:
        if node.kind == "string":
            if node.enum_values:
                return " | ".join(
                    "null" if value is None else json.dumps(str(value), ensure_ascii=False)
                    for value in node.enum_values
                )
            return "string"

        if node.is_numeric:
            return "number"

        return "boolean"

    def _synthesize_object(
        self, node: ObjectSchema, visited_names: FrozenSet[str], level: int
    ) -> str:
        if not node.properties:
            return "Record<string, unknown>"

        lines = []
        for name, schema in node.properties.items():
            optional = "" if name in node.required_names else "?"
            lines.append(
                f"{indent(level + 1)}{format_property_key(name)}{optional}: "
                f"{self.synthesize(schema, visited_names, level + 1)};"
            )

        return "{\n" + "\n".join(lines) + "\n" + indent(level) + "}"

    def _synthesize_combinator(
        self, node: CombinatorSchema, visited_names: FrozenSet[str], level: int
    ) -> str:
        if not node.members:
            return UNKNOWN_TYPE

        members = [
            self.synthesize(member, visited_names, level) for member in node.members
        ]
        if len(members) == 1:
            return members[0]

        # Вложенное объединение или пересечение сохраняет свою группировку
        operator = " & " if node.kind == CombinatorKind.ALL_OF else " | "
        return operator.join(
            f"({member})" if has_top_level_operator(member) else member
            for member in members
        )
