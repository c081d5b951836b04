"""
Тесты преобразования схем в типы TypeScript
"""

import pytest

from openapi_ts_client.internal.types import (
    SchemaRegistry,
    TypeSynthesizer,
    parse_schema,
)
from openapi_ts_client.internal.types.models import (
    CombinatorKind,
    CombinatorSchema,
    ReferenceSchema,
    UnknownSchema,
)


def make_synthesizer(schemas=None) -> TypeSynthesizer:
    registry = SchemaRegistry(
        {name: parse_schema(raw) for name, raw in (schemas or {}).items()}
    )
    return TypeSynthesizer(registry)


class TestPrimitives:
    """Примитивные типы"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ({"type": "string"}, "string"),
            ({"type": "number"}, "number"),
            ({"type": "integer"}, "number"),
            ({"type": "boolean"}, "boolean"),
        ],
    )
    def test_primitive_types(self, raw, expected):
        """Числовые типы OpenAPI сводятся к одному number"""
        assert make_synthesizer().synthesize(parse_schema(raw)) == expected

    def test_enum_preserves_order(self):
        """Литералы перечисления идут в порядке объявления"""
        node = parse_schema({"type": "string", "enum": ["b", "a"]})
        assert make_synthesizer().synthesize(node) == '"b" | "a"'

    def test_empty_enum_is_plain_string(self):
        """Пустое перечисление не порождает пустое объединение"""
        node = parse_schema({"type": "string", "enum": []})
        assert make_synthesizer().synthesize(node) == "string"

    def test_enum_with_null(self):
        """null в перечислении выводится как тип null"""
        node = parse_schema({"type": "string", "enum": ["on", None]})
        assert make_synthesizer().synthesize(node) == '"on" | null'

    def test_enum_escapes_quotes(self):
        """Кавычки в значениях перечисления экранируются"""
        node = parse_schema({"type": "string", "enum": ['say "hi"']})
        assert make_synthesizer().synthesize(node) == '"say \\"hi\\""'

    def test_unknown_schema(self):
        """Нераспознанная схема становится unknown"""
        synthesizer = make_synthesizer()

        assert synthesizer.synthesize(parse_schema({})) == "unknown"
        assert synthesizer.synthesize(UnknownSchema(raw="garbage")) == "unknown"


class TestArraysAndObjects:
    """Массивы и объекты"""

    def test_array_of_strings(self):
        """Массив оборачивает тип элемента"""
        node = parse_schema({"type": "array", "items": {"type": "string"}})
        assert make_synthesizer().synthesize(node) == "Array<string>"

    def test_array_without_items(self):
        """Массив без items содержит unknown"""
        node = parse_schema({"type": "array"})
        assert make_synthesizer().synthesize(node) == "Array<unknown>"

    def test_object_without_properties(self):
        """Объект без свойств становится открытым словарем"""
        node = parse_schema({"type": "object"})
        assert make_synthesizer().synthesize(node) == "Record<string, unknown>"

    def test_required_and_optional_properties(self):
        """Необязательные свойства помечаются знаком ?"""
        node = parse_schema(
            {
                "type": "object",
                "properties": {"x": {"type": "string"}, "y": {"type": "number"}},
                "required": ["x"],
            }
        )

        result = make_synthesizer().synthesize(node)

        assert result == "{\n  x: string;\n  y?: number;\n}"

    def test_properties_without_type(self):
        """Схема со свойствами без type считается объектом"""
        node = parse_schema({"properties": {"id": {"type": "integer"}}})
        assert make_synthesizer().synthesize(node) == "{\n  id?: number;\n}"

    def test_non_identifier_keys_are_quoted(self):
        """Ключи, не являющиеся идентификаторами, берутся в кавычки"""
        node = parse_schema(
            {"type": "object", "properties": {"content-type": {"type": "string"}}}
        )

        result = make_synthesizer().synthesize(node)

        assert '"content-type"?: string;' in result


class TestCombinators:
    """oneOf, anyOf, allOf"""

    def test_one_of_is_union(self):
        node = parse_schema({"oneOf": [{"type": "string"}, {"type": "number"}]})
        assert make_synthesizer().synthesize(node) == "string | number"

    def test_any_of_is_union(self):
        node = parse_schema({"anyOf": [{"type": "boolean"}, {"type": "string"}]})
        assert make_synthesizer().synthesize(node) == "boolean | string"

    def test_all_of_is_intersection(self):
        """allOf объединяется через &"""
        synthesizer = make_synthesizer(
            {"Base": {"type": "object", "properties": {"id": {"type": "string"}}}}
        )
        node = parse_schema(
            {
                "allOf": [
                    {"$ref": "#/components/schemas/Base"},
                    {"type": "object", "properties": {"name": {"type": "string"}}},
                ]
            }
        )

        result = synthesizer.synthesize(node)

        assert result == "{\n  id?: string;\n} & {\n  name?: string;\n}"

    def test_empty_combinator(self):
        """Пустой комбинатор дает unknown"""
        node = CombinatorSchema(kind=CombinatorKind.ONE_OF, members=[])
        assert make_synthesizer().synthesize(node) == "unknown"

    def test_nested_union_in_intersection(self):
        """Объединение внутри allOf берется в скобки"""
        node = parse_schema(
            {
                "allOf": [
                    {"oneOf": [{"type": "string"}, {"type": "number"}]},
                    {"type": "boolean"},
                ]
            }
        )

        assert make_synthesizer().synthesize(node) == "(string | number) & boolean"

    def test_enum_member_in_union(self):
        """Перечисление внутри oneOf сохраняет группировку"""
        node = parse_schema(
            {"oneOf": [{"type": "string", "enum": ["a", "b"]}, {"type": "number"}]}
        )

        assert make_synthesizer().synthesize(node) == '("a" | "b") | number'

    def test_single_member_not_wrapped(self):
        node = parse_schema({"anyOf": [{"oneOf": [{"type": "string"}, {"type": "number"}]}]})
        assert make_synthesizer().synthesize(node) == "string | number"

    def test_operators_inside_brackets_not_wrapped(self):
        """| внутри Array<...>, объектов и строк не требует скобок"""
        node = parse_schema(
            {
                "oneOf": [
                    {
                        "type": "array",
                        "items": {"oneOf": [{"type": "string"}, {"type": "number"}]},
                    },
                    {"type": "string", "enum": ["x | y"]},
                ]
            }
        )

        assert make_synthesizer().synthesize(node) == 'Array<string | number> | "x | y"'


class TestIndentation:
    """Отступы вложенных объектных типов"""

    def test_nested_object_is_indented(self):
        node = parse_schema(
            {
                "type": "object",
                "properties": {
                    "outer": {
                        "type": "object",
                        "properties": {
                            "inner": {
                                "type": "object",
                                "properties": {"leaf": {"type": "string"}},
                            }
                        },
                    }
                },
            }
        )

        result = make_synthesizer().synthesize(node)

        assert result == (
            "{\n"
            "  outer?: {\n"
            "    inner?: {\n"
            "      leaf?: string;\n"
            "    };\n"
            "  };\n"
            "}"
        )

    def test_explicit_level(self):
        """level сдвигает свойства и закрывающую скобку"""
        node = parse_schema({"type": "object", "properties": {"id": {"type": "integer"}}})

        assert make_synthesizer().synthesize(node, level=2) == (
            "{\n      id?: number;\n    }"
        )


class TestReferences:
    """Ссылки и циклы"""

    def test_reference_is_inlined(self):
        """Ссылка на известную схему раскрывается"""
        synthesizer = make_synthesizer({"Id": {"type": "integer"}})
        node = ReferenceSchema(ref="#/components/schemas/Id")

        assert synthesizer.synthesize(node) == "number"

    def test_visited_reference_is_bare_name(self):
        """Ссылка на уже посещенное имя выводится голым именем"""
        synthesizer = make_synthesizer({"Id": {"type": "integer"}})
        node = ReferenceSchema(ref="#/components/schemas/Id")

        assert synthesizer.synthesize(node, {"Id"}) == "Id"

    def test_unresolved_reference_is_bare_name(self):
        """Отсутствующая схема не является ошибкой"""
        node = ReferenceSchema(ref="#/components/schemas/Missing")
        assert make_synthesizer().synthesize(node) == "Missing"

    def test_self_reference_terminates(self):
        """Самоссылающаяся схема завершается голым именем в точке цикла"""
        synthesizer = make_synthesizer(
            {
                "Node": {
                    "type": "object",
                    "properties": {
                        "children": {
                            "type": "array",
                            "items": {"$ref": "#/components/schemas/Node"},
                        }
                    },
                }
            }
        )

        result = synthesizer.synthesize(ReferenceSchema(ref="#/components/schemas/Node"))

        assert result == "{\n  children?: Array<Node>;\n}"

    def test_mutual_reference_terminates(self):
        """A -> B -> A: одно раскрытие B, затем голое имя A"""
        synthesizer = make_synthesizer(
            {
                "A": {
                    "type": "object",
                    "properties": {"b": {"$ref": "#/components/schemas/B"}},
                },
                "B": {
                    "type": "object",
                    "properties": {"a": {"$ref": "#/components/schemas/A"}},
                },
            }
        )

        result = synthesizer.synthesize(ReferenceSchema(ref="#/components/schemas/A"))

        assert result == "{\n  b?: {\n    a?: A;\n  };\n}"
        assert result.count("a?:") == 1

    def test_sibling_branches_do_not_share_visited(self):
        """Соседние свойства раскрывают одну и ту же схему независимо"""
        synthesizer = make_synthesizer({"Id": {"type": "integer"}})
        node = parse_schema(
            {
                "type": "object",
                "properties": {
                    "first": {"$ref": "#/components/schemas/Id"},
                    "second": {"$ref": "#/components/schemas/Id"},
                },
            }
        )

        result = synthesizer.synthesize(node)

        assert result == "{\n  first?: number;\n  second?: number;\n}"

    def test_visited_names_not_mutated(self):
        """Переданный набор имен не изменяется"""
        synthesizer = make_synthesizer({"Id": {"type": "integer"}})
        visited = {"Other"}

        synthesizer.synthesize(ReferenceSchema(ref="#/components/schemas/Id"), visited)

        assert visited == {"Other"}

    def test_determinism(self):
        """Повторный вызов дает идентичный результат"""
        synthesizer = make_synthesizer(
            {
                "A": {
                    "type": "object",
                    "properties": {"b": {"$ref": "#/components/schemas/B"}},
                },
                "B": {
                    "type": "object",
                    "properties": {"a": {"$ref": "#/components/schemas/A"}},
                },
            }
        )
        node = ReferenceSchema(ref="#/components/schemas/A")

        assert synthesizer.synthesize(node) == synthesizer.synthesize(node)
