"""Утилиты для имен методов, классов и свойств"""

import json
import re

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def sanitize_method_name(name: str) -> str:
    """
    Имя метода клиента из operationId.

    Все символы кроме латиницы и цифр заменяются на "_", ведущая цифра
    экранируется, граница camelCase превращается в "_", результат в нижнем
    регистре. Определена для любой строки, включая пустую.

    Examples:
        >>> sanitize_method_name("getPetById")
        'get_pet_by_id'
        >>> sanitize_method_name("list-pets.v2")
        'list_pets_v2'
        >>> sanitize_method_name("2fa")
        '_2fa'
    """
    name = re.sub(r"[^a-zA-Z0-9]", "_", name)
    name = re.sub(r"^[0-9]", r"_\g<0>", name)
    name = re.sub(r"([a-z])([A-Z])", r"\1_\2", name)
    return name.lower()


def derive_operation_id(method: str, path: str) -> str:
    """
    operationId для операции, у которой он не указан.

    Examples:
        >>> derive_operation_id("GET", "/users/{id}/posts")
        'getUsersIdPosts'
    """
    parts = []
    for part in path.split("/"):
        part = part.replace("{", "").replace("}", "")
        if part:
            parts.append(part[:1].upper() + part[1:])

    return method.lower() + "".join(parts)


def generate_class_name(title: str, suffix: str = "Client") -> str:
    """
    Имя класса клиента из info.title.

    Examples:
        >>> generate_class_name("Pet Store API")
        'PetStoreAPIClient'
        >>> generate_class_name("petstore")
        'PetstoreClient'
    """
    name = re.sub(r"[^a-zA-Z0-9]", "", title)
    name = name[:1].upper() + name[1:]

    # Идентификатор TypeScript не может начинаться с цифры
    if name[:1].isdigit():
        name = "_" + name

    return name + suffix


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))


def format_property_key(name: str) -> str:
    """Ключ свойства объектного типа, в кавычках если это не идентификатор"""
    if is_identifier(name):
        return name
    return json.dumps(name, ensure_ascii=False)


def member_access(target: str, name: str) -> str:
    """Обращение к свойству: params.id или params["x-id"]"""
    if is_identifier(name):
        return f"{target}.{name}"
    return f"{target}[{json.dumps(name, ensure_ascii=False)}]"


def quote_string(value: str) -> str:
    """Строковый литерал TypeScript в одинарных кавычках"""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
