"""Отступы и комментарии в генерируемом TypeScript коде"""

INDENT = "  "


def indent(level: int) -> str:
    return INDENT * level


def indent_block(text: str, level: int) -> str:
    """
    Сдвиг каждой непустой строки блока на level отступов.

    Examples:
        >>> indent_block("a {\\n  b;\\n}\\n", 1)
        '  a {\\n    b;\\n  }\\n'
    """
    prefix = indent(level)
    return "".join(
        prefix + line if line.strip() else line
        for line in text.splitlines(keepends=True)
    )


def comment_text(text: str) -> str:
    """Текст, безопасный для вставки в /** ... */"""
    return text.replace("*/", "*\\/")
