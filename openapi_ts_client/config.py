"""
Конфигурация для генерации TypeScript клиента
"""

import logging
import os
from typing import Optional
import toml
from dataclasses import dataclass

from .internal.generator.client_generator import DEFAULT_CLIENT_FILE

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "openapi.toml"


@dataclass
class OpenApiConfig:
    """Конфигурация генератора"""

    url: Optional[str] = None
    output: str = DEFAULT_CLIENT_FILE
    include_example: bool = True

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: str = None
    ) -> Optional["OpenApiConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.warning("Не удалось прочитать %s: %s", config_path, e)
            return None

        return cls(
            url=config_data.get("url"),
            output=config_data.get("output", DEFAULT_CLIENT_FILE),
            include_example=bool(config_data.get("include_example", True)),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        config_data = {
            "output": self.output,
            "include_example": self.include_example,
        }
        # toml не умеет сохранять None
        if self.url:
            config_data["url"] = self.url

        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiConfig":
        """Объединение с аргументами командной строки"""
        return OpenApiConfig(
            url=args.url or self.url,
            output=args.output or self.output,
            include_example=self.include_example and not args.no_example,
        )
