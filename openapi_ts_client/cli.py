import argparse
import json
import logging
import os
import sys
from typing import Any, Dict

import httpx
import yaml

from openapi_ts_client.config import CONFIG_FILE_NAME, OpenApiConfig
from openapi_ts_client.exceptions import DocumentLoadError, OpenApiClientError
from openapi_ts_client.generator import ApiClientGenerator
from openapi_ts_client.internal.types.models import Project

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = (".yaml", ".yml")


def _parse_document_text(text: str, source: str) -> Dict[str, Any]:
    """Разбор JSON или YAML текста спецификации"""
    try:
        if source.lower().endswith(YAML_EXTENSIONS):
            return yaml.safe_load(text)

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            # Спецификации часто отдаются в YAML без расширения
            return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(source, e) from e


def load_openapi_spec(url: str) -> Dict[str, Any]:
    """Загрузка OpenAPI спецификации по URL или из локального файла"""
    if url.startswith(("http://", "https://")):
        response = httpx.get(url, follow_redirects=True)
        response.raise_for_status()
        return _parse_document_text(response.text, url)

    if not os.path.exists(url):
        raise DocumentLoadError(url, "файл не найден")

    try:
        with open(url, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise DocumentLoadError(url, e) from e

    return _parse_document_text(text, url)


def _generate_client_core(config: OpenApiConfig) -> Project:
    """Ядро генерации клиента - только генерация без сохранения"""
    if not config.url:
        raise ValueError("URL не указан в конфигурации")

    print(f"🚀 Генерация клиента из {config.url}")

    print("📥 Загрузка OpenAPI спецификации...")
    openapi_spec = load_openapi_spec(config.url)

    print("⚙️ Генерация кода...")
    generator = ApiClientGenerator(
        openapi_spec,
        source_url=config.url,
        client_file=os.path.basename(config.output),
        include_example=config.include_example,
    )
    return generator.generate()


def _save_project_files(project: Project, target_path: str):
    """Сохранение файлов проекта"""
    print(f"💾 Сохранение {len(project.files)} файлов...")

    if target_path:
        os.makedirs(target_path, exist_ok=True)

    for code_file in project.files:
        path = os.path.join(target_path, code_file.file_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(str(code_file))
        logger.debug("Записан файл %s", path)

    print("✅ Генерация завершена успешно!")
    print(f"📦 Клиент создан в: {os.path.abspath(target_path or '.')}")


def generate():
    """Команда генерации TypeScript клиента из OpenAPI"""
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript клиента из OpenAPI"
    )
    parser.add_argument("--url", type=str, help="URL или путь к OpenAPI спецификации")
    parser.add_argument("--output", type=str, help="Путь к файлу клиента (.ts)")
    parser.add_argument(
        "--no-example", action="store_true", help="Не генерировать файл с примерами"
    )
    parser.add_argument(
        "--config", type=str, default=CONFIG_FILE_NAME, help="Путь к конфиг файлу"
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Сохранить итоговые настройки в конфиг файл",
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Инициализация конфига
    if args.init_config:
        config = OpenApiConfig().merge_with_args(args)
        config.save_to_file(args.config)
        print(f"✅ Создан конфиг файл {args.config}")
        return

    file_config = OpenApiConfig.from_file(args.config)
    if file_config:
        print(f"📋 Используется конфиг из {args.config}")
        final_config = file_config.merge_with_args(args)
    else:
        final_config = OpenApiConfig().merge_with_args(args)

    if not final_config.url:
        print("❌ Ошибка: Укажите --url или создайте конфиг с --init-config")
        sys.exit(1)

    try:
        project = _generate_client_core(final_config)
        _save_project_files(project, os.path.dirname(final_config.output))
    except (OpenApiClientError, OSError, httpx.HTTPError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)

    if args.save_config:
        final_config.save_to_file(args.config)
        print(f"💾 Конфиг сохранен в {args.config}")


if __name__ == "__main__":
    generate()
