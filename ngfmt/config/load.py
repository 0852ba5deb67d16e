"""
Загрузчик конфигурации форматтера.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigLoadError
from .model import FormatterConfig
from .paths import find_config

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> Dict[str, Any]:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigLoadError(path, f"cannot read file: {e}")
    except YAMLError as e:
        raise ConfigLoadError(path, f"invalid YAML: {e}")
    if not isinstance(raw, dict):
        raise ConfigLoadError(path, "YAML must be a mapping")
    return raw


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)


def load_config(path: Optional[Path]) -> FormatterConfig:
    """
    Загружает конфигурацию из файла.

    Args:
        path: Путь к .ngfmt.yaml или None (настройки по умолчанию)

    Returns:
        Провалидированная конфигурация

    Raises:
        ConfigLoadError: При ошибке чтения, синтаксиса или валидации
    """
    if path is None:
        return FormatterConfig()

    raw = _read_yaml_map(path)
    try:
        cfg = FormatterConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(path, _describe(e))

    logger.debug("Loaded config from %s", path)
    return cfg


def load_config_for(start: Path, explicit: Optional[Path] = None) -> Tuple[FormatterConfig, Optional[Path]]:
    """
    Конфигурация для рабочего каталога: явно указанный файл либо
    ближайший .ngfmt.yaml вверх по дереву каталогов.
    """
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigLoadError(explicit, "config file not found")
        return load_config(explicit), explicit

    found = find_config(start)
    return load_config(found), found


__all__ = ["load_config", "load_config_for"]
