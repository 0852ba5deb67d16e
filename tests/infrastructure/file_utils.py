"""
Утилиты для создания файлов и директорий в тестах.
"""

from __future__ import annotations

import textwrap
from pathlib import Path


def write(p: Path, text: str) -> Path:
    """
    Записывает текст в файл, создавая родительские директории при необходимости.

    Args:
        p: Путь к файлу
        text: Содержимое для записи

    Returns:
        Путь к созданному файлу
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_template(root: Path, rel: str, body: str) -> Path:
    """Шаблон с dedent-содержимым (ведущий перевод строки убирается)."""
    return write(root / rel, textwrap.dedent(body).lstrip("\n"))


__all__ = ["write", "write_template"]
