"""
Форматирование диапазона строк документа.

Выбранные строки форматируются как самостоятельный фрагмент и вставляются
обратно с базовым отступом первой непустой строки диапазона.
"""

from __future__ import annotations

import logging
from typing import Tuple

from .errors import RangeError
from .formatter import format_template, normalize_line_endings
from .options import FormattingOptions

logger = logging.getLogger(__name__)


def parse_line_range(value: str) -> Tuple[int, int]:
    """
    Разбирает диапазон вида 'START:END' (номера строк с 1, включительно).

    Raises:
        RangeError: При неверном формате
    """
    if ":" not in value:
        raise RangeError(f"Invalid range '{value}'. Expected 'START:END'")
    start_s, end_s = value.split(":", 1)
    try:
        start, end = int(start_s), int(end_s)
    except ValueError:
        raise RangeError(f"Invalid range '{value}'. Line numbers must be integers")
    return start, end


def format_range(text: str, start_line: int, end_line: int, options: FormattingOptions) -> str:
    """
    Форматирует строки [start_line, end_line] и возвращает весь документ.

    Args:
        text: Полный текст документа
        start_line: Первая строка диапазона (с 1)
        end_line: Последняя строка диапазона (включительно)
        options: Параметры форматирования

    Returns:
        Документ с отформатированным диапазоном (с переводами строк '\\n')

    Raises:
        RangeError: Если диапазон выходит за пределы документа
    """
    lines = normalize_line_endings(text).split("\n")
    if start_line < 1 or end_line < start_line or end_line > len(lines):
        raise RangeError(
            f"Line range {start_line}:{end_line} is outside the document (1:{len(lines)})"
        )

    selected = lines[start_line - 1:end_line]
    chunk = "\n".join(selected)
    if not chunk.strip():
        return "\n".join(lines)

    first = next(line for line in selected if line.strip())
    base = first[:len(first) - len(first.lstrip())]

    formatted = format_template(chunk, options)
    block = [base + line if line else line for line in formatted.split("\n")]
    logger.debug("Formatted lines %d-%d into %d lines", start_line, end_line, len(block))
    return "\n".join(lines[:start_line - 1] + block + lines[end_line:])


__all__ = ["format_range", "parse_line_range"]
