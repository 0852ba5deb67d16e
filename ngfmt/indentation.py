"""
Определение стиля отступов по содержимому документа.

Не входит в ядро форматтера: результат передаётся в FormattingOptions
как готовое значение и может быть заменён настройками пользователя.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional

REASONABLE_INDENT_SIZES = (2, 3, 4, 6, 8)
MAX_LINES_TO_ANALYZE = 1000
DEFAULT_INDENT_SIZE = 4

_LEADING_WS_RE = re.compile(r"^(\s+)")


@dataclass(frozen=True)
class IndentationOptions:
    indent_size: int
    use_spaces: bool


@dataclass(frozen=True)
class IndentationAnalysis:
    """
    Статистика отступов.

    Attributes:
        indent_size: Наиболее вероятный размер отступа
        use_spaces: Пробелы (True) или табы (False)
        total_indents: Число строк с отступом
    """
    indent_size: int
    use_spaces: bool
    total_indents: int


def _determine_indent_size(space_sizes: List[int], use_spaces: bool) -> int:
    if not use_spaces or not space_sizes:
        return DEFAULT_INDENT_SIZE

    counts = Counter(space_sizes)
    best_size = DEFAULT_INDENT_SIZE
    max_count = 0
    for size in REASONABLE_INDENT_SIZES:
        if counts[size] > max_count:
            max_count = counts[size]
            best_size = size
    return best_size


def analyze_indentation(lines: Iterable[str]) -> IndentationAnalysis:
    """
    Подсчитывает строки с отступом табами и пробелами.

    Анализируются первые MAX_LINES_TO_ANALYZE непустых строк. Строка, в
    отступе которой есть таб, считается табовой.

    Args:
        lines: Строки документа

    Returns:
        Результат анализа
    """
    space_indents = 0
    tab_indents = 0
    space_sizes: List[int] = []
    analyzed = 0

    for line in lines:
        if not line.strip():
            continue
        analyzed += 1
        if analyzed > MAX_LINES_TO_ANALYZE:
            break

        match = _LEADING_WS_RE.match(line)
        if not match:
            continue
        indent = match.group(1)
        if "\t" in indent:
            tab_indents += 1
        elif " " in indent:
            space_indents += 1
            space_sizes.append(len(indent))

    use_spaces = space_indents >= tab_indents
    return IndentationAnalysis(
        indent_size=_determine_indent_size(space_sizes, use_spaces),
        use_spaces=use_spaces,
        total_indents=space_indents + tab_indents,
    )


def detect_indentation(text: str) -> Optional[IndentationOptions]:
    """Стиль отступов документа или None, если строк с отступом нет."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    analysis = analyze_indentation(lines)
    if analysis.total_indents == 0:
        return None
    return IndentationOptions(indent_size=analysis.indent_size, use_spaces=analysis.use_spaces)


def resolve_indentation(
    text: str,
    indent_size: int,
    use_spaces: bool,
    *,
    detect: bool = True,
) -> IndentationOptions:
    """
    Итоговые параметры отступа: настроенные значения, уточнённые по
    содержимому документа, если detect=True и отступы в нём есть.
    """
    if detect:
        detected = detect_indentation(text)
        if detected is not None:
            return detected
    return IndentationOptions(indent_size=indent_size, use_spaces=use_spaces)


__all__ = [
    "IndentationOptions",
    "IndentationAnalysis",
    "analyze_indentation",
    "detect_indentation",
    "resolve_indentation",
    "REASONABLE_INDENT_SIZES",
    "MAX_LINES_TO_ANALYZE",
]
