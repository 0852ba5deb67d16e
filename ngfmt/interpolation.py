"""
Переписывание интерполяций {{ expr }}.

- ровно один пробел внутри маркеров;
- пайпы: ' | ' между сегментами;
- пробелы вокруг операторов, но только вне строковых литералов.

Повторное применение не меняет результат.
"""

from __future__ import annotations

import re
from typing import List, Optional

from .tokens import INTERPOLATION_CLOSE, INTERPOLATION_OPEN

EMPTY_INTERPOLATION = INTERPOLATION_OPEN + "  " + INTERPOLATION_CLOSE

# Проверяются в этом порядке: сначала трёхсимвольные
THREE_CHAR_OPERATORS = ("===", "!==")
TWO_CHAR_OPERATORS = ("&&", "||", "==", "!=", "<=", ">=")
SINGLE_CHAR_OPERATORS = frozenset("+-*/<>")
# После этих символов одиночный оператор унарный: 'a * -1', 'f(-x)'
_UNARY_CONTEXT = frozenset("+-*/<>=!&|(,:?[")

# Одиночный '|' (пайп), но не половина '||'.
# NB: разбиение не учитывает кавычки, и '|' внутри строкового литерала тоже
# станет разделителем.
_PIPE_RE = re.compile(r"(?<!\|)\|(?!\|)")


def format_interpolation(token: str) -> str:
    """
    Нормализует интерполяцию.

    Args:
        token: Токен вида '{{ ... }}'

    Returns:
        Отформатированная интерполяция; незакрытый токен возвращается как есть
    """
    if not (token.startswith(INTERPOLATION_OPEN) and token.endswith(INTERPOLATION_CLOSE)):
        return token
    if len(token) < len(INTERPOLATION_OPEN) + len(INTERPOLATION_CLOSE):
        return token

    inner = token[len(INTERPOLATION_OPEN):-len(INTERPOLATION_CLOSE)].strip()
    if not inner:
        return EMPTY_INTERPOLATION

    if _PIPE_RE.search(inner):
        inner = " | ".join(part.strip() for part in _PIPE_RE.split(inner))

    inner = space_operators(inner).strip()
    return f"{INTERPOLATION_OPEN} {inner} {INTERPOLATION_CLOSE}"


def _match_compound(content: str, pos: int) -> Optional[str]:
    for op in THREE_CHAR_OPERATORS + TWO_CHAR_OPERATORS:
        if content.startswith(op, pos):
            return op
    return None


def _trim_trailing_spaces(out: List[str]) -> None:
    while out:
        stripped = out[-1].rstrip(" \t")
        if stripped:
            out[-1] = stripped
            return
        out.pop()


def space_operators(content: str) -> str:
    """
    Расставляет пробелы вокруг операторов вне кавычек.

    Кавычки переключаются независимо (одинарная внутри двойной считается обычным
    символом), экранированная кавычка ничего не переключает. Составные
    операторы всегда получают ровно по одному пробелу с каждой стороны;
    одиночные получают их, только если стоят вплотную к обоим соседям
    и не стоят в унарной позиции (например, после другого оператора).
    """
    out: List[str] = []
    in_single = False
    in_double = False
    length = len(content)
    pos = 0

    while pos < length:
        ch = content[pos]
        prev = content[pos - 1] if pos > 0 else ""

        if ch == "'" and not in_double and prev != "\\":
            in_single = not in_single
            out.append(ch)
            pos += 1
            continue
        if ch == '"' and not in_single and prev != "\\":
            in_double = not in_double
            out.append(ch)
            pos += 1
            continue
        if in_single or in_double:
            out.append(ch)
            pos += 1
            continue

        op = _match_compound(content, pos)
        if op:
            _trim_trailing_spaces(out)
            out.append(f" {op} ")
            pos += len(op)
            while pos < length and content[pos] in " \t":
                pos += 1
            continue

        nxt = content[pos + 1] if pos + 1 < length else ""
        if (
            ch in SINGLE_CHAR_OPERATORS
            and prev and nxt
            and not prev.isspace() and not nxt.isspace()
            and prev not in _UNARY_CONTEXT
        ):
            out.append(f" {ch} ")
        else:
            out.append(ch)
        pos += 1

    return "".join(out)


__all__ = ["format_interpolation", "space_operators", "EMPTY_INTERPOLATION"]
