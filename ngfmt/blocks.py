"""
Анализ блоков: предикаты для учёта глубины отступа.

Все функции чистые и работают с одним токеном. Решение о схлопывании
элементов в одну строку принимается отдельно (ngfmt.inline) по своему
набору имён.
"""

from __future__ import annotations

import re

from .tokens import CONTROL_CLOSE, CONTROL_KEYWORDS, INTERPOLATION_CLOSE, INTERPOLATION_OPEN, Token, TokenKind

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img",
    "input", "link", "meta", "param", "source", "track", "wbr",
})

# @keyword (необязательное выражение) {
_CONTROL_HEADER_RE = re.compile(
    r"@(?:" + "|".join(CONTROL_KEYWORDS) + r")\s*(\([^)]*\))?\s*\{"
)


def is_interpolation_token(token: Token) -> bool:
    """Токен содержит и открывающий, и закрывающий маркер интерполяции."""
    return INTERPOLATION_OPEN in token.value and INTERPOLATION_CLOSE in token.value


def is_self_closing_tag(token: Token) -> bool:
    """Тег оканчивается на '/>' или относится к void-элементам HTML."""
    if token.kind is not TokenKind.TAG:
        return False
    if token.value.rstrip().endswith("/>"):
        return True
    return token.name in VOID_ELEMENTS


def is_opening_block(token: Token) -> bool:
    """
    Проверяет, открывает ли токен новый уровень вложенности.

    Args:
        token: Токен для проверки

    Returns:
        True для заголовков блоков управления, строк на '{'
        и открывающих тегов элементов (кроме самозакрывающихся)
    """
    if token.kind in (TokenKind.INTERPOLATION, TokenKind.CLOSE_BRACE) or is_interpolation_token(token):
        return False

    if token.kind is TokenKind.CONTROL_BLOCK:
        # Заголовок без '{' (оборван концом файла) уровень не открывает
        return token.keyword is not None and token.value.rstrip().endswith("{")

    if _CONTROL_HEADER_RE.search(token.value):
        return True

    trimmed = token.value.strip()
    if trimmed.endswith("{") and CONTROL_CLOSE not in trimmed:
        return True

    return token.is_opening_tag and not is_self_closing_tag(token)


def is_closing_block(token: Token) -> bool:
    """Закрытие блока управления ('}' или '@}') или закрывающий тег."""
    if is_interpolation_token(token):
        return False
    trimmed = token.value.strip()
    if trimmed in (CONTROL_CLOSE, "}"):
        return True
    return trimmed.startswith("</") and trimmed.endswith(">")


__all__ = [
    "VOID_ELEMENTS",
    "is_opening_block",
    "is_closing_block",
    "is_self_closing_tag",
    "is_interpolation_token",
]
