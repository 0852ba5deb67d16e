"""
Лексические типы шаблона.

Токенизатор классифицирует каждый фрагмент один раз; последующие стадии
работают с видом токена и его производными атрибутами, а не разбирают
строку заново.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Optional

# Ключевые слова блоков управления (@if, @for, ...)
CONTROL_KEYWORDS = (
    "if", "else", "for", "switch", "case", "default",
    "defer", "loading", "error", "placeholder",
)

INTERPOLATION_OPEN = "{{"
INTERPOLATION_CLOSE = "}}"
CONTROL_MARKER = "@"
CONTROL_CLOSE = "@}"

# Имена элементов: буквы, цифры, дефисы (custom elements), двоеточия (svg:rect)
_TAG_NAME_RE = re.compile(r"</?([A-Za-z][\w:.-]*)")
_KEYWORD_RE = re.compile(r"@([a-z]+)")


class TokenKind(enum.Enum):
    """Виды токенов шаблона."""

    TAG = "TAG"                        # <div ...>, </div>, <br/>, <!-- ... -->
    CONTROL_BLOCK = "CONTROL_BLOCK"    # @if (cond) {
    CLOSE_BRACE = "CLOSE_BRACE"        # } или @}
    INTERPOLATION = "INTERPOLATION"    # {{ expr }}
    TEXT = "TEXT"                      # текстовый фрагмент


def tag_name(value: str) -> Optional[str]:
    """Имя тега в нижнем регистре или None, если это не тег элемента."""
    match = _TAG_NAME_RE.match(value.strip())
    return match.group(1).lower() if match else None


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией.

    Attributes:
        kind: Вид токена
        value: Текст токена (после нормализации пробелов)
        position: Смещение начала токена в исходном тексте
    """
    kind: TokenKind
    value: str
    position: int = 0

    @property
    def name(self) -> Optional[str]:
        """Имя элемента для тегов (в нижнем регистре)."""
        if self.kind is not TokenKind.TAG:
            return None
        return tag_name(self.value)

    @property
    def is_declaration(self) -> bool:
        """Комментарий, <!DOCTYPE ...> или <?xml ...?>."""
        return self.kind is TokenKind.TAG and self.value.startswith(("<!", "<?"))

    @property
    def is_closing_tag(self) -> bool:
        return self.kind is TokenKind.TAG and self.value.startswith("</")

    @property
    def is_opening_tag(self) -> bool:
        """Открывающий тег элемента (включая void и самозакрывающиеся)."""
        return (
            self.kind is TokenKind.TAG
            and not self.is_closing_tag
            and not self.is_declaration
            and self.name is not None
        )

    @property
    def keyword(self) -> Optional[str]:
        """Ключевое слово блока управления: 'if', 'for', ..."""
        if self.kind is not TokenKind.CONTROL_BLOCK:
            return None
        match = _KEYWORD_RE.match(self.value)
        return match.group(1) if match else None

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, pos={self.position})"


__all__ = [
    "TokenKind",
    "Token",
    "tag_name",
    "CONTROL_KEYWORDS",
    "INTERPOLATION_OPEN",
    "INTERPOLATION_CLOSE",
    "CONTROL_MARKER",
    "CONTROL_CLOSE",
]
