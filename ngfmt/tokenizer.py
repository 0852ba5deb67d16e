"""
Лексический анализатор шаблонов с блоками управления и интерполяциями.

Один проход слева направо; в каждой позиции пробуются (по приоритету):

1. Интерполяция {{ ... }}: атомарный токен с учётом вложенных маркеров
2. Блок управления @if/@for/... до ближайшей '{' включительно, либо '@}'
3. Одиночная закрывающая скобка '}'
4. Тег <...> с учётом кавычек в атрибутах (комментарии: до '-->')
5. Всё остальное накапливается как текст

Незакрытые теги и блоки не являются ошибкой: токен просто продолжается
до конца входа.
"""

from __future__ import annotations

import logging
import re
from typing import List

from .tokens import (
    CONTROL_CLOSE,
    CONTROL_KEYWORDS,
    CONTROL_MARKER,
    INTERPOLATION_CLOSE,
    INTERPOLATION_OPEN,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)

# Ключевое слово должно стоять целиком: '@format' не начинает блок '@for'
_CONTROL_START_RE = re.compile(
    r"@(?:" + "|".join(CONTROL_KEYWORDS) + r")(?![\w-])"
)

# Перевод строки внутри тега/заголовка вместе с окружающими пробелами
_LINE_BREAK_RUN_RE = re.compile(r"\s*[\r\n]\s*")

_COMMENT_OPEN = "<!--"
_COMMENT_CLOSE = "-->"


def _join_lines(value: str) -> str:
    """Склеивает многострочный токен в одну строку."""
    return _LINE_BREAK_RUN_RE.sub(" ", value).strip()


class TemplateLexer:
    """
    Лексер для разбиения шаблона на классифицированные токены.

    Экземпляр хранит только состояние одного прохода; повторный вызов
    tokenize() начинает разбор заново.
    """

    def __init__(self, text: str):
        """
        Инициализирует лексер с исходным текстом.

        Args:
            text: Исходный текст шаблона
        """
        self.text = text
        self.length = len(text)
        self.position = 0
        self._tokens: List[Token] = []
        self._buffer: List[str] = []
        self._buffer_start = 0

    def tokenize(self) -> List[Token]:
        """
        Разбивает текст на токены.

        Returns:
            Список непустых токенов в порядке следования в тексте
        """
        self.position = 0
        self._tokens = []
        self._buffer = []

        while self.position < self.length:
            if self.text.startswith(INTERPOLATION_OPEN, self.position):
                self._emit(TokenKind.INTERPOLATION, self._scan_interpolation())
            elif self.text.startswith(CONTROL_CLOSE, self.position):
                self._emit(TokenKind.CLOSE_BRACE, self.position + len(CONTROL_CLOSE))
            elif _CONTROL_START_RE.match(self.text, self.position):
                self._emit(TokenKind.CONTROL_BLOCK, self._scan_control_header())
            elif self.text.startswith(INTERPOLATION_CLOSE, self.position):
                # Бесхозная пара '}}' считается текстом, а не два закрытия блока:
                # вложенные блоки, закрытые слитным '}}', отступ не уменьшают
                self._accumulate(len(INTERPOLATION_CLOSE))
            elif self._at_close_brace():
                self._emit(TokenKind.CLOSE_BRACE, self.position + 1)
            elif self._at_tag_start():
                self._emit(TokenKind.TAG, self._scan_tag())
            else:
                self._accumulate(1)

        self._flush()
        logger.debug("Tokenized %d chars into %d tokens", self.length, len(self._tokens))
        return self._tokens

    # ---- распознавание начала токена ----

    def _at_close_brace(self) -> bool:
        pos = self.position
        if self.text[pos] != "}":
            return False
        return not (pos > 0 and self.text[pos - 1] == CONTROL_MARKER)

    def _at_tag_start(self) -> bool:
        pos = self.position
        if self.text[pos] != "<" or pos + 1 >= self.length:
            return False
        nxt = self.text[pos + 1]
        return nxt.isalpha() or nxt in "/!?"

    # ---- сканирование (возвращают позицию конца токена) ----

    def _scan_interpolation(self) -> int:
        depth = 0
        pos = self.position
        while pos < self.length:
            if self.text.startswith(INTERPOLATION_OPEN, pos):
                depth += 1
                pos += len(INTERPOLATION_OPEN)
            elif self.text.startswith(INTERPOLATION_CLOSE, pos):
                depth -= 1
                pos += len(INTERPOLATION_CLOSE)
                if depth == 0:
                    return pos
            else:
                pos += 1
        return self.length

    def _scan_control_header(self) -> int:
        brace = self.text.find("{", self.position)
        return self.length if brace == -1 else brace + 1

    def _scan_tag(self) -> int:
        start = self.position
        if self.text.startswith(_COMMENT_OPEN, start):
            end = self.text.find(_COMMENT_CLOSE, start + len(_COMMENT_OPEN))
            return self.length if end == -1 else end + len(_COMMENT_CLOSE)

        in_single = False
        in_double = False
        pos = start + 1
        while pos < self.length:
            ch = self.text[pos]
            escaped = self.text[pos - 1] == "\\"
            if ch == "'" and not in_double and not escaped:
                in_single = not in_single
            elif ch == '"' and not in_single and not escaped:
                in_double = not in_double
            elif ch == ">" and not in_single and not in_double:
                return pos + 1
            pos += 1
        return self.length

    # ---- накопление и выдача ----

    def _accumulate(self, count: int) -> None:
        if not self._buffer:
            self._buffer_start = self.position
        self._buffer.append(self.text[self.position:self.position + count])
        self.position += count

    def _flush(self) -> None:
        if not self._buffer:
            return
        content = " ".join("".join(self._buffer).split())
        self._buffer = []
        if content:
            self._tokens.append(Token(TokenKind.TEXT, content, self._buffer_start))

    def _emit(self, kind: TokenKind, end: int) -> None:
        self._flush()
        value = _join_lines(self.text[self.position:end])
        if value:
            self._tokens.append(Token(kind, value, self.position))
        self.position = end


def tokenize(text: str) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Список токенов
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "tokenize"]
