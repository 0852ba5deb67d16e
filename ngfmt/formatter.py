"""
Форматтер шаблонов: раскладка потока токенов по строкам с отступами.

Состояние (глубина, накопленные строки) живёт только в пределах одного
вызова format_template(). Перед поштучным выводом токенов для каждого
открывающего тега пробуются две попытки склейки в одну строку:

- по содержимому: только текст и интерполяции до закрывающего тега;
- «плотная»: любые токены до парного закрывающего тега в пределах окна.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple, Union

from .blocks import is_closing_block, is_opening_block, is_self_closing_tag
from .errors import OptionsError
from .inline import INLINE_ELEMENTS, SourceIndex, SourceMatch, flatten_element, should_keep_inline
from .interpolation import format_interpolation
from .options import FormattingOptions
from .tokenizer import tokenize
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Окна просмотра вперёд ограничены, чтобы глубокая вложенность не приводила
# к квадратичному перебору. Окно считается от самого открывающего тега:
# закрывающий должен стоять не дальше чем на 7 (19) токенов после него.
TIGHT_MERGE_LOOKAHEAD = 8
CONTENT_MERGE_LOOKAHEAD = 20


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass
class FormattingContext:
    """
    Состояние раскладки.

    Attributes:
        indent_unit: Строка одного уровня отступа
        depth: Текущая глубина (не опускается ниже нуля)
        lines: Накопленные строки результата
    """
    indent_unit: str
    depth: int = 0
    lines: List[str] = field(default_factory=list)

    def emit(self, text: str) -> None:
        self.lines.append(self.indent_unit * self.depth + text)

    def append(self, text: str) -> None:
        """Дописывает текст в конец последней строки."""
        if not self.lines:
            self.emit(text)
            return
        self.lines[-1] += text

    def indent(self) -> None:
        self.depth += 1

    def dedent(self) -> None:
        self.depth = max(self.depth - 1, 0)

    def render(self) -> str:
        return "\n".join(self.lines)


class _LayoutEngine:
    """Один проход раскладки по списку токенов."""

    def __init__(self, tokens: List[Token], options: FormattingOptions, source: SourceIndex):
        self.tokens = tokens
        self.options = options
        self.source = source
        self.ctx = FormattingContext(indent_unit=options.indent_unit)

    def run(self) -> str:
        index = 0
        while index < len(self.tokens):
            index = self._process(index)
        return self.ctx.render()

    def _process(self, index: int) -> int:
        token = self.tokens[index]

        if token.kind is TokenKind.INTERPOLATION:
            self.ctx.emit(format_interpolation(token.value))
            return index + 1

        if token.kind is TokenKind.TEXT:
            self._emit_text(index)
            return index + 1

        if self._can_merge(token):
            merged = self._try_content_merge(index) or self._try_tight_merge(index)
            if merged:
                element, next_index = merged
                self.ctx.emit(element)
                return next_index

        self._emit_block(token)
        return index + 1

    # ---- поштучный вывод ----

    def _emit_block(self, token: Token) -> None:
        if is_closing_block(token):
            self.ctx.dedent()
        self.ctx.emit(token.value)
        if is_opening_block(token) and not is_self_closing_tag(token):
            self.ctx.indent()

    def _emit_text(self, index: int) -> None:
        token = self.tokens[index]
        if self.options.inline_short_elements and self._follows_inline_opening(index):
            # Вплотную к открывающему тегу, через пробел после интерполяции
            prev = self.tokens[index - 1]
            self.ctx.append(token.value if prev.kind is TokenKind.TAG else " " + token.value)
        else:
            self.ctx.emit(token.value)
        if is_opening_block(token):
            self.ctx.indent()

    def _follows_inline_opening(self, index: int) -> bool:
        """
        Текст внутри строчного элемента: ближайший предыдущий тег (через
        интерполяции) открывает элемент из INLINE_ELEMENTS.
        """
        for prev in reversed(self.tokens[:index]):
            if prev.kind is TokenKind.INTERPOLATION:
                continue
            return (
                prev.is_opening_tag
                and not is_self_closing_tag(prev)
                and prev.name in INLINE_ELEMENTS
            )
        return False

    # ---- склейка элемента в одну строку ----

    def _can_merge(self, token: Token) -> bool:
        return (
            self.options.inline_short_elements
            and token.is_opening_tag
            and not is_self_closing_tag(token)
        )

    def _try_content_merge(self, start: int) -> Optional[Tuple[str, int]]:
        opening = self.tokens[start]
        parts: List[str] = []
        limit = min(len(self.tokens), start + CONTENT_MERGE_LOOKAHEAD)

        for index in range(start + 1, limit):
            token = self.tokens[index]
            if token.is_closing_tag and token.name == opening.name:
                element = self._build_element(opening.value, parts, token.value)
                if should_keep_inline(element, self.options, self.source):
                    return element, index + 1
                return None
            if token.kind is TokenKind.INTERPOLATION:
                parts.append(format_interpolation(token.value))
            elif token.kind is TokenKind.TEXT:
                parts.append(token.value)
            else:
                return None
        logger.debug(
            "No closing tag for <%s> at %d within %d tokens",
            opening.name, opening.position, CONTENT_MERGE_LOOKAHEAD,
        )
        return None

    def _build_element(self, opening: str, parts: List[str], closing: str) -> str:
        if not parts:
            return opening + closing
        compact = opening + "".join(parts) + closing
        if self.source.lookup(compact) is SourceMatch.COMPACT:
            content = "".join(parts)
        else:
            content = " ".join(parts)
        return opening + content.strip() + closing

    def _try_tight_merge(self, start: int) -> Optional[Tuple[str, int]]:
        opening = self.tokens[start]
        pieces = [opening.value]
        nesting = 0
        limit = min(len(self.tokens), start + TIGHT_MERGE_LOOKAHEAD)

        for index in range(start + 1, limit):
            token = self.tokens[index]
            if token.is_closing_tag and token.name == opening.name:
                if nesting == 0:
                    pieces.append(token.value)
                    element = flatten_element(pieces)
                    if should_keep_inline(element, self.options, self.source):
                        return element, index + 1
                    return None
                nesting -= 1
            elif token.is_opening_tag and token.name == opening.name and not is_self_closing_tag(token):
                nesting += 1

            if token.kind is TokenKind.INTERPOLATION:
                pieces.append(format_interpolation(token.value))
            else:
                pieces.append(token.value)
        logger.debug(
            "No closing tag for <%s> at %d within %d tokens",
            opening.name, opening.position, TIGHT_MERGE_LOOKAHEAD,
        )
        return None


def _coerce_options(options: Union[FormattingOptions, Mapping[str, Any]]) -> FormattingOptions:
    if isinstance(options, FormattingOptions):
        return options
    if isinstance(options, Mapping):
        return FormattingOptions.from_dict(dict(options))
    raise OptionsError("options", options, "FormattingOptions or mapping")


def format_template(text: str, options: Union[FormattingOptions, Mapping[str, Any]]) -> str:
    """
    Форматирует шаблон.

    Args:
        text: Исходный текст шаблона
        options: Параметры форматирования (или словарь с теми же полями)

    Returns:
        Отформатированный текст без завершающего перевода строки;
        пустой или пробельный вход возвращается без изменений

    Raises:
        OptionsError: При некорректных параметрах
    """
    opts = _coerce_options(options)
    if not text.strip():
        return text

    source = normalize_line_endings(text).strip()
    tokens = tokenize(source)
    result = _LayoutEngine(tokens, opts, SourceIndex(source)).run()

    logger.debug("Formatted %d tokens into %d lines", len(tokens), result.count("\n") + 1)
    return result


__all__ = [
    "format_template",
    "normalize_line_endings",
    "FormattingContext",
    "TIGHT_MERGE_LOOKAHEAD",
    "CONTENT_MERGE_LOOKAHEAD",
]
