"""
Решение «оставить элемент в одну строку».

Эвристики опираются на исходный текст документа: был ли элемент записан
компактно (<b>text</b>) или намеренно разложен автором на несколько строк.
Сопоставление с исходником приблизительное: повторяющаяся или почти
одинаковая разметка может дать ложное совпадение.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .options import FormattingOptions
from .tokens import tag_name

logger = logging.getLogger(__name__)

# Элементы, которые охотнее остаются однострочными
INLINE_ELEMENTS = frozenset({
    "p", "span", "a", "strong", "em", "b", "i", "small", "label", "button", "li",
})

# Длина общего префикса при нечётком поиске элемента в исходнике
SIMILAR_PREFIX_LENGTH = 30
# Компактно записанный элемент может быть длиннее порога в это число раз
COMPACT_LENGTH_FACTOR = 1.5
# При большем числе атрибутов элемент считается «сложным»
MAX_SIMPLE_ATTRIBUTES = 2
# Как и при значении атрибута длиннее стольких символов
MAX_SIMPLE_ATTRIBUTE_VALUE = 20

_NESTED_TAG_RE = re.compile(r"<[A-Za-z]")
_ATTRIBUTE_RE = re.compile(r"\s[^\s=<>\"'/]+=")
_LONG_VALUE_RE = re.compile(
    r"=\s*(?:\"[^\"]{%d,}\"|'[^']{%d,}')" % (MAX_SIMPLE_ATTRIBUTE_VALUE + 1, MAX_SIMPLE_ATTRIBUTE_VALUE + 1)
)

_INLINE_NAMES = "|".join(sorted(INLINE_ELEMENTS))
_SPACE_AFTER_INLINE_OPEN_RE = re.compile(r"(<(?:%s)(?=[\s/>])[^>]*>)\s+" % _INLINE_NAMES, re.IGNORECASE)
_SPACE_BEFORE_INLINE_CLOSE_RE = re.compile(r"\s+(</(?:%s)\s*>)" % _INLINE_NAMES, re.IGNORECASE)


class SourceMatch(enum.Enum):
    """Результат поиска элемента в исходном тексте."""

    COMPACT = "compact"      # найден, содержимое без пробелов по краям и переносов
    EXPANDED = "expanded"    # найден, но записан «свободно»
    NO_MATCH = "no-match"    # не найден


def element_content(element: str) -> Optional[str]:
    """Текст между концом открывающего и началом закрывающего тега."""
    start = element.find(">") + 1
    end = element.rfind("<")
    if 0 < start < end:
        return element[start:end]
    return None


def is_content_compact(content: str) -> bool:
    """Нет пробелов по краям и нет переносов строк."""
    return content == content.strip() and "\n" not in content


def has_nested_tags(element: str) -> bool:
    inner = element[element.find(">") + 1:element.rfind("<")]
    return _NESTED_TAG_RE.search(inner) is not None


def has_complex_attributes(element: str) -> bool:
    """Больше двух атрибутов или хотя бы одно длинное значение."""
    if len(_ATTRIBUTE_RE.findall(element)) > MAX_SIMPLE_ATTRIBUTES:
        return True
    return _LONG_VALUE_RE.search(element) is not None


def flatten_element(pieces: Sequence[str]) -> str:
    """
    Склеивает токены элемента в одну строку.

    Args:
        pieces: Токены от открывающего до закрывающего тега включительно

    Returns:
        Однострочное представление элемента
    """
    result = " ".join(" ".join(pieces).split())

    # Ровно один пробел внутри маркеров интерполяции
    result = re.sub(r"\{\{\s*", "{{ ", result)
    result = re.sub(r"\s*\}\}", " }}", result)

    # Соседние теги без пробела: '> <' -> '><'
    result = re.sub(r">\s+<", "><", result)

    # Без пробелов сразу внутри строчных элементов
    result = _SPACE_AFTER_INLINE_OPEN_RE.sub(r"\1", result)
    result = _SPACE_BEFORE_INLINE_CLOSE_RE.sub(r"\1", result)
    return result


class SourceIndex:
    """
    Поиск элементов в исходном (нормализованном) тексте документа.

    Кэширует кандидатов по имени тега, чтобы не сканировать текст заново
    для каждого элемента с тем же именем.
    """

    def __init__(self, source: str):
        self.source = source
        self._lower = source.lower()
        self._candidates: Dict[str, List[Tuple[str, Optional[str]]]] = {}

    def lookup(self, element: str) -> SourceMatch:
        """
        Ищет элемент в исходнике: сначала точное вхождение, затем нечёткое
        совпадение по имени тега и общему префиксу.

        Args:
            element: Однострочное представление элемента

        Returns:
            COMPACT / EXPANDED при совпадении, NO_MATCH иначе
        """
        if element in self.source:
            content = element_content(element)
            if content is not None:
                return SourceMatch.COMPACT if is_content_compact(content) else SourceMatch.EXPANDED

        name = tag_name(element)
        if name is None:
            return SourceMatch.NO_MATCH

        normalized = " ".join(element.split())
        for original, content in self._candidates_for(name):
            if content is None:
                continue
            if (normalized[:SIMILAR_PREFIX_LENGTH] in original
                    or original[:SIMILAR_PREFIX_LENGTH] in normalized):
                return SourceMatch.COMPACT if is_content_compact(content) else SourceMatch.EXPANDED

        return SourceMatch.NO_MATCH

    def was_multiline(self, element: str) -> bool:
        """
        Был ли элемент намеренно многострочным в исходнике: его фрагмент
        содержит перенос строки и вложенные теги.
        """
        close = element.find(">")
        name = tag_name(element)
        if close == -1 or name is None:
            return False

        opening = element[:close + 1]
        pattern = r"\s+".join(re.escape(part) for part in opening.split())
        match = re.search(pattern, self.source)
        if not match:
            return False

        end_tag = f"</{name}>"
        end = self._lower.find(end_tag, match.end())
        if end == -1:
            return False

        span = self.source[match.start():end + len(end_tag)]
        inner = self.source[match.end():end]
        return "\n" in span and _NESTED_TAG_RE.search(inner) is not None

    def _candidates_for(self, name: str) -> List[Tuple[str, Optional[str]]]:
        cached = self._candidates.get(name)
        if cached is not None:
            return cached

        end_tag = f"</{name}>"
        opening_re = re.compile(r"<%s(?=[\s/>])[^>]*>" % re.escape(name), re.IGNORECASE)
        found: List[Tuple[str, Optional[str]]] = []
        for match in opening_re.finditer(self.source):
            end = self._lower.find(end_tag, match.end())
            if end == -1:
                continue
            original = self.source[match.start():end + len(end_tag)]
            found.append((" ".join(original.split()), element_content(original)))

        self._candidates[name] = found
        return found


def should_keep_inline(element: str, options: FormattingOptions, source: SourceIndex) -> bool:
    """
    Проверяет, оставить ли элемент в одну строку.

    Правила по приоритету:
    (a) намеренно многострочный в исходнике: нет (при preserve_user_multiline);
    (b) строчный элемент без вложенных тегов, не длиннее порога: да;
    (c) был записан компактно и не длиннее 1.5 порога: да;
    (d) не длиннее половины порога и без сложных атрибутов: да.

    Args:
        element: Однострочное представление элемента
        options: Параметры форматирования
        source: Индекс исходного текста

    Returns:
        True если элемент следует вывести одной строкой
    """
    if not options.inline_short_elements:
        return False

    if options.preserve_user_multiline and source.was_multiline(element):
        logger.debug("Keeping multi-line element: %.40s", element)
        return False

    threshold = options.short_element_threshold
    length = len(element.strip())
    name = tag_name(element) or ""

    if name in INLINE_ELEMENTS and not has_nested_tags(element) and length <= threshold:
        return True

    if length <= threshold * COMPACT_LENGTH_FACTOR and source.lookup(element) is SourceMatch.COMPACT:
        return True

    return length <= threshold / 2 and not has_complex_attributes(element)


__all__ = [
    "INLINE_ELEMENTS",
    "SourceMatch",
    "SourceIndex",
    "element_content",
    "is_content_compact",
    "has_nested_tags",
    "has_complex_attributes",
    "flatten_element",
    "should_keep_inline",
]
