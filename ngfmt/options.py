"""
Параметры форматирования шаблонов.

FormattingOptions - единственная конфигурация, которую получает ядро
форматтера. Поля indent_size, use_spaces и inline_short_elements
обязательны. У short_element_threshold (80) и preserve_user_multiline (True)
есть значения по умолчанию; from_dict подставляет те же значения.
Определение отступов по содержимому делает внешний слой (ngfmt.config).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .errors import OptionsError

DEFAULT_SHORT_ELEMENT_THRESHOLD = 80


def _require_positive_int(field: str, value: Any) -> None:
    # bool является подклассом int, но как размер отступа не годится
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise OptionsError(field, value, "positive integer")


def _require_bool(field: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise OptionsError(field, value, "bool")


@dataclass(frozen=True)
class FormattingOptions:
    """
    Настройки раскладки документа.

    Attributes:
        indent_size: Количество пробелов на уровень (игнорируется при табах)
        use_spaces: True - отступ пробелами, False - один таб на уровень
        inline_short_elements: Главный переключатель однострочных элементов
        short_element_threshold: Порог длины для правил однострочности
        preserve_user_multiline: Не схлопывать элементы, которые автор
            намеренно разложил на несколько строк
    """
    indent_size: int
    use_spaces: bool
    inline_short_elements: bool
    short_element_threshold: int = DEFAULT_SHORT_ELEMENT_THRESHOLD
    preserve_user_multiline: bool = True

    def __post_init__(self) -> None:
        _require_positive_int("indent_size", self.indent_size)
        _require_bool("use_spaces", self.use_spaces)
        _require_bool("inline_short_elements", self.inline_short_elements)
        _require_positive_int("short_element_threshold", self.short_element_threshold)
        _require_bool("preserve_user_multiline", self.preserve_user_multiline)

    @property
    def indent_unit(self) -> str:
        """Строка одного уровня отступа."""
        return " " * self.indent_size if self.use_spaces else "\t"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormattingOptions":
        """Создание экземпляра из словаря (snake_case или camelCase ключи)."""
        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            indent_size=pick("indent_size", "indentSize"),
            use_spaces=pick("use_spaces", "useSpaces"),
            inline_short_elements=pick("inline_short_elements", "inlineShortElements"),
            short_element_threshold=pick(
                "short_element_threshold", "shortElementThreshold", DEFAULT_SHORT_ELEMENT_THRESHOLD
            ),
            preserve_user_multiline=pick("preserve_user_multiline", "preserveUserMultiline", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indent_size": self.indent_size,
            "use_spaces": self.use_spaces,
            "inline_short_elements": self.inline_short_elements,
            "short_element_threshold": self.short_element_threshold,
            "preserve_user_multiline": self.preserve_user_multiline,
        }


__all__ = ["FormattingOptions", "DEFAULT_SHORT_ELEMENT_THRESHOLD"]
