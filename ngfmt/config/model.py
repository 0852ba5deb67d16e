"""
Модель файла конфигурации .ngfmt.yaml.
Значения по умолчанию совпадают с типичными настройками редактора.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..indentation import resolve_indentation
from ..options import DEFAULT_SHORT_ELEMENT_THRESHOLD, FormattingOptions


class FormatterConfig(BaseModel):
    """Настройки форматтера из файла конфигурации."""

    model_config = ConfigDict(extra="forbid")

    # Отступы
    indent_size: int = Field(default=4, gt=0)
    use_spaces: bool = True
    detect_indentation: bool = True

    # Раскладка
    inline_short_elements: bool = True
    short_element_threshold: int = Field(default=DEFAULT_SHORT_ELEMENT_THRESHOLD, gt=0)
    preserve_user_multiline: bool = True

    # Запись файлов
    insert_final_newline: bool = True

    # Отбор файлов
    extensions: List[str] = Field(default_factory=lambda: [".html"])
    exclude: List[str] = Field(default_factory=list)
    respect_gitignore: bool = True

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        out = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            out.append(ext if ext.startswith(".") else "." + ext)
        return out

    def formatting_options(
        self,
        text: str = "",
        *,
        indent_size: Optional[int] = None,
        use_spaces: Optional[bool] = None,
    ) -> FormattingOptions:
        """
        Собирает FormattingOptions для конкретного документа.

        Явно заданные indent_size / use_spaces отключают определение
        отступов по содержимому.

        Args:
            text: Текст документа (для определения отступов)
            indent_size: Переопределение размера отступа
            use_spaces: Переопределение пробелы/табы

        Returns:
            Параметры для format_template()
        """
        explicit = indent_size is not None or use_spaces is not None
        indentation = resolve_indentation(
            text,
            indent_size if indent_size is not None else self.indent_size,
            use_spaces if use_spaces is not None else self.use_spaces,
            detect=self.detect_indentation and not explicit,
        )
        return FormattingOptions(
            indent_size=indentation.indent_size,
            use_spaces=indentation.use_spaces,
            inline_short_elements=self.inline_short_elements,
            short_element_threshold=self.short_element_threshold,
            preserve_user_multiline=self.preserve_user_multiline,
        )


__all__ = ["FormatterConfig"]
