"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from NgFmtUserError.

Programming errors and bugs should NOT inherit from NgFmtUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class NgFmtUserError(Exception):
    """
    Base class for all user-facing errors in ngfmt.

    These errors indicate problems that the user can fix:
    invalid options, broken configuration files, bad line ranges.
    """
    pass


class OptionsError(NgFmtUserError, ValueError):
    """Недопустимое значение в FormattingOptions."""

    def __init__(self, field: str, value: object, expected: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid formatting option '{field}': expected {expected}, got {value!r}")


class ConfigLoadError(NgFmtUserError):
    """Ошибка чтения или валидации файла конфигурации."""

    def __init__(self, path: object, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class RangeError(NgFmtUserError, ValueError):
    """Некорректный диапазон строк для частичного форматирования."""
    pass


__all__ = ["NgFmtUserError", "OptionsError", "ConfigLoadError", "RangeError"]
