from .blocks import is_closing_block, is_interpolation_token, is_opening_block, is_self_closing_tag
from .errors import ConfigLoadError, NgFmtUserError, OptionsError, RangeError
from .formatter import format_template
from .indentation import analyze_indentation, detect_indentation, resolve_indentation
from .interpolation import format_interpolation
from .options import FormattingOptions
from .ranges import format_range
from .tokenizer import tokenize
from .tokens import Token, TokenKind

# Короткое имя для внешних вызовов: ngfmt.format(text, options)
format = format_template

__all__ = [
    "format",
    "format_template",
    "format_range",
    "format_interpolation",
    "FormattingOptions",
    "tokenize",
    "Token",
    "TokenKind",
    "is_opening_block",
    "is_closing_block",
    "is_self_closing_tag",
    "is_interpolation_token",
    "analyze_indentation",
    "detect_indentation",
    "resolve_indentation",
    "NgFmtUserError",
    "OptionsError",
    "ConfigLoadError",
    "RangeError",
]
