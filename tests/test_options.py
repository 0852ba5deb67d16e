import pytest

from ngfmt.errors import NgFmtUserError, OptionsError
from ngfmt.options import DEFAULT_SHORT_ELEMENT_THRESHOLD, FormattingOptions


def make(**overrides):
    data = {"indent_size": 2, "use_spaces": True, "inline_short_elements": True}
    data.update(overrides)
    return FormattingOptions(**data)


def test_defaults():
    options = make()
    assert options.short_element_threshold == DEFAULT_SHORT_ELEMENT_THRESHOLD == 80
    assert options.preserve_user_multiline is True


def test_indent_unit():
    assert make(indent_size=2).indent_unit == "  "
    assert make(indent_size=4, use_spaces=False).indent_unit == "\t"


@pytest.mark.parametrize("field, value", [
    ("indent_size", 0),
    ("indent_size", -2),
    ("indent_size", True),
    ("indent_size", "2"),
    ("short_element_threshold", 0),
    ("use_spaces", 1),
    ("inline_short_elements", None),
    ("preserve_user_multiline", "yes"),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(OptionsError) as exc:
        make(**{field: value})
    assert exc.value.field == field
    assert field in str(exc.value)


def test_options_error_hierarchy():
    assert issubclass(OptionsError, NgFmtUserError)
    assert issubclass(OptionsError, ValueError)


def test_from_dict_accepts_both_key_styles():
    snake = FormattingOptions.from_dict({"indent_size": 3, "use_spaces": True, "inline_short_elements": False})
    camel = FormattingOptions.from_dict({"indentSize": 3, "useSpaces": True, "inlineShortElements": False})
    assert snake == camel
    assert snake.short_element_threshold == 80


def test_from_dict_missing_required_field():
    with pytest.raises(OptionsError):
        FormattingOptions.from_dict({"use_spaces": True, "inline_short_elements": True})


def test_to_dict():
    data = make(short_element_threshold=60).to_dict()
    assert data["short_element_threshold"] == 60
    assert FormattingOptions.from_dict(data) == make(short_element_threshold=60)


def test_from_dict_defaults_match_dataclass():
    required = {"indent_size": 2, "use_spaces": True, "inline_short_elements": True}
    assert FormattingOptions.from_dict(required) == FormattingOptions(**required)


def test_required_fields_have_no_defaults():
    with pytest.raises(TypeError):
        FormattingOptions(indent_size=2, use_spaces=True)
