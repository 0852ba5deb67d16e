import pytest

from ngfmt.interpolation import EMPTY_INTERPOLATION, format_interpolation, space_operators


@pytest.mark.parametrize("raw, expected", [
    ("{{foo}}", "{{ foo }}"),
    ("{{   foo   }}", "{{ foo }}"),
    ("{{a|b}}", "{{ a | b }}"),
    ("{{ value | date:'short' }}", "{{ value | date:'short' }}"),
    ("{{ items|slice:0:3|json }}", "{{ items | slice:0:3 | json }}"),
    ("{{a===b}}", "{{ a === b }}"),
    ("{{a!==b}}", "{{ a !== b }}"),
    ("{{a&&b}}", "{{ a && b }}"),
    ("{{ a   &&   b }}", "{{ a && b }}"),
    ("{{a||b}}", "{{ a || b }}"),
    ("{{a<=b}}", "{{ a <= b }}"),
    ("{{ a+b }}", "{{ a + b }}"),
    ("{{ a*b-c }}", "{{ a * b - c }}"),
    ("{{ -1 }}", "{{ -1 }}"),
    ("{{a*-1}}", "{{ a * -1 }}"),
    ("{{a==-1}}", "{{ a == -1 }}"),
    ("{{ fn(-x, -y) }}", "{{ fn(-x, -y) }}"),
    ("{{ items[-1] }}", "{{ items[-1] }}"),
    ("{{ (a)-1 }}", "{{ (a) - 1 }}"),
    ("{{ user.name }}", "{{ user.name }}"),
])
def test_format_interpolation(raw, expected):
    assert format_interpolation(raw) == expected


def test_operators_inside_strings_untouched():
    assert format_interpolation("{{ 'a>=b' }}") == "{{ 'a>=b' }}"
    assert format_interpolation('{{ "x+y" }}') == '{{ "x+y" }}'
    assert format_interpolation("{{ \"it's\" + x }}") == "{{ \"it's\" + x }}"


def test_escaped_quote_does_not_toggle():
    assert space_operators(r"'a\'b+c'") == r"'a\'b+c'"


def test_empty_interpolation():
    assert format_interpolation("{{}}") == EMPTY_INTERPOLATION
    assert format_interpolation("{{    }}") == "{{  }}"


def test_unterminated_returned_unchanged():
    assert format_interpolation("{{ a") == "{{ a"
    assert format_interpolation("plain") == "plain"


@pytest.mark.parametrize("raw", [
    "{{a===b}}",
    "{{ a&&b||c }}",
    "{{ items|slice:0:3 }}",
    "{{ a+b*c }}",
    "{{a*-1}}",
    "{{ ok ? -1 : +1 }}",
    "{{ 'x>=y' | upper }}",
])
def test_rewrite_is_stable(raw):
    once = format_interpolation(raw)
    assert format_interpolation(once) == once
