from pathlib import Path

import pytest

from ngfmt.options import FormattingOptions

from tests.infrastructure.file_utils import write


@pytest.fixture
def opts() -> FormattingOptions:
    """Отступ 2 пробела, однострочные элементы включены."""
    return FormattingOptions(indent_size=2, use_spaces=True, inline_short_elements=True)


@pytest.fixture
def flat_opts() -> FormattingOptions:
    """Отступ 2 пробела, каждый токен на своей строке."""
    return FormattingOptions(indent_size=2, use_spaces=True, inline_short_elements=False)


@pytest.fixture
def tmpproj(tmp_path: Path, monkeypatch) -> Path:
    """
    Небольшой проект шаблонов:
      a.html, notes.txt, sub/c.html, dist/d.html (в .gitignore),
      node_modules/x.html
    """
    root = tmp_path
    write(root / ".gitignore", "dist/\n")
    write(root / "a.html", "<div><p>x</p></div>\n")
    write(root / "notes.txt", "not a template\n")
    write(root / "sub" / "c.html", "<span>c</span>\n")
    write(root / "dist" / "d.html", "<b>d</b>\n")
    write(root / "node_modules" / "x.html", "<i>x</i>\n")
    monkeypatch.chdir(root)
    return root
