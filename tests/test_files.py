"""
Tests for template discovery.
"""

from pathlib import Path

import pytest

from ngfmt.config import FormatterConfig
from ngfmt.errors import NgFmtUserError
from ngfmt.files import TemplateFinder
from ngfmt.gitignore import GitIgnoreService

from tests.infrastructure.file_utils import write


def rel(paths, root: Path):
    return [p.resolve().relative_to(root.resolve()).as_posix() for p in paths]


def test_walks_project(tmpproj: Path):
    found = TemplateFinder(tmpproj, FormatterConfig()).find([])
    assert rel(found, tmpproj) == ["a.html", "sub/c.html"]


def test_gitignore_can_be_disabled(tmpproj: Path):
    found = TemplateFinder(tmpproj, FormatterConfig(respect_gitignore=False)).find([])
    assert rel(found, tmpproj) == ["a.html", "dist/d.html", "sub/c.html"]


def test_exclude_patterns(tmpproj: Path):
    write(tmpproj / "a.min.html", "<b>x</b>\n")
    cfg = FormatterConfig(exclude=["sub/", "*.min.html"])
    assert rel(TemplateFinder(tmpproj, cfg).find([]), tmpproj) == ["a.html"]


def test_extensions(tmpproj: Path):
    write(tmpproj / "page.component.htm", "<b>x</b>\n")
    cfg = FormatterConfig(extensions=[".htm"])
    assert rel(TemplateFinder(tmpproj, cfg).find([]), tmpproj) == ["page.component.htm"]


def test_explicit_file_always_included(tmpproj: Path):
    found = TemplateFinder(tmpproj, FormatterConfig()).find([tmpproj / "notes.txt", tmpproj / "dist" / "d.html"])
    assert rel(found, tmpproj) == ["notes.txt", "dist/d.html"]


def test_duplicates_removed(tmpproj: Path):
    found = TemplateFinder(tmpproj, FormatterConfig()).find([tmpproj / "a.html", tmpproj])
    assert rel(found, tmpproj) == ["a.html", "sub/c.html"]


def test_missing_path(tmpproj: Path):
    with pytest.raises(NgFmtUserError, match="not found"):
        TemplateFinder(tmpproj, FormatterConfig()).find([tmpproj / "nope"])


class TestGitIgnoreService:

    def test_root_rules(self, tmpproj: Path):
        service = GitIgnoreService(tmpproj)
        assert service.is_ignored("dist", is_dir=True)
        assert service.is_ignored("dist/d.html")
        assert not service.is_ignored("sub/c.html")

    def test_nested_gitignore_is_relative(self, tmpproj: Path):
        write(tmpproj / "sub" / ".gitignore", "c.html\n")
        write(tmpproj / "c.html", "<b>root</b>\n")
        service = GitIgnoreService(tmpproj)
        assert service.is_ignored("sub/c.html")
        assert not service.is_ignored("c.html")

    def test_info_exclude(self, tmpproj: Path):
        write(tmpproj / ".git" / "info" / "exclude", "*.draft.html\n")
        service = GitIgnoreService(tmpproj)
        assert service.is_ignored("sub/page.draft.html")

    def test_no_rules(self, tmp_path: Path):
        service = GitIgnoreService(tmp_path)
        assert not service.is_ignored("a.html")
        assert not service.is_ignored("")
