"""
GitIgnore matching for template discovery.

Git semantics that matter for picking files to format:
- every .gitignore applies to its directory and subdirectories
- patterns are matched relative to the .gitignore location
- .git/info/exclude applies at the repository root
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

logger = logging.getLogger(__name__)

__all__ = ["GitIgnoreService", "compile_patterns"]


def compile_patterns(patterns: List[str]) -> Optional[PathSpec]:
    """PathSpec for gitignore-style patterns, or None when there are none."""
    lines = [p.strip() for p in patterns if p.strip() and not p.strip().startswith("#")]
    if not lines:
        return None
    return PathSpec.from_lines(GitWildMatchPattern, lines)


class GitIgnoreService:
    """
    Checks paths against .gitignore rules below a root directory.

    Usage:
        service = GitIgnoreService(root)
        if service.is_ignored("dist/index.html"):
            ...
    """

    def __init__(self, root: Path):
        self.root = root.resolve()
        # Key: directory relative to root ("" for root), value: its PathSpec
        self._specs: Dict[str, Optional[PathSpec]] = {}
        self._specs[""] = self._load_root_spec()

    def _read_patterns(self, path: Path) -> List[str]:
        try:
            return path.read_text(encoding="utf-8", errors="ignore").splitlines()
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}")
            return []

    def _load_root_spec(self) -> Optional[PathSpec]:
        patterns: List[str] = []
        exclude_path = self.root / ".git" / "info" / "exclude"
        if exclude_path.is_file():
            patterns.extend(self._read_patterns(exclude_path))
        root_gitignore = self.root / ".gitignore"
        if root_gitignore.is_file():
            patterns.extend(self._read_patterns(root_gitignore))
        return compile_patterns(patterns)

    def _spec_for_dir(self, rel_dir: str) -> Optional[PathSpec]:
        if rel_dir not in self._specs:
            gitignore_path = self.root / rel_dir / ".gitignore"
            if gitignore_path.is_file():
                self._specs[rel_dir] = compile_patterns(self._read_patterns(gitignore_path))
            else:
                self._specs[rel_dir] = None
        return self._specs[rel_dir]

    def is_ignored(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """
        Check a path relative to the root (POSIX format).

        Every .gitignore from the root down to the path's parent directory
        is consulted with the path made relative to that .gitignore.
        """
        parts = [p for p in rel_path.strip("/").split("/") if p]
        if not parts:
            return False

        suffix = "/" if is_dir else ""
        for depth in range(len(parts)):
            rel_dir = "/".join(parts[:depth])
            spec = self._spec_for_dir(rel_dir)
            if spec is None:
                continue
            remaining = "/".join(parts[depth:]) + suffix
            if spec.match_file(remaining):
                return True
        return False
