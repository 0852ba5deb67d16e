"""
Отбор файлов шаблонов для форматирования.

Явно переданные файлы берутся всегда; каталоги обходятся рекурсивно с
фильтрацией по расширениям, шаблонам exclude и .gitignore.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from .config.model import FormatterConfig
from .errors import NgFmtUserError
from .gitignore import GitIgnoreService, compile_patterns

logger = logging.getLogger(__name__)

# Каталоги, в которые не заходим никогда
_ALWAYS_SKIPPED_DIRS = frozenset({".git", "node_modules"})


def _rel_posix(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


class TemplateFinder:
    """
    Поиск файлов шаблонов относительно корня проекта.

    Args:
        root: Корень проекта (обычно текущий каталог)
        config: Конфигурация форматтера
    """

    def __init__(self, root: Path, config: FormatterConfig):
        self.root = root.resolve()
        self.config = config
        self._exclude = compile_patterns(config.exclude)
        self._gitignore: Optional[GitIgnoreService] = (
            GitIgnoreService(self.root) if config.respect_gitignore else None
        )

    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        candidate = rel_path + "/" if is_dir else rel_path
        if self._exclude is not None and self._exclude.match_file(candidate):
            return True
        if self._gitignore is not None and self._gitignore.is_ignored(rel_path, is_dir=is_dir):
            return True
        return False

    def _matches_extension(self, path: Path) -> bool:
        return path.suffix.lower() in self.config.extensions

    def _walk(self, directory: Path) -> List[Path]:
        found: List[Path] = []
        for current, dirnames, filenames in os.walk(directory):
            current_path = Path(current)
            kept = []
            for name in sorted(dirnames):
                if name in _ALWAYS_SKIPPED_DIRS:
                    continue
                if self.is_excluded(_rel_posix(current_path / name, self.root), is_dir=True):
                    logger.debug("Skipping directory %s", current_path / name)
                    continue
                kept.append(name)
            dirnames[:] = kept

            for name in sorted(filenames):
                path = current_path / name
                if not self._matches_extension(path):
                    continue
                if self.is_excluded(_rel_posix(path, self.root)):
                    logger.debug("Skipping file %s", path)
                    continue
                found.append(path)
        return found

    def find(self, paths: Sequence[Path]) -> List[Path]:
        """
        Разворачивает пути в список файлов.

        Args:
            paths: Файлы и каталоги; пустой список означает корень проекта

        Returns:
            Файлы без повторов в порядке обнаружения

        Raises:
            NgFmtUserError: Если путь не существует
        """
        targets = list(paths) or [self.root]
        result: List[Path] = []
        seen = set()

        for target in targets:
            if target.is_file():
                candidates = [target]
            elif target.is_dir():
                candidates = self._walk(target)
            else:
                raise NgFmtUserError(f"Path not found: {target}")

            for path in candidates:
                key = path.resolve()
                if key not in seen:
                    seen.add(key)
                    result.append(path)

        logger.debug("Found %d template files", len(result))
        return result


__all__ = ["TemplateFinder"]
