from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import FormatterConfig, load_config_for
from .errors import NgFmtUserError
from .files import TemplateFinder
from .formatter import format_template
from .indentation import detect_indentation
from .options import FormattingOptions
from .ranges import format_range, parse_line_range
from .report import DetectReport, FileList
from .version import tool_version

logger = logging.getLogger(__name__)

_STDIN_MARK = "-"
_LOG_FORMAT = "[%(levelname)s] %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ngfmt",
        description="Formatter for Angular-style HTML templates",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--debug", action="store_true", help="подробный лог в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_format = sub.add_parser("format", help="Форматировать файлы (без путей или с '-' читает stdin)")
    sp_format.add_argument("paths", nargs="*", metavar="PATH", help="файлы и каталоги")
    sp_format.add_argument("--check", action="store_true", help="только проверить; код 1, если есть изменения")
    sp_format.add_argument("--stdout", action="store_true", help="печатать результат вместо записи в файл")
    sp_format.add_argument("--range", metavar="START:END", help="форматировать только строки START..END (с 1)")
    sp_format.add_argument("--indent-size", type=int, metavar="N", help="размер отступа (отключает определение)")
    indent_kind = sp_format.add_mutually_exclusive_group()
    indent_kind.add_argument("--tabs", dest="use_spaces", action="store_false", default=None, help="отступ табами")
    indent_kind.add_argument("--spaces", dest="use_spaces", action="store_true", default=None, help="отступ пробелами")
    sp_format.add_argument("--no-detect", action="store_true", help="не определять отступы по содержимому")
    sp_format.add_argument("--no-inline", action="store_true", help="не схлопывать короткие элементы")
    sp_format.add_argument("--threshold", type=int, metavar="N", help="порог длины однострочного элемента")
    sp_format.add_argument(
        "--no-preserve-multiline",
        action="store_true",
        help="схлопывать и элементы, разложенные автором на несколько строк",
    )
    sp_format.add_argument("--config", type=Path, metavar="FILE", help="явный путь к .ngfmt.yaml")

    sp_detect = sub.add_parser("detect", help="Определить стиль отступов файла (JSON)")
    sp_detect.add_argument("path", type=Path, help="файл шаблона")
    sp_detect.add_argument("--config", type=Path, metavar="FILE", help="явный путь к .ngfmt.yaml")

    sp_list = sub.add_parser("list", help="Списки сущностей (JSON)")
    sp_list.add_argument("what", choices=["files"], help="что вывести")
    sp_list.add_argument("paths", nargs="*", metavar="PATH", help="файлы и каталоги")
    sp_list.add_argument("--config", type=Path, metavar="FILE", help="явный путь к .ngfmt.yaml")

    return p


def _setup_logging(debug: bool) -> None:
    """Один обработчик stderr на логгер пакета; уровень задаётся флагом или окружением."""
    root_logger = logging.getLogger("ngfmt")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    root_logger.propagate = False


def _env_debug() -> bool:
    return os.environ.get("NGFMT_DEBUG", "").strip().lower() in ("1", "true", "yes")


def _apply_overrides(cfg: FormatterConfig, ns: argparse.Namespace) -> FormatterConfig:
    """Флаги командной строки поверх значений из файла конфигурации."""
    update: Dict[str, Any] = {}
    if ns.no_detect:
        update["detect_indentation"] = False
    if ns.no_inline:
        update["inline_short_elements"] = False
    if ns.threshold is not None:
        update["short_element_threshold"] = ns.threshold
    if ns.no_preserve_multiline:
        update["preserve_user_multiline"] = False
    return cfg.model_copy(update=update) if update else cfg


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise NgFmtUserError(f"Cannot read {path}: {e}")


def _format_text(text: str, cfg: FormatterConfig, ns: argparse.Namespace) -> str:
    options: FormattingOptions = cfg.formatting_options(
        text,
        indent_size=ns.indent_size,
        use_spaces=ns.use_spaces,
    )
    if ns.range:
        start, end = parse_line_range(ns.range)
        return format_range(text, start, end, options)

    result = format_template(text, options)
    if cfg.insert_final_newline and result.strip():
        result += "\n"
    return result


def _run_format(ns: argparse.Namespace) -> int:
    root = Path.cwd()
    cfg, cfg_path = load_config_for(root, ns.config)
    cfg = _apply_overrides(cfg, ns)
    logger.debug("Using config %s", cfg_path or "<defaults>")

    if not ns.paths or ns.paths == [_STDIN_MARK]:
        text = sys.stdin.read()
        result = _format_text(text, cfg, ns)
        if ns.check:
            if result != text:
                sys.stderr.write("would reformat <stdin>\n")
                return 1
            return 0
        sys.stdout.write(result)
        return 0

    files = TemplateFinder(root, cfg).find([Path(p) for p in ns.paths])
    changed = 0
    for path in files:
        text = _read_text(path)
        result = _format_text(text, cfg, ns)
        if ns.check:
            if result != text:
                sys.stderr.write(f"would reformat {path}\n")
                changed += 1
        elif ns.stdout:
            sys.stdout.write(result)
        elif result != text:
            path.write_text(result, encoding="utf-8")
            logger.debug("Reformatted %s", path)
            changed += 1

    if ns.check:
        return 1 if changed else 0
    if not ns.stdout:
        sys.stderr.write(f"{changed} of {len(files)} file(s) reformatted\n")
    return 0


def _run_detect(ns: argparse.Namespace) -> int:
    path: Path = ns.path
    if not path.is_file():
        raise NgFmtUserError(f"File not found: {path}")
    cfg, cfg_path = load_config_for(path.parent, ns.config)
    detected = detect_indentation(_read_text(path))

    report = DetectReport(
        path=str(path),
        detected=detected is not None,
        indent_size=detected.indent_size if detected else cfg.indent_size,
        use_spaces=detected.use_spaces if detected else cfg.use_spaces,
        config_path=str(cfg_path) if cfg_path else None,
    )
    sys.stdout.write(_dumps(report.model_dump(by_alias=True)))
    return 0


def _run_list(ns: argparse.Namespace) -> int:
    root = Path.cwd()
    cfg, cfg_path = load_config_for(root, ns.config)
    files = TemplateFinder(root, cfg).find([Path(p) for p in ns.paths])
    data = FileList(
        root=str(root),
        files=[_display_path(f, root) for f in files],
        config_path=str(cfg_path) if cfg_path else None,
    )
    sys.stdout.write(_dumps(data.model_dump(by_alias=True)))
    return 0


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _dumps(data: Dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.debug or _env_debug())

    try:
        if ns.cmd == "format":
            return _run_format(ns)
        if ns.cmd == "detect":
            return _run_detect(ns)
        if ns.cmd == "list":
            return _run_list(ns)
    except NgFmtUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
