"""Full-context view: a file's source plus everything it pulls in.

For Java files the view lists injected collaborators, resolves project-local
imports to absolute paths, expands the fields of imported data classes and
outlines the remaining imported classes, so that a reader can follow a file
without opening its dependencies one by one.  Other files get the pagination
header and the raw source window only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from . import config
from .dependency_resolver import (
    ImportScan,
    extract_model_fields,
    find_injected_fields,
    resolve_project_imports,
)
from .models import ResolvedImport
from .outline import shallow_outline, split_lines
from .patterns import is_jvm_language, language_for_path
from .project_layout import find_project_root, list_modules, read_package_name
from .roles import is_model_like

logger = logging.getLogger(__name__)

FILE_SEPARATOR = "\n\n" + "#" * 70 + "\n\n"
NO_COMMENT = "(no comment)"


def page_window(total: int, start_line: Optional[int], end_line: Optional[int]) -> Tuple[int, int]:
    """1-based inclusive ``(start, end)`` of the source window."""
    start = max(1, start_line or 1)
    if end_line:
        end = min(end_line, total)
    else:
        end = min(total, start + config.DEFAULT_WINDOW - 1)
    return start, end


def _render_injections(content: str) -> List[str]:
    out = ["", "[DEPENDENCY_INJECTIONS]: (Injected Components)"]
    fields = find_injected_fields(content)
    for type_name, name in fields:
        out.append(f"  - [INJECT] {type_name} {name}")
    if not fields:
        out.append("  (No significant injections detected)")
    return out


def _render_import_list(title: str, items: List[ResolvedImport]) -> List[str]:
    out = ["", title]
    for item in items[: config.MAX_LISTED_IMPORTS]:
        out.append(f"  - {item.simple_name} => {item.absolute_path}")
    return out


def _read(path: str) -> Optional[str]:
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Skipping unreadable dependency %s: %s", path, exc)
        return None


def _render_model_fields(models: List[ResolvedImport]) -> List[str]:
    out = ["", "[MODEL_FIELDS]: (DTO/VO/Entity Fields)"]
    for item in models[: config.MAX_MODEL_IMPORTS]:
        content = _read(item.absolute_path)
        if content is None:
            continue
        out.append(f">> {item.simple_name} => {item.absolute_path}")
        fields = extract_model_fields(content)
        if not fields:
            out.append("   - (No fields detected)")
            continue
        for model_field in fields:
            out.append(f"   - {model_field.name} | {model_field.type} | {model_field.comment or NO_COMMENT}")
    return out


def _render_dependency_outlines(others: List[ResolvedImport]) -> List[str]:
    out = ["", "[DEPENDENCY_OUTLINES]: (Other Class Outlines)"]
    count = 0
    for item in others:
        if count >= config.MAX_DEPENDENCY_OUTLINES:
            break
        content = _read(item.absolute_path)
        if content is None:
            continue
        out.append(f">> {item.simple_name}:")
        for entry in shallow_outline(content, "java"):
            span = f"-{entry.end_line}" if entry.end_line else ""
            out.append(f"   - {entry.name}@L{entry.start_line}{span}")
        count += 1
    return out


def render_java_sections(path: str, content: str) -> List[str]:
    """Injection, import, model and outline sections of one Java file."""
    out = _render_injections(content)

    package_name = read_package_name(content)
    if not package_name:
        return out

    root = find_project_root(Path(path), package_name)
    scan: ImportScan = resolve_project_imports(content, root)
    if scan.resolved:
        out += _render_import_list("[LOCAL_IMPORTS]: (Resolved Project Imports)", scan.resolved)
    if scan.fallback:
        out += _render_import_list("[LOCAL_IMPORTS]: (Resolved Project Imports - Fallback)", scan.fallback)

    imports = scan.all_imports
    models = [item for item in imports if is_model_like(item.simple_name, item.absolute_path)]
    others = [item for item in imports if item not in models]
    if models:
        out += _render_model_fields(models)
    if others:
        out += _render_dependency_outlines(others)
    return out


def missing_file_suggestion(path: str) -> str:
    root = find_project_root(Path(path))
    if root is None:
        return "Suggestion: Check the file path accuracy."
    modules = list_modules(root)
    return f"Suggestion: The file might belong to another module. Modules found at root: {', '.join(modules)}"


def render_file_context(path: str, start_line: Optional[int] = None, end_line: Optional[int] = None) -> str:
    """Full-context text block of one file."""
    file_path = Path(path)
    if not file_path.is_file():
        return f"--- [MISSING] {path} ---\n{missing_file_suggestion(path)}"

    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return f"--- [ERROR] Reading {path} ---\n{exc}"

    lines = split_lines(content)
    start, end = page_window(len(lines), start_line, end_line)
    out = [
        f"[FILE_PATH]: {path}",
        f"[PAGINATION]: Lines {start}-{end} (Total {len(lines)})",
    ]
    if is_jvm_language(language_for_path(file_path)):
        out += render_java_sections(path, content)

    out += ["", "[SOURCE_CODE]:", "\n".join(lines[start - 1:end])]
    return "\n".join(out)
