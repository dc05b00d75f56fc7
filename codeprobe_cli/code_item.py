"""Locate named code items and follow interfaces to their implementations.

Lookup is permissive: the first line that contains the item
name as a raw substring is taken as the hit, and the block around it is
resolved by :mod:`codeprobe_cli.block_range`.  For Java files the locator
also

* derives ``XServiceImpl`` candidates from ``XService`` (by directory
  convention and by a project-wide class search) and repeats the lookup
  in every implementation found, and
* traces ``field.call()`` accesses in each snippet back to the declared
  field type and the file that defines that type.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

from . import config
from .block_range import fallback_window, find_block_range
from .dependency_resolver import strip_generics
from .models import SnippetResult
from .outline import split_lines
from .project_layout import find_named_files, read_package_name, search_root_for

logger = logging.getLogger(__name__)

FIELD_TYPE_RE = re.compile(
    r"^\s*(private|protected|public)\s+(final\s+)?([A-Za-z_][\w<>]*)\s+([A-Za-z_][\w]*)\s*;"
)
CALLED_FIELD_RE = re.compile(r"\b([A-Za-z_][\w]*)\s*\.")

CALL_PATH_HEADER = "--- Call paths ---"
NOT_FOUND = "not found"


# ---------------------------------------------------------------------------
# Snippet extraction
# ---------------------------------------------------------------------------

def _header(path: str, first: int, last: int, item_name: str) -> str:
    return f"--- File: {path} (lines {first}-{last}, item: '{item_name}') ---"


def extract_snippet(
    path: str,
    item_name: str,
    before: Optional[int] = None,
    after: Optional[int] = None,
) -> SnippetResult:
    """Definition block of the first line mentioning *item_name* in *path*."""
    file_path = Path(path)
    if not file_path.is_file():
        return SnippetResult(False, f"--- File: {path} (error: file does not exist or is not a regular file) ---")
    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return SnippetResult(False, f"--- File: {path} (error: read failed - {exc}) ---")

    lines = split_lines(content)
    hit_index = next((i for i, line in enumerate(lines) if item_name in line), -1)
    if hit_index == -1:
        return SnippetResult(False, f"--- File: {path} (error: item '{item_name}' not found) ---")

    block = find_block_range(lines, hit_index)
    if block is None:
        start, stop = fallback_window(
            len(lines),
            hit_index,
            config.SNIPPET_BEFORE if before is None else before,
            config.SNIPPET_AFTER if after is None else after,
        )
        logger.debug("Unterminated block for '%s' in %s, using lines %d-%d", item_name, path, start + 1, stop)
    else:
        start, stop = block.start, block.end + 1

    code = "\n".join(lines[start:stop])
    return SnippetResult(
        found=True,
        text=f"{_header(path, start + 1, stop, item_name)}\n\n{code}",
        code=code,
        start_line=start + 1,
        end_line=stop,
    )


# ---------------------------------------------------------------------------
# Interface -> implementation
# ---------------------------------------------------------------------------

def build_impl_file_path(path: str) -> Optional[str]:
    """Conventional ``...ServiceImpl.java`` path for a ``...Service.java`` file."""
    if not path.endswith(".java"):
        return None
    file_name = os.path.basename(path)
    if not file_name.endswith("Service.java"):
        return None
    impl_file_name = file_name[: -len("Service.java")] + "ServiceImpl.java"
    directory = os.path.dirname(path)
    service_token = f"{os.sep}service{os.sep}"
    impl_token = f"{os.sep}service{os.sep}impl{os.sep}"
    if impl_token in path:
        return os.path.join(directory, impl_file_name)
    if service_token in path:
        head, _, tail = path.rpartition(service_token)
        moved = head + impl_token + tail
        return os.path.join(os.path.dirname(moved), impl_file_name)
    return os.path.join(directory, impl_file_name)


def build_impl_class_name(path: str) -> Optional[str]:
    if not path.endswith(".java"):
        return None
    base_name = os.path.basename(path)[: -len(".java")]
    if base_name.endswith("Impl"):
        return base_name
    return f"{base_name}Impl"


def _find_declaring_files(root: Path, name: str, keyword_pattern: str) -> List[str]:
    declaration = re.compile(rf"\b({keyword_pattern})\s+{re.escape(name)}\b")
    results: List[str] = []
    for path in find_named_files(root, [f"{name}.java"]):
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.debug("Skipping unreadable candidate %s: %s", path, exc)
            continue
        if declaration.search(content):
            results.append(str(path))
    return results


def find_impl_files(root: Path, impl_class_name: str) -> List[str]:
    """Files named ``<impl_class_name>.java`` that declare that class."""
    return _find_declaring_files(root, impl_class_name, "class")


def find_class_files(root: Path, type_name: str) -> List[str]:
    """Files named ``<type_name>.java`` declaring a class, interface or enum of that name."""
    return _find_declaring_files(root, type_name, "class|interface|enum")


# ---------------------------------------------------------------------------
# Call paths
# ---------------------------------------------------------------------------

def extract_field_type_map(lines: List[str]) -> Dict[str, str]:
    """Map of declared field name to its type with generics removed."""
    mapping: Dict[str, str] = {}
    for line in lines:
        match = FIELD_TYPE_RE.match(line)
        if match:
            mapping[match.group(4)] = strip_generics(match.group(3))
    return mapping


def extract_called_fields(snippet: str) -> List[str]:
    """Identifiers followed by ``.``, in order of first appearance."""
    seen: Dict[str, None] = {}
    for name in CALLED_FIELD_RE.findall(snippet):
        seen.setdefault(name, None)
    return list(seen)


def build_call_path_section(path: str, snippet_code: str, root: Optional[Path] = None) -> Optional[str]:
    """``field -> Type -> file`` lines for fields used in *snippet_code*."""
    if not path.endswith(".java"):
        return None
    file_path = Path(path)
    if not file_path.is_file():
        return None
    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Cannot trace call paths in %s: %s", path, exc)
        return None

    field_types = extract_field_type_map(split_lines(content))
    if root is None:
        root = search_root_for(file_path, read_package_name(content))

    entries: List[str] = []
    for field_name in extract_called_fields(snippet_code):
        type_name = field_types.get(field_name)
        if not type_name:
            continue
        class_files = find_class_files(root, type_name)
        if not class_files:
            entries.append(f"{field_name} -> {type_name} -> {NOT_FOUND}")
            continue
        for class_file in class_files:
            entries.append(f"{field_name} -> {type_name} -> {class_file}")

    if not entries:
        return None
    return "\n".join([CALL_PATH_HEADER] + entries)


# ---------------------------------------------------------------------------
# Query entry point
# ---------------------------------------------------------------------------

def _project_root_of(path: str) -> Path:
    file_path = Path(path)
    package_name = None
    if file_path.is_file():
        try:
            package_name = read_package_name(file_path.read_text(encoding="utf-8", errors="replace"))
        except OSError as exc:
            logger.debug("Cannot read package of %s: %s", path, exc)
    return search_root_for(file_path, package_name)


def implementation_candidates(path: str, root: Path) -> List[str]:
    """Distinct existing implementation files for *path*, excluding itself."""
    candidates: Dict[str, None] = {}
    impl_path = build_impl_file_path(path)
    if impl_path and os.path.isfile(impl_path):
        candidates[os.path.abspath(impl_path)] = None
    impl_class_name = build_impl_class_name(path)
    if impl_class_name:
        for impl_file in find_impl_files(root, impl_class_name):
            candidates.setdefault(os.path.abspath(impl_file), None)
    own = os.path.abspath(path)
    return [candidate for candidate in candidates if candidate != own]


def view_code_item(path: str, item_name: str) -> str:
    """Primary snippet, call paths and implementation snippets for one query."""
    sections: List[str] = []
    main = extract_snippet(path, item_name)
    sections.append(main.text)

    root = _project_root_of(path)
    if main.found:
        call_section = build_call_path_section(path, main.code, root)
        if call_section:
            sections.append(call_section)

    impl_files = implementation_candidates(path, root)
    impl_class_name = build_impl_class_name(path) or "unknown implementation"
    rank = 1
    for impl_file in impl_files:
        snippet = extract_snippet(impl_file, item_name)
        if not snippet.found:
            continue
        label = f"--- Impl match: {impl_class_name} ({rank}/{len(impl_files)}) ---"
        sections.append(f"{label}\n{snippet.text}")
        call_section = build_call_path_section(impl_file, snippet.code, root)
        if call_section:
            sections.append(call_section)
        rank += 1

    return "\n\n".join(sections)
