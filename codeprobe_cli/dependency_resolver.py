"""Resolve project-local Java imports to files on disk.

Only imports sharing the file's two-segment package prefix (``com.example``)
are considered; framework and third-party imports are never looked up.
Resolution tries, in order:

* the conventional source root of the project root (``src/main/java``),
* the source roots of nested modules (sorted walk, first hit wins),
* for simple names imported exactly once and still unresolved, a
  project-wide search by file name that reports each hit under its own
  declared package.

Unreadable candidates are skipped; nothing here raises for missing files.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .models import ModelField, ResolvedImport
from .project_layout import (
    MODULE_SOURCE_ROOT,
    find_named_files,
    ignored_dir_names,
    is_ignored_dir,
    read_package_name,
)

logger = logging.getLogger(__name__)

IMPORT_RE = re.compile(r"import\s+([^;]+);")
INJECTED_FIELD_RE = re.compile(r"private\s+(?:final\s+)?([A-Z][a-zA-Z0-9_<>,\s?]+)\s+([a-zA-Z0-9]+)\s*;")
MODEL_FIELD_RE = re.compile(
    r"^(?:public|protected|private)?\s*(?:static\s+)?(?:final\s+)?"
    r"([\w<>,\s\[\]?]+)\s+([a-zA-Z0-9_$]+)\s*(?:=.*)?;"
)
GENERIC_RE = re.compile(r"<.*>")

# Types that are plain values rather than collaborators
SCALAR_TYPES = frozenset({
    "String", "Integer", "Long", "BigDecimal", "BigInteger", "Date",
    "LocalDate", "LocalDateTime", "LocalTime", "Duration", "Boolean",
    "boolean", "int", "long", "double", "float",
})
CONTAINER_TYPES = frozenset({"List", "Map", "Set"})

# Leading words of statements that the field regex would otherwise accept
_STATEMENT_WORDS = frozenset({
    "return", "throw", "package", "import", "break", "continue", "yield",
    "new", "else", "case", "goto", "assert",
})


@dataclass
class ImportScan:
    """Outcome of resolving the imports of one file."""

    resolved: List[ResolvedImport] = field(default_factory=list)
    fallback: List[ResolvedImport] = field(default_factory=list)

    @property
    def all_imports(self) -> List[ResolvedImport]:
        return self.resolved + self.fallback


# ---------------------------------------------------------------------------
# Import parsing
# ---------------------------------------------------------------------------

def project_prefix(package_name: str) -> str:
    """First two package segments, e.g. ``com.example`` for ``com.example.web``."""
    return ".".join(package_name.split(".")[:2])


def parse_imports(content: str) -> List[str]:
    """Qualified names of every ``import ...;`` declaration, in source order."""
    return [match.strip() for match in IMPORT_RE.findall(content)]


def is_project_import(qualified_name: str, prefix: str) -> bool:
    return qualified_name.startswith(prefix + ".") and ".annotation." not in qualified_name


def _simple_name(qualified_name: str) -> str:
    return qualified_name.rsplit(".", 1)[-1]


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------

def _relative_class_path(qualified_name: str) -> Path:
    parts = qualified_name.split(".")
    return Path(*parts[:-1], parts[-1] + ".java")


def _find_in_modules(directory: Path, relative: Path, ignore: Set[str]) -> Optional[Path]:
    try:
        children = sorted(
            child for child in directory.iterdir() if child.is_dir() and not child.is_symlink()
        )
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)
        return None
    for child in children:
        source_root = child / MODULE_SOURCE_ROOT
        if source_root.is_dir():
            target = source_root / relative
            if target.is_file():
                return target
        elif not is_ignored_dir(child.name, ignore):
            found = _find_in_modules(child, relative, ignore)
            if found is not None:
                return found
    return None


def resolve_import(root: Optional[Path], qualified_name: str) -> Optional[Path]:
    """Absolute path of *qualified_name* under *root*, or ``None``."""
    if root is None:
        return None
    relative = _relative_class_path(qualified_name)
    for candidate in (root / MODULE_SOURCE_ROOT / relative, root / relative):
        if candidate.is_file():
            return candidate
    return _find_in_modules(root, relative, ignored_dir_names())


def resolve_by_simple_names(root: Optional[Path], simple_names: Sequence[str]) -> List[ResolvedImport]:
    """Project-wide lookup of ``<Name>.java`` files, keyed by their declared package."""
    if root is None or not simple_names:
        return []
    wanted = {f"{name}.java" for name in simple_names if name and name != "*"}
    results: List[ResolvedImport] = []
    seen: Set[str] = set()
    for path in find_named_files(root, wanted):
        try:
            package_name = read_package_name(path.read_text(encoding="utf-8", errors="replace"))
        except OSError as exc:
            logger.debug("Skipping unreadable candidate %s: %s", path, exc)
            continue
        if not package_name:
            continue
        qualified_name = f"{package_name}.{path.stem}"
        if qualified_name in seen:
            continue
        seen.add(qualified_name)
        results.append(ResolvedImport(qualified_name, str(path)))
    return results


def resolve_project_imports(content: str, root: Optional[Path]) -> ImportScan:
    """Resolve the project-local imports of one Java source text."""
    scan = ImportScan()
    package_name = read_package_name(content)
    if not package_name:
        return scan
    prefix = project_prefix(package_name)

    seen: Set[str] = set()
    import_counts: Dict[str, int] = {}
    for qualified_name in parse_imports(content):
        if not is_project_import(qualified_name, prefix):
            continue
        if qualified_name in seen:
            continue
        resolved = resolve_import(root, qualified_name)
        if resolved is not None:
            scan.resolved.append(ResolvedImport(qualified_name, str(resolved)))
            seen.add(qualified_name)
        else:
            logger.debug("Import %s not found under %s", qualified_name, root)
        simple_name = _simple_name(qualified_name)
        import_counts[simple_name] = import_counts.get(simple_name, 0) + 1

    unresolved = [
        name for name, count in import_counts.items()
        if count <= 1 and not any(item.qualified_name.endswith("." + name) for item in scan.resolved)
    ]
    for item in resolve_by_simple_names(root, unresolved):
        if item.qualified_name not in seen:
            scan.fallback.append(item)
            seen.add(item.qualified_name)
    return scan


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------

def strip_generics(type_name: str) -> str:
    return GENERIC_RE.sub("", type_name).strip()


def is_likely_injected_type(raw_type: str) -> bool:
    """Whether a field type looks like a collaborator rather than a value."""
    type_name = re.sub(r"\s+", " ", raw_type)
    base_type = strip_generics(type_name)
    if base_type in SCALAR_TYPES:
        return False
    if base_type in CONTAINER_TYPES:
        generic = re.search(r"<([^>]+)>", type_name)
        if not generic:
            return False
        return any(is_likely_injected_type(part.strip()) for part in generic.group(1).split(","))
    return True


def find_injected_fields(content: str) -> List[Tuple[str, str]]:
    """``(type, name)`` of private fields that look dependency-injected."""
    fields: List[Tuple[str, str]] = []
    for match in INJECTED_FIELD_RE.finditer(content):
        type_name = match.group(1).strip()
        if is_likely_injected_type(type_name):
            fields.append((type_name, match.group(2)))
    return fields


def _split_trailing_comment(line: str) -> Tuple[str, str]:
    """Split ``code; // comment`` after the last statement terminator."""
    end = line.rfind(";")
    if end == -1:
        return line, ""
    rest = line[end + 1:].strip()
    if not rest.startswith("//"):
        return line, ""
    return line[:end + 1], rest[2:].strip()


def _is_declaration(type_text: str) -> bool:
    words = type_text.split()
    return bool(words) and words[0] not in _STATEMENT_WORDS


def extract_model_fields(content: str) -> List[ModelField]:
    """Field declarations of a data class with their nearest comment.

    A block (``/** */``) or line (``//``) comment is held until the next field
    consumes it.  Annotation and blank lines keep it; any other line (class
    headers, braces, statements, method headers) drops it.  A ``//`` comment
    on the field's own line wins.
    """
    lines = content.split("\n")
    results: List[ModelField] = []
    pending = ""

    i = 0
    while i < len(lines):
        trimmed = lines[i].strip()

        if trimmed.startswith("/**") or trimmed.startswith("/*"):
            buffer = [trimmed.replace("/**", "", 1).replace("/*", "", 1).strip()]
            j = i
            if "*/" in trimmed:
                buffer = [buffer[0].replace("*/", "").strip()]
            else:
                j = i + 1
                while j < len(lines):
                    block_line = lines[j].strip()
                    if "*/" in block_line:
                        buffer.append(block_line.replace("*/", "").replace("*", "", 1).strip())
                        break
                    buffer.append(block_line.replace("*", "", 1).strip())
                    j += 1
            pending = " ".join(part for part in buffer if part)
            i = j + 1
            continue

        if trimmed.startswith("//"):
            pending = trimmed[2:].strip()
            i += 1
            continue

        if trimmed.startswith("@"):
            i += 1
            continue

        if not trimmed:
            i += 1
            continue

        code, trailing = _split_trailing_comment(trimmed)
        match = None if "(" in code else MODEL_FIELD_RE.match(code)
        if match and _is_declaration(match.group(1)):
            results.append(ModelField(
                name=match.group(2).strip(),
                type=match.group(1).strip(),
                comment=trailing or pending,
            ))
        pending = ""
        i += 1

    return results
