"""Line pattern catalog used to classify single source lines.

Each supported language owns an ordered list of :class:`LinePattern` rules.
A line is classified by the first rule whose regex matches it; a line that
matches nothing contributes nothing.  This is a heuristic scanner, not a
grammar: the catalogs favour recall over precision.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Pattern, Tuple, Union

# ---------------------------------------------------------------------------
# Language <-> file-extension mapping
# ---------------------------------------------------------------------------
LANGUAGE_MAP: Dict[str, str] = {
    ".java": "java",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".py": "python",
    ".go": "go",
}

# Languages with field rules and annotation-aware signatures.
JVM_LANGUAGES = frozenset({"java"})


@dataclass(frozen=True)
class LinePattern:
    regex: Pattern[str]
    category: str
    name_group: int = 1

    def match_name(self, line: str) -> Optional[str]:
        match = self.regex.search(line)
        if match is None:
            return None
        return match.group(self.name_group)


def _p(expr: str, category: str, name_group: int = 1) -> LinePattern:
    return LinePattern(re.compile(expr), category, name_group)


_JAVA_MODIFIERS = r"(?:public|private|protected|static|final|\s)"

_JAVA_PATTERNS: List[LinePattern] = [
    _p(_JAVA_MODIFIERS + r"*class\s+([a-zA-Z0-9_$]+)", "class"),
    _p(_JAVA_MODIFIERS + r"*interface\s+([a-zA-Z0-9_$]+)", "interface"),
    _p(
        r"(?:public|private|protected|static|final|synchronized|async|\s)+"
        r"[\w<>\[\]]+\s+([a-zA-Z0-9_$]+)\s*\([^)]*\)",
        "method",
    ),
    # private Type name; / Type name = value;
    _p(
        r"^\s*(?:private|public|protected|static|final)*\s+[\w<>\[\]]+\s+"
        r"([a-zA-Z0-9_$]+)\s*(?:=\s*[^;]+)?\s*;",
        "field",
    ),
]

_SCRIPT_PATTERNS: List[LinePattern] = [
    _p(r"class\s+([a-zA-Z0-9_$]+)", "class"),
    _p(r"interface\s+([a-zA-Z0-9_$]+)", "interface"),
    _p(r"(?:async\s+)?function\s+([a-zA-Z0-9_$]+)", "function"),
    _p(r"([a-zA-Z0-9_$]+)\s*(?::\s*[^=]+)?\s*=\s*(?:async\s*)?\([^)]*\)\s*=>", "function"),
    _p(
        r"^\s*(?:public|private|protected|static|async)*\s*([a-zA-Z0-9_$]+)\s*\([^)]*\)\s*(?::|{)",
        "method",
    ),
]

_PYTHON_PATTERNS: List[LinePattern] = [
    _p(r"^class\s+([a-zA-Z0-9_$]+)", "class"),
    _p(r"^\s*def\s+([a-zA-Z0-9_$]+)", "function"),
]

_GO_PATTERNS: List[LinePattern] = [
    _p(r"^type\s+([a-zA-Z0-9_$]+)\s+struct", "class"),
    _p(r"^type\s+([a-zA-Z0-9_$]+)\s+interface", "interface"),
    _p(r"^func\s+([a-zA-Z0-9_$]+)\s*\(", "function"),
    _p(r"^func\s+\([^)]+\)\s+([a-zA-Z0-9_$]+)\s*\(", "method"),
]

_CATALOG: Dict[str, List[LinePattern]] = {
    "java": _JAVA_PATTERNS,
    "typescript": _SCRIPT_PATTERNS,
    "javascript": _SCRIPT_PATTERNS,
    "python": _PYTHON_PATTERNS,
    "go": _GO_PATTERNS,
}


def patterns_for(language: str) -> List[LinePattern]:
    """Return the ordered rules for *language* (empty for unknown languages)."""
    return list(_CATALOG.get(language, []))


def language_for_path(path: Union[str, Path]) -> Optional[str]:
    return LANGUAGE_MAP.get(Path(path).suffix.lower())


def extension_of(path: Union[str, Path]) -> str:
    """Lowercase extension without the leading dot."""
    return Path(path).suffix.lower().lstrip(".")


def is_jvm_language(language: Optional[str]) -> bool:
    return language in JVM_LANGUAGES


def classify_line(line: str, patterns: List[LinePattern]) -> Optional[Tuple[LinePattern, str]]:
    """Return ``(pattern, name)`` for the first rule matching *line*."""
    for pattern in patterns:
        name = pattern.match_name(line)
        if name is not None:
            return pattern, name
    return None
