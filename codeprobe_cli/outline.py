"""Structural outlines built from the line pattern catalog."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import OutlineItem
from .patterns import classify_line, extension_of, is_jvm_language, language_for_path, patterns_for

logger = logging.getLogger(__name__)


def split_lines(content: str) -> List[str]:
    """Split on ``\\n`` only, keeping any ``\\r`` so line numbers match the file."""
    return content.split("\n")


def collect_annotations(lines: List[str], index: int) -> List[str]:
    """Annotation lines stacked directly above *index*, top to bottom.

    Comment continuation lines (``*`` and ``//``) are stepped over; a blank
    line or any other text ends the stack.
    """
    annotations: List[str] = []
    j = index - 1
    while j >= 0:
        previous = lines[j].strip()
        if previous.startswith("@"):
            annotations.insert(0, previous)
        elif previous.startswith("*") or previous.startswith("//"):
            pass
        else:
            break
        j -= 1
    return annotations


def find_outline_end(lines: List[str], index: int) -> int:
    """1-based end line found by per-line brace balancing from *index*.

    A block that never closes ends on the last line of the file.
    """
    balance = 0
    seen_open = False
    end_line = index + 1
    for k in range(index, len(lines)):
        line = lines[k]
        opens = line.count("{")
        if opens:
            seen_open = True
        balance += opens - line.count("}")
        end_line = k + 1
        if seen_open and balance <= 0:
            break
    return end_line


def parse_outline(content: str, language: Optional[str]) -> List[OutlineItem]:
    """Return the outline items of *content* in top-to-bottom order."""
    patterns = patterns_for(language or "")
    if not patterns:
        return []

    lines = split_lines(content)
    jvm = is_jvm_language(language)
    items: List[OutlineItem] = []

    for index, line in enumerate(lines):
        hit = classify_line(line, patterns)
        if hit is None:
            continue
        pattern, name = hit

        signature = line.strip()
        if jvm:
            annotations = collect_annotations(lines, index)
            if annotations:
                signature = " ".join(annotations) + " " + signature

        start_line = index + 1
        end_line = start_line
        if pattern.category != "field":
            end_line = find_outline_end(lines, index)

        items.append(OutlineItem(
            name=name,
            category=pattern.category,
            start_line=start_line,
            end_line=end_line,
            signature=signature,
        ))

    return items


def outline_file(path: str) -> Dict[str, Any]:
    """Outline one file; failures are reported in the result, never raised."""
    file_path = Path(path)
    if not file_path.is_file():
        return {"path": path, "error": "File does not exist or is not a regular file"}

    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return {"path": path, "error": f"Outline failed: {exc}"}

    outline = parse_outline(content, language_for_path(file_path))
    logger.debug("Outlined %s: %d items", path, len(outline))
    return {
        "path": path,
        "language": extension_of(file_path),
        "totalItems": len(outline),
        "outline": [item.to_dict() for item in outline],
    }


def shallow_outline(content: str, language: str = "java") -> List[OutlineItem]:
    """Outline without field entries, as listed for dependency classes."""
    return [item for item in parse_outline(content, language) if item.category != "field"]
