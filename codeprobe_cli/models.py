"""Core data models shared by the outline, resolver and locator layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class OutlineItem:
    name: str
    category: str
    start_line: int
    end_line: Optional[int] = None
    signature: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.category,
            "startLine": self.start_line,
        }
        if self.end_line is not None:
            data["endLine"] = self.end_line
        data["signature"] = self.signature
        return data


@dataclass(frozen=True)
class BlockRange:
    """Inclusive 0-based line span of a definition block."""

    start: int
    end: int


@dataclass(frozen=True)
class ResolvedImport:
    qualified_name: str
    absolute_path: str

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ModelField:
    name: str
    type: str
    comment: str = ""


@dataclass
class SnippetResult:
    found: bool
    text: str
    code: str = ""
    start_line: Optional[int] = None
    end_line: Optional[int] = None
