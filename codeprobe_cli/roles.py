"""Architectural roles and model-like classification of Java files.

Both are pure functions of path and class-name vocabulary so they can be
tested without touching the disk.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Tuple


class ArchRole(IntEnum):
    """Reading order of files along a typical request path."""

    ENTRY = 1
    SERVICE = 2
    IMPLEMENTATION = 3
    MESSAGING = 4
    PERSISTENCE = 5
    DATA_MODEL = 6
    OTHER = 10


_MESSAGING_TOKENS = ("mq", "listener", "consumer", "producer")
_PERSISTENCE_TOKENS = ("mapper", "repository", "dao")
_DATA_MODEL_TOKENS = ("dto", "vo", "entity", "model")

MODEL_DIRECTORIES: Tuple[str, ...] = (
    "dto", "vo", "entity", "model", "po", "bo",
    "query", "request", "response", "enums", "enum",
)
MODEL_SUFFIXES: Tuple[str, ...] = (
    "dto", "vo", "entity", "model", "po", "bo",
    "query", "request", "response", "enum",
)


def role_of(path: str) -> ArchRole:
    lowered = path.lower()
    if "controller" in lowered or "api" in lowered:
        return ArchRole.ENTRY
    if "service" in lowered and "impl" not in lowered:
        return ArchRole.SERVICE
    if "impl" in lowered:
        return ArchRole.IMPLEMENTATION
    if any(token in lowered for token in _MESSAGING_TOKENS):
        return ArchRole.MESSAGING
    if any(token in lowered for token in _PERSISTENCE_TOKENS):
        return ArchRole.PERSISTENCE
    if any(token in lowered for token in _DATA_MODEL_TOKENS):
        return ArchRole.DATA_MODEL
    return ArchRole.OTHER


def sort_by_role(paths: Iterable[str]) -> List[str]:
    """Stable sort: entry layer first, unrecognised roles last."""
    return sorted(paths, key=role_of)


def is_model_like(simple_name: str, path: str) -> bool:
    """True for data holders (DTO, VO, entity, ...) by directory or class suffix."""
    normalized = path.replace("\\", "/").lower()
    if any(f"/{directory}/" in normalized for directory in MODEL_DIRECTORIES):
        return True
    lowered = simple_name.lower()
    return lowered.endswith(MODEL_SUFFIXES)
