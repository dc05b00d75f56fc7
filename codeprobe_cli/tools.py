"""Batch entry points: one validated request in, one text document out.

Each tool accepts either a mapping or its JSON text.  A request that fails
validation produces a single top-level error and nothing is processed.
Inside a valid request every entry is handled independently, so one bad
path never hides the results of the others.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .batch import run_batch
from .code_item import view_code_item
from .full_context import FILE_SEPARATOR, render_file_context
from .outline import outline_file
from .roles import sort_by_role
from .schemas import CodeItemQuery, CodeItemRequest, FullContextRequest, OutlineRequest

logger = logging.getLogger(__name__)

ITEM_SEPARATOR = "\n\n" + "=" * 30 + "\n\n"

Payload = Union[str, bytes, Dict[str, Any]]
M = TypeVar("M", bound=BaseModel)


def describe_validation_error(exc: ValidationError) -> str:
    """One-line summary of the first few validation problems."""
    problems = []
    for error in exc.errors()[:3]:
        location = ".".join(str(part) for part in error.get("loc", ())) or "request"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "Invalid request: " + "; ".join(problems)


def _parse(model: Type[M], payload: Payload) -> M:
    if isinstance(payload, (str, bytes)):
        return model.model_validate_json(payload)
    return model.model_validate(payload)


def _json_error(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

def view_files_outlines(payload: Payload) -> str:
    """JSON array of per-file outlines, in request order."""
    try:
        request = _parse(OutlineRequest, payload)
    except ValidationError as exc:
        logger.info("Rejected outline request with %d validation errors", exc.error_count())
        return _json_error(describe_validation_error(exc))

    results = run_batch(
        outline_file,
        request.absolute_paths,
        on_error=lambda path, exc: {"path": path, "error": str(exc)},
    )
    return json.dumps(results, indent=2, ensure_ascii=False)


def view_files_full_context(payload: Payload) -> str:
    """Full-context blocks of every file, ordered by architectural role."""
    try:
        request = _parse(FullContextRequest, payload)
    except ValidationError as exc:
        logger.info("Rejected full-context request with %d validation errors", exc.error_count())
        return f"Error: {describe_validation_error(exc)}"

    paths = sort_by_role(request.absolute_paths)
    blocks = run_batch(
        lambda path: render_file_context(path, request.start_line, request.end_line),
        paths,
        on_error=lambda path, exc: f"--- [ERROR] Reading {path} ---\n{exc}",
    )
    return FILE_SEPARATOR.join(blocks)


def _view_query(query: CodeItemQuery) -> str:
    return view_code_item(query.file, query.item_name)


def view_code_items(payload: Payload) -> str:
    """Definition snippets (plus implementations and call paths) of every item."""
    try:
        request = _parse(CodeItemRequest, payload)
    except ValidationError as exc:
        logger.info("Rejected code-item request with %d validation errors", exc.error_count())
        return _json_error(describe_validation_error(exc))

    blocks = run_batch(
        _view_query,
        request.items,
        on_error=lambda query, exc: f"--- File: {query.file} (error: {exc}) ---",
    )
    return ITEM_SEPARATOR.join(blocks)


TOOLS: Dict[str, Callable[[Payload], str]] = {
    "view_files_outlines": view_files_outlines,
    "view_files_full_context": view_files_full_context,
    "view_code_items": view_code_items,
}


def tool_names() -> List[str]:
    return sorted(TOOLS)
