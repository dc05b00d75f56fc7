"""Request records of the three analysis tools (Pydantic v2)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OutlineRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    absolute_paths: List[str] = Field(
        ..., alias="AbsolutePaths", min_length=1,
        description="List of absolute paths for target files.",
    )


class FullContextRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    absolute_paths: List[str] = Field(
        ..., alias="AbsolutePaths", min_length=1,
        description="Absolute paths of files to analyze.",
    )
    start_line: int = Field(default=1, alias="StartLine", ge=1, description="First line of the source window (1-based).")
    end_line: Optional[int] = Field(default=None, alias="EndLine", ge=1, description="Last line of the source window.")


class CodeItemQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str = Field(..., alias="File", description="Absolute path of the file")
    item_name: str = Field(
        ..., alias="ItemName", min_length=1,
        description="Exact name of the code item to locate (e.g. class 'UserService' or method 'findUser')",
    )


class CodeItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[CodeItemQuery] = Field(..., alias="Items", min_length=1, description="List of code items to query.")
