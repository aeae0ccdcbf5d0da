"""Data models for files extracted from a history window."""

from typing import List

from pydantic import BaseModel, Field


class LineInfo(BaseModel):
    """A single surviving line of a file in the checked-out working copy."""

    line_number: int = Field(..., description="1-based line number")
    content: str = Field(..., description="Line content without the trailing newline")


class FileChangeRecord(BaseModel):
    """A file changed within the analysis window that still exists at the until-date."""

    file_path: str = Field(..., description="Repository-relative path reported by the diff")
    changed_lines: List[int] = Field(
        default_factory=list,
        description="New-side line numbers touched by the diff hunks",
    )
    lines: List[LineInfo] = Field(
        default_factory=list,
        description="Surviving file content (only when contents are read)",
    )

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "file_path": "src/app.txt",
                "changed_lines": [1, 2, 3],
                "lines": [{"line_number": 1, "content": "hello"}],
            }
        }
