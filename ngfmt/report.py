"""
JSON-отчёты CLI (detect, list files).

Поля сериализуются в camelCase: model_dump(by_alias=True).
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DetectReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    path: str
    detected: bool
    indent_size: int = Field(alias="indentSize")
    use_spaces: bool = Field(alias="useSpaces")
    config_path: Optional[str] = Field(default=None, alias="configPath")


class FileList(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    root: str
    files: List[str] = Field(default_factory=list)
    config_path: Optional[str] = Field(default=None, alias="configPath")


__all__ = ["DetectReport", "FileList"]
