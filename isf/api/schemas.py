"""
Pydantic schemas for the HTTP contract.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, validator


class ParseRequest(BaseModel):
    source: str = Field(validation_alias=AliasChoices("source", "glsl", "code"))
    model_config = ConfigDict(populate_by_name=True)

    @validator("source", pre=True)
    def _require_text(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError("source must be a string")
        return value


class ShaderModel(BaseModel):
    id: str
    name: str
    metadata: Dict[str, Any]


class ShaderFailureModel(BaseModel):
    id: str
    error: str
    detail: str


class ShaderCollection(BaseModel):
    shaders: List[ShaderModel] = Field(default_factory=list)
    failures: List[ShaderFailureModel] = Field(default_factory=list)
