# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Request and response models for the transform service.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..patching.pipeline import Phase


class ResolveRequest(BaseModel):
    id: str = Field(..., description="Import specifier as seen by the host tool")


class ResolveResponse(BaseModel):
    id: Optional[str] = Field(None, description="Resolved path, or null to fall through")


class LoadRequest(BaseModel):
    id: str = Field(..., description="Resolved module identity")


class LoadResponse(BaseModel):
    code: Optional[str] = Field(None, description="Module text, or null to fall through")


class TransformRequest(BaseModel):
    id: str = Field(..., description="Absolute module path")
    code: str = Field(..., description="Current module text")
    phase: Optional[Phase] = Field(None, description="Run only the stages of this phase")


class TransformResponse(BaseModel):
    changed: bool
    code: str
    map: Optional[Dict[str, Any]] = None
    delta: int = Field(0, description="Characters added by the patch")
