# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Plugin hook router.

Exposes the pipeline's resolveId / load / transform hooks so a thin host
build plugin can forward its hook calls here.
"""

import logging

from fastapi import APIRouter, HTTPException

from ..patching import get_session, pipeline
from ..structures.schemas import (
    LoadRequest,
    LoadResponse,
    ResolveRequest,
    ResolveResponse,
    TransformRequest,
    TransformResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Plugin Hooks"],
    responses={404: {"description": "Not found"}},
)


@router.post("/resolve", response_model=ResolveResponse)
def resolve_id(request: ResolveRequest):
    """Resolve a virtual helper import to its file path."""
    return ResolveResponse(id=pipeline.resolve_id(get_session(), request.id))


@router.post("/load", response_model=LoadResponse)
def load(request: LoadRequest):
    """Serve the text of a resolved virtual helper module."""
    return LoadResponse(code=pipeline.load(get_session(), request.id))


@router.post("/transform", response_model=TransformResponse)
def transform(request: TransformRequest):
    """
    Patch one module.

    Unchanged modules come back with ``changed: false`` and the input text.
    Runs in the threadpool since patching large aggregate files is CPU bound.
    """
    try:
        result = pipeline.transform(get_session(), request.id, request.code, request.phase)
    except ValueError as e:
        logger.error(f"Transform failed for {request.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Transform failed: {e}")

    if result is None:
        return TransformResponse(changed=False, code=request.code)

    return TransformResponse(
        changed=True,
        code=result.text,
        map=result.map,
        delta=result.position_map.delta,
    )
