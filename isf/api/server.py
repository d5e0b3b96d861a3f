"""
FastAPI service exposing ISF metadata.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Path as PathParam
from fastapi.middleware.cors import CORSMiddleware

from ..config import ISFConfig
from ..errors import MalformedMetadata, NoCommentFound, UnreadableShader
from ..loader import SHADER_SUFFIXES, ISFShader, scan_directory
from ..parser import parse
from . import schemas

LOG = logging.getLogger(__name__)


def create_app(
    *,
    config: Optional[ISFConfig] = None,
    lifespan: Optional[Callable[..., object]] = None,
) -> FastAPI:
    settings = config or ISFConfig.load()

    app = FastAPI(title="ISF Metadata API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz() -> dict:
        return {"status": "ok"}

    @app.post("/isf/parse")
    async def parse_source(payload: schemas.ParseRequest) -> dict:
        try:
            isf = parse(payload.source)
        except NoCommentFound as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except MalformedMetadata as exc:
            raise HTTPException(status_code=422, detail=exc.errors()) from exc
        return isf.to_dict()

    @app.get("/isf/shaders", response_model=schemas.ShaderCollection)
    async def list_shaders() -> schemas.ShaderCollection:
        try:
            result = await asyncio.to_thread(scan_directory, settings.shader_dir)
        except NotADirectoryError as exc:
            LOG.warning("Shader directory %s is missing", settings.shader_dir)
            raise HTTPException(status_code=404, detail="shader directory not found") from exc
        return schemas.ShaderCollection(
            shaders=[shader.to_dict() for shader in result.shaders],
            failures=[failure.to_dict() for failure in result.failures],
        )

    @app.get("/isf/shaders/{shader_id}", response_model=schemas.ShaderModel)
    async def get_shader(shader_id: str = PathParam(..., min_length=1)) -> schemas.ShaderModel:
        path = _resolve_shader_path(settings.shader_dir, shader_id)
        if path is None:
            raise HTTPException(status_code=404, detail=f"Shader '{shader_id}' not found")
        try:
            shader = await asyncio.to_thread(ISFShader.load, path)
        except FileNotFoundError as exc:
            raise HTTPException(status_code=404, detail=f"Shader '{shader_id}' not found") from exc
        except NoCommentFound as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except MalformedMetadata as exc:
            raise HTTPException(status_code=422, detail=exc.errors()) from exc
        except UnreadableShader as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return schemas.ShaderModel(**shader.to_dict())

    return app


def _resolve_shader_path(shader_dir: Path, shader_id: str) -> Optional[Path]:
    candidate = Path(shader_id)
    if candidate.name != shader_id or candidate.suffix.lower() not in SHADER_SUFFIXES:
        return None
    return shader_dir / candidate.name
