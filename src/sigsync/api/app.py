"""sigsync HTTP API (FastAPI).

This module is optional and requires the `api` extra.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sigsync.client import SigsyncClient
from sigsync.core.config import SigsyncConfig


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


class CheckRequest(BaseModel):
    path: str = Field(..., description="Project root path on filesystem")


class FixRequest(BaseModel):
    path: str = Field(..., description="Project root path on filesystem")
    dry_run: bool = Field(default=True, description="Compute repairs without writing files")
    method: str | None = Field(default=None, description="Only repair methods with this name")


def create_app(config: SigsyncConfig | None = None) -> FastAPI:
    client = SigsyncClient(config)

    app = FastAPI(
        title="sigsync API",
        version="0.1.0",
    )

    def _project_root(path: str) -> Path:
        root = Path(path)
        if not root.is_dir():
            raise HTTPException(status_code=404, detail=f"Project directory not found: {path}")
        return root

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "language": client.adapter.language_type.value}

    @app.post("/check")
    def check(req: CheckRequest) -> JSONResponse:
        result = client.check(_project_root(req.path))
        if not result.success:
            raise HTTPException(status_code=400, detail=result.errors)
        content = result.to_report().model_dump(mode="json")
        content["documents_count"] = result.documents_count
        content["types_count"] = result.types_count
        content["methods_count"] = result.methods_count
        return JSONResponse(content=content)

    @app.post("/fix")
    def fix(req: FixRequest) -> JSONResponse:
        result = client.fix(_project_root(req.path), dry_run=req.dry_run, method=req.method)
        if not result.success:
            raise HTTPException(status_code=400, detail=result.errors)
        return JSONResponse(content=_to_jsonable(result))

    return app
