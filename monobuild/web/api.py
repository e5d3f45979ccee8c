"""FastAPI routes exposing print and diff."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from monobuild.analysis import ScopeError
from monobuild.git import GitError
from monobuild.manifests import ManifestError
from monobuild.models import (
    DiffMode,
    MonobuildConfig,
    OutputFormat,
    OutputOptions,
    OutputType,
    Scope,
)
from monobuild.pipeline import format_output, run_diff, run_print

router = APIRouter(prefix="/api")


# --- Request / Response models ---

class PrintRequest(BaseModel):
    root: str
    dependency_files: str = "**/Dependencies"
    scope: str | None = None
    top_level: bool = False
    format: OutputFormat = OutputFormat.TEXT
    type: OutputType = OutputType.SCHEDULE


class DiffRequest(PrintRequest):
    # when omitted, changed files come from git in ``root``
    changed_files: list[str] | None = None
    main_branch: bool = False
    base_branch: str = "master"
    base_commit: str = "HEAD^1"
    rebuild_strong: bool = False


class SelectionResponse(BaseModel):
    components: list[str]
    output: str


# --- Helpers ---

def _validate_root(p: str) -> Path:
    resolved = Path(p).expanduser().resolve()
    if not resolved.is_dir():
        raise HTTPException(404, f"Directory not found: {resolved}")
    if not resolved.is_relative_to(Path.home().resolve()):
        raise HTTPException(403, "Path must be under your home directory")
    return resolved


def _config(req: PrintRequest) -> MonobuildConfig:
    return MonobuildConfig(
        root=_validate_root(req.root),
        dependency_files=req.dependency_files,
        scope=Scope(component=req.scope, top_level=req.top_level),
    )


async def _respond(pipeline, req: PrintRequest) -> SelectionResponse:
    try:
        result = await asyncio.to_thread(pipeline)
    except ManifestError as e:
        raise HTTPException(422, {"message": e.message, "errors": e.errors})
    except ScopeError as e:
        raise HTTPException(400, str(e))
    except GitError as e:
        raise HTTPException(502, str(e))

    options = OutputOptions(format=req.format, type=req.type)
    return SelectionResponse(components=result.selection, output=format_output(result, options))


# --- Endpoints ---

@router.post("/print", response_model=SelectionResponse)
async def print_graph(req: PrintRequest):
    config = _config(req)
    return await _respond(lambda: run_print(config), req)


@router.post("/diff", response_model=SelectionResponse)
async def diff(req: DiffRequest):
    config = _config(req)
    config.base_branch = req.base_branch
    config.base_commit = req.base_commit
    config.rebuild_strong = req.rebuild_strong

    if req.changed_files is not None:
        config.mode = DiffMode.DIRECT
        config.changed_files = list(req.changed_files)
    elif req.main_branch:
        config.mode = DiffMode.MAIN_BRANCH

    return await _respond(lambda: run_diff(config), req)
