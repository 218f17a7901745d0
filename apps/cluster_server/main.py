"""FastAPI server exposing incident clustering for map overlays."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .schemas.models import ClusterRequest
from .tools.clusters import build_config, run_clustering
from src.hotspots import ClusteringConfig


logger = logging.getLogger(__name__)

app = FastAPI(title="Incident Hotspot Cluster Server", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


def _load_config(profile: Optional[str]) -> ClusteringConfig:
    try:
        return ClusteringConfig.from_profile(profile)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/actions/cluster")
async def cluster_action(request: ClusterRequest) -> Dict[str, Any]:
    base = _load_config(request.profile)

    try:
        config = build_config(request, base)
        response = run_clustering(request, config)
    except ValueError as exc:
        logger.info("Rejected cluster request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return response.model_dump(by_alias=True)
