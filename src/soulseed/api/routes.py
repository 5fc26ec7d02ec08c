"""
REST API routes for the SoulSeed ai-service.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter

from ..config import Settings
from .schemas import GuidanceData, StatusResponse, UnpackRequest, UnpackResponse
from .service import GuidanceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai")

# Global guidance service (initialized in app.py lifespan)
guidance_service: Optional[GuidanceService] = None


def get_guidance_service() -> GuidanceService:
    global guidance_service
    if guidance_service is None:
        guidance_service = GuidanceService.from_settings(Settings.from_env())
    return guidance_service


def set_guidance_service(service: Optional[GuidanceService]) -> None:
    global guidance_service
    guidance_service = service


@router.get("/ping")
async def ping():
    return {"ok": True, "from": "aiRoutes"}


@router.get("/status", response_model=StatusResponse)
async def status():
    """Which guidance strategy is active and whether the LLM is usable."""
    return StatusResponse(**get_guidance_service().status())


# Sync handler: provider calls block, so FastAPI runs this on its thread pool.
@router.post("/unpack", response_model=UnpackResponse)
def unpack(request: UnpackRequest):
    """Unpack free text into signals, suggestions, questions and guidance."""
    mode = (request.context.mode if request.context else None) or "journal"
    logger.info(f"[/api/ai/unpack] {len(request.text)} chars, mode={mode}")
    result = get_guidance_service().unpack(request.text, mode=mode)
    return UnpackResponse(result=GuidanceData(**result.to_dict()))
