"""
FastAPI application for the SoulSeed ai-service.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import Settings, load_dotenv
from .routes import router, set_guidance_service
from .service import GuidanceService

# Configure logging to show INFO from soulseed modules
logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")
logging.getLogger("soulseed").setLevel(logging.INFO)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_dotenv()
    settings = Settings.from_env()
    logger.info(
        f"[aiService] provider={settings.provider} model={settings.model or '(unset)'} "
        f"api_key={'present' if settings.api_key else 'missing'}"
    )
    set_guidance_service(GuidanceService.from_settings(settings))
    yield
    set_guidance_service(None)


app = FastAPI(
    title="SoulSeed AI Service",
    description="Supportive, structured guidance for short journal entries",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    issues = [
        {
            "path": ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "_root",
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"message": "Invalid body", "issues": issues}),
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception(f"[aiService] Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/health-check")
async def health_check():
    return {"status": "success", "message": "OK"}
