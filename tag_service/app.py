"""
Tag Service - FastAPI application for price tag PDF generation.

Provides the tag endpoint used by the form client and a health check.
Rendering is CPU-bound and runs in a worker thread, bounded by a semaphore.
"""

import asyncio
import logging
import os
from datetime import datetime
from io import BytesIO
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from . import __version__
from .config import get_settings, validate_config_on_startup
from .errors import RenderError, TagValidationError
from .models import HealthResponse, TagPDFRequest, TagRequest
from .pdf_helpers import build_tag_filename
from .renderer import get_renderer, render_tag

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

# Validate configuration at startup
validate_config_on_startup()
settings = get_settings()

MAX_CONCURRENT_RENDERS = settings.max_concurrent_renders

app = FastAPI(
    title="Tag Service",
    version=__version__,
    description="Price tag PDF generation with CODE128 barcodes"
)

if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Semaphore for rate limiting
_render_semaphore = asyncio.Semaphore(MAX_CONCURRENT_RENDERS)

# Renderer readiness state
_renderer_ready = False
_renderer_error: Optional[str] = None

RENDER_FAILED_MESSAGE = "Failed to generate PDF"


# ============================================================================
# Startup Event - Validate Renderer
# ============================================================================

@app.on_event("startup")
async def validate_renderer_on_startup():
    """
    Build the renderer and render a sample tag.

    This resolves fonts and the template once, and ensures the service won't
    report as healthy if tags can't actually be rendered.
    """
    global _renderer_ready, _renderer_error

    logger.info("Tag Service starting - validating renderer...")

    try:
        sample = TagRequest.create(product_name="Health Check", sku="0000000000000", price="0")
        test_pdf = await asyncio.to_thread(render_tag, sample)

        if test_pdf:
            _renderer_ready = True
            logger.info(f"✅ Renderer validation successful - generated {len(test_pdf)} byte test PDF")
        else:
            _renderer_error = "Test tag render returned empty result"
            logger.error(f"❌ Renderer validation failed: {_renderer_error}")

    except Exception as e:
        _renderer_error = str(e)
        logger.error(f"❌ Renderer validation failed: {_renderer_error}")
        logger.error("Tag generation will not work until this is resolved.")


def _active_renders() -> int:
    return MAX_CONCURRENT_RENDERS - _render_semaphore._value


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Returns service status, capacity information, and renderer readiness.
    Returns HTTP 503 if renderer validation failed on startup.
    """
    if not _renderer_ready:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "timestamp": datetime.utcnow().isoformat(),
                "active_renders": _active_renders(),
                "max_concurrent": MAX_CONCURRENT_RENDERS,
                "renderer_ready": False,
                "renderer_error": _renderer_error,
                "message": "Tag service is unhealthy - renderer not available"
            }
        )

    renderer = get_renderer()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        active_renders=_active_renders(),
        max_concurrent=MAX_CONCURRENT_RENDERS,
        renderer_ready=True,
        renderer_error=None,
        font_family=renderer.fonts.family,
        layout_mode=renderer.layout_mode,
    )


# ============================================================================
# Tag Generation Endpoint
# ============================================================================

@app.post("/api/generate-pdf")
async def generate_pdf(request: TagPDFRequest):
    """
    Render a price tag to PDF.

    Args:
        request: Tag field values (productName and sku required)

    Returns:
        StreamingResponse with PDF binary data

    Raises:
        HTTPException: 400 for missing fields, 500 for rendering failures, 503 for overload
    """
    # Validate input before any rendering work
    try:
        tag = request.to_tag_request()
    except TagValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # Check capacity
    if _render_semaphore._value <= 0:
        logger.warning("Tag service overloaded, rejecting request")
        raise HTTPException(
            status_code=503,
            detail="Service overloaded. Too many concurrent tag renders."
        )

    async with _render_semaphore:
        try:
            pdf_bytes = await asyncio.to_thread(render_tag, tag)
        except RenderError as e:
            logger.error(f"Tag rendering failed for sku={tag.sku!r}: {e}")
            raise HTTPException(status_code=500, detail=RENDER_FAILED_MESSAGE)
        except Exception as e:
            logger.exception(f"Unexpected error rendering sku={tag.sku!r}: {e}")
            raise HTTPException(status_code=500, detail=RENDER_FAILED_MESSAGE)

    filename = build_tag_filename(settings.filename_prefix, tag.sku)
    logger.info(f"Tag PDF generation completed: {filename}")

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type='application/pdf',
        headers={
            'Content-Disposition': f'attachment; filename="{filename}"'
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tag_service.app:app", host="0.0.0.0", port=int(os.getenv("PORT", 8001)))
