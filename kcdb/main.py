"""FastAPI application for decoding KiCad footprints."""
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import DEFAULT_HOST, DEFAULT_PORT, LOG_LEVEL, MAX_DOCUMENT_BYTES
from .mod import FootprintError, Module, decode_text

logger = logging.getLogger(__name__)

app = FastAPI(title="kcdb footprint decoder", version="0.1.0")

# Copper sides reported by the summary endpoint
COPPER_SIDES = ["F.Cu", "B.Cu"]


class DecodeRequest(BaseModel):
    """Request model carrying the text of one .kicad_mod document."""
    content: str


class DecodeResponse(BaseModel):
    """Response model for a decode attempt."""
    success: bool
    module: Optional[dict[str, Any]] = None
    error_type: str = ""
    message: str = ""


class SummaryResponse(BaseModel):
    """Response model for footprint summaries."""
    success: bool
    name: str = ""
    layer: str = ""
    counts: dict[str, int] = {}
    pads_per_side: dict[str, int] = {}
    error_type: str = ""
    message: str = ""


def _decode_request(request: DecodeRequest) -> Module:
    """Decode the request body, rejecting oversized documents."""
    size = len(request.content.encode("utf-8"))
    if size > MAX_DOCUMENT_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Document is {size} bytes, limit is {MAX_DOCUMENT_BYTES}",
        )
    return decode_text(request.content)


@app.post("/api/decode", response_model=DecodeResponse)
async def decode_footprint(request: DecodeRequest):
    """
    Decode a footprint document into its JSON model.

    Malformed documents are reported with success=False and the error type,
    never as a partially filled module.
    """
    try:
        module = _decode_request(request)
    except FootprintError as exc:
        logger.warning("Rejected footprint: %s", exc.message)
        return DecodeResponse(
            success=False, error_type=type(exc).__name__, message=exc.message
        )

    return DecodeResponse(
        success=True,
        module=module.to_dict(),
        message=f"Decoded module {module.name}",
    )


@app.post("/api/decode/summary", response_model=SummaryResponse)
async def summarize_footprint(request: DecodeRequest):
    """Return record counts and pads per copper side for a footprint."""
    try:
        module = _decode_request(request)
    except FootprintError as exc:
        logger.warning("Rejected footprint: %s", exc.message)
        return SummaryResponse(
            success=False, error_type=type(exc).__name__, message=exc.message
        )

    return SummaryResponse(
        success=True,
        name=module.name,
        layer=module.layer,
        counts={
            "lines": len(module.lines),
            "arcs": len(module.arcs),
            "circles": len(module.circles),
            "polygons": len(module.polygons),
            "texts": len(module.texts),
            "pads": len(module.pads),
        },
        pads_per_side={side: len(module.pads_on_layer(side)) for side in COPPER_SIDES},
    )


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=LOG_LEVEL)
    uvicorn.run(app, host=DEFAULT_HOST, port=DEFAULT_PORT)
