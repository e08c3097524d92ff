from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from event_ocr.domain.schemas.event_data import StructuredDateTime
from event_ocr.domain.schemas.input_data import ExtractionInput, NormalizeInput, OCRExtractionInput
from event_ocr.domain.schemas.result_data import EventResultData
from event_ocr.service.layout_service import LayoutService
from event_ocr.service.pipeline_service import PipelineService


router = APIRouter()


def _pipeline(request: Request) -> PipelineService:
    # Use pre-initialized pipeline from app state when available
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        pipeline = PipelineService()
    return pipeline


def _run(pipeline: PipelineService, input_data: ExtractionInput) -> EventResultData:
    try:
        return pipeline.run(input_data)
    except HTTPException:
        raise
    except Exception as e:
        # Keep message short for client; details are in server logs
        raise HTTPException(status_code=500, detail=f"processing failed: {e}") from e


@router.post("/extract", summary="Extract event fields from OCR text blocks", response_model=EventResultData)
def extract(request: Request, payload: ExtractionInput) -> EventResultData:
    return _run(_pipeline(request), payload)


@router.post(
    "/extract/ocr",
    summary="Extract event fields from line-level OCR output",
    response_model=EventResultData,
)
def extract_ocr(request: Request, payload: OCRExtractionInput) -> EventResultData:
    if not any(p.num == payload.page for p in payload.ocr.pages):
        raise HTTPException(status_code=404, detail=f"page {payload.page} not present in OCR data")
    blocks = LayoutService().blocks_from_ocr(payload.ocr, page=payload.page)
    return _run(_pipeline(request), ExtractionInput(blocks=blocks, context=payload.context))


@router.post(
    "/normalize",
    summary="Normalize a date and optional time phrase",
    response_model=Optional[StructuredDateTime],
)
def normalize(request: Request, payload: NormalizeInput) -> Optional[StructuredDateTime]:
    pipeline = _pipeline(request)
    try:
        return pipeline.normalizer.normalize(payload.date, payload.time, now=payload.reference_time)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"normalization failed: {e}") from e
