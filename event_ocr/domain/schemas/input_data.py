from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .geometry import TextBlock
from .ocr_data import OCRData


class RequestContext(BaseModel):
    """Request-scoped metadata propagated through the pipeline."""

    request_id: Optional[str] = None
    # Reference "now" for default year/month; the wall clock is used when absent.
    reference_time: Optional[datetime] = None


class ExtractionInput(BaseModel):
    """Blocks of one image, in the order the OCR collaborator produced them."""

    blocks: List[TextBlock] = Field(default_factory=list)
    context: RequestContext = Field(default_factory=RequestContext)


class OCRExtractionInput(BaseModel):
    """Line-level OCR output to be adapted into blocks before extraction."""

    ocr: OCRData
    page: int = Field(default=1, ge=1)
    context: RequestContext = Field(default_factory=RequestContext)


class NormalizeInput(BaseModel):
    date: Optional[str] = None
    time: Optional[str] = None
    reference_time: Optional[datetime] = None
