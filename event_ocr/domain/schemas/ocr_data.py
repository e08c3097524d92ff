from typing import List, Optional

from pydantic import BaseModel, Field


class OCRLine(BaseModel):
    text: str
    bbox: List[int] = Field(..., min_length=4, max_length=4)
    conf: float = Field(default=1.0, ge=0.0, le=1.0)


class OCRPage(BaseModel):
    num: int
    width: Optional[int] = None
    height: Optional[int] = None
    rotation: int = 0
    lines: List[OCRLine] = Field(default_factory=list)


class OCRData(BaseModel):
    language: Optional[str] = None
    pages: List[OCRPage] = Field(default_factory=list)
