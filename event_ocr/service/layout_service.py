from __future__ import annotations

from typing import List

from event_ocr.domain.ports.Layout_analyzer import Layout_analyzer
from event_ocr.domain.schemas.geometry import BoundingBox, TextBlock, TextLine
from event_ocr.domain.schemas.ocr_data import OCRData


class LayoutService(Layout_analyzer):
    """Very simple layout builder.

    Maps each line of line-level OCR output (RapidOCR, Tesseract and the like)
    to its own `TextBlock`, preserving the bbox. Negative coordinates produced
    by engines that overshoot the image edge are clamped to 0.
    """

    def blocks_from_ocr(self, data: OCRData, page: int = 1) -> List[TextBlock]:
        pages = [p for p in data.pages if p.num == page]
        if not pages:
            return []
        blocks: List[TextBlock] = []
        for line in pages[0].lines:
            text = (line.text or "").strip()
            if not text:
                continue
            x0, y0, x1, y1 = (max(0, int(v)) for v in line.bbox)
            bbox = BoundingBox.from_bbox([x0, y0, max(x0, x1), max(y0, y1)])
            blocks.append(TextBlock(text=text, bounding_box=bbox, lines=[TextLine(text=text)]))
        return blocks
