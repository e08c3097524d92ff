from abc import ABC, abstractmethod
from typing import List

from event_ocr.domain.schemas.geometry import TextBlock
from event_ocr.domain.schemas.ocr_data import OCRData


class Layout_analyzer(ABC):
    @abstractmethod
    def blocks_from_ocr(self, data: OCRData, page: int = 1) -> List[TextBlock]:
        pass
