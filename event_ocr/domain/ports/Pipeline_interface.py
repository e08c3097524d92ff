from abc import ABC, abstractmethod

from event_ocr.domain.schemas.input_data import ExtractionInput
from event_ocr.domain.schemas.result_data import EventResultData


class Pipeline_interface(ABC):
    @abstractmethod
    def run(self, input_data: ExtractionInput) -> EventResultData:
        pass
