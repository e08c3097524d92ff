from abc import ABC, abstractmethod
from typing import Sequence

from event_ocr.domain.schemas.event_data import RawEventData
from event_ocr.domain.schemas.geometry import TextBlock


class Event_parser_provider(ABC):
    @abstractmethod
    def parse(self, blocks: Sequence[TextBlock]) -> RawEventData:
        """Extract event fields from the text blocks of one image.

        Implementations should use regex/geometry heuristics to fill the
        RawEventData fields (title, date, time, location, description) and
        leave a field None when nothing plausible is found.
        """
        pass
