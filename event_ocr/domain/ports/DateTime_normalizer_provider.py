from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from event_ocr.domain.schemas.event_data import StructuredDateTime


class DateTime_normalizer_provider(ABC):
    @abstractmethod
    def normalize(
        self, date_str: Optional[str], time_str: Optional[str], now: Optional[datetime] = None
    ) -> Optional[StructuredDateTime]:
        """Resolve extracted date/time phrases into calendar-ready values.

        Implementations return None when there is no usable date; an
        unusable time degrades to an all-day result rather than failing.
        """
        pass
