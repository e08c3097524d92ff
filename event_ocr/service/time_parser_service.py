from __future__ import annotations

import re
from typing import Optional, Tuple

from event_ocr.domain.schemas.event_data import TimeComponents
from event_ocr.lib.logger import get_logger


RANGE_RE = re.compile(
    r"(\d{1,2})(?::(\d{2}))?\s*(AM|PM)?\s*(?:-|to)\s*(\d{1,2}):(\d{2})\s*(AM|PM)?", re.I
)
SINGLE_RE = re.compile(r"(\d{1,2})(?::(\d{1,2}))?\s*(AM|PM)", re.I)


def to_24_hour(hour: int, minute: int, meridiem: Optional[str]) -> Tuple[int, int]:
    """12 AM is midnight, 12 PM is noon; no designator leaves the hour as is."""
    marker = (meridiem or "").upper()
    if marker == "PM" and hour != 12:
        hour += 12
    elif marker == "AM" and hour == 12:
        hour = 0
    return hour, minute


def _valid(hour: int, minute: int) -> bool:
    return 0 <= hour <= 23 and 0 <= minute <= 59


class TimeParserService:
    def __init__(self) -> None:
        self.logger = get_logger("normalize.time")

    def parse(self, phrase: str) -> Optional[TimeComponents]:
        """Parse "9:00 AM", "3PM" or a range such as "9 - 11:30 PM".

        In a range the start borrows the end's AM/PM when it has none.
        Returns None when nothing matches or the clock values are out of range.
        """
        text = phrase.strip()

        m = RANGE_RE.search(text)
        if m:
            start_marker = m.group(3) or m.group(6)
            start = to_24_hour(int(m.group(1)), int(m.group(2) or 0), start_marker)
            end = to_24_hour(int(m.group(4)), int(m.group(5)), m.group(6))
            if not (_valid(*start) and _valid(*end)):
                self.logger.debug("time range %r out of clock range", phrase)
                return None
            return TimeComponents(
                start_hour=start[0], start_minute=start[1], end_hour=end[0], end_minute=end[1]
            )

        m = SINGLE_RE.search(text)
        if m:
            hour, minute = to_24_hour(int(m.group(1)), int(m.group(2) or 0), m.group(3))
            if not _valid(hour, minute):
                self.logger.debug("time %r out of clock range", phrase)
                return None
            return TimeComponents(start_hour=hour, start_minute=minute)

        self.logger.debug("time %r not understood", phrase)
        return None
