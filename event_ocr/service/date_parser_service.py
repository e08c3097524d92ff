from __future__ import annotations

import re
from datetime import date
from typing import Callable, List, Optional, Tuple

from event_ocr.domain.schemas.event_data import DateComponents
from event_ocr.lib.logger import get_logger


MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

ISO_RE = re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})")
NUMERIC_RE = re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})")
DAY_MONTH_RE = re.compile(r"(\d{1,2})(?:st|nd|rd|th)?\s+(\w+)(?:,?\s+(\d{4}))?", re.I)
MONTH_DAY_RE = re.compile(r"(\w+)\s+(\d{1,2})(?:st|nd|rd|th)?(?:,?\s+(\d{4}))?", re.I)
ORDINAL_RE = re.compile(r"^(\d{1,2})(?:st|nd|rd|th)$", re.I)


def month_number(name: str) -> Optional[int]:
    return MONTHS.get(name.lower())


def _components(year: int, month: int, day: int) -> Optional[DateComponents]:
    try:
        date(year, month, day)
    except ValueError:
        return None
    return DateComponents(year=year, month=month, day=day)


class DateParserService:
    """Turn an isolated date phrase into year/month/day.

    Formats are tried in a fixed order and the first one yielding a real
    calendar date wins. A missing year falls back to `default_year`; a bare
    ordinal also takes its month from `today`.
    """

    def __init__(self) -> None:
        self.logger = get_logger("normalize.date")

    def parse(
        self, phrase: str, default_year: int, today: Optional[date] = None
    ) -> Optional[DateComponents]:
        text = phrase.strip()
        today = today or date.today()

        parsers: List[Tuple[str, Callable[[], Optional[DateComponents]]]] = [
            ("iso", lambda: self._iso(text)),
            ("numeric", lambda: self._numeric(text)),
            ("day_month", lambda: self._day_month(text, default_year)),
            ("month_day", lambda: self._month_day(text, default_year)),
            ("ordinal", lambda: self._ordinal(text, default_year, today)),
        ]
        for name, parser in parsers:
            found = parser()
            if found is not None:
                self.logger.debug("date %r parsed as %s: %s", phrase, name, found)
                return found
        self.logger.debug("date %r not understood", phrase)
        return None

    def _iso(self, text: str) -> Optional[DateComponents]:
        m = ISO_RE.search(text)
        if not m:
            return None
        year, month, day = (int(g) for g in m.groups())
        return _components(year, month, day)

    def _numeric(self, text: str) -> Optional[DateComponents]:
        m = NUMERIC_RE.search(text)
        if not m:
            return None
        month, day, raw_year = m.groups()
        year = 2000 + int(raw_year) if len(raw_year) == 2 else int(raw_year)
        return _components(year, int(month), int(day))

    def _day_month(self, text: str, default_year: int) -> Optional[DateComponents]:
        m = DAY_MONTH_RE.search(text)
        if not m:
            return None
        month = month_number(m.group(2))
        if month is None:
            return None
        year = int(m.group(3)) if m.group(3) else default_year
        return _components(year, month, int(m.group(1)))

    def _month_day(self, text: str, default_year: int) -> Optional[DateComponents]:
        m = MONTH_DAY_RE.search(text)
        if not m:
            return None
        month = month_number(m.group(1))
        if month is None:
            return None
        year = int(m.group(3)) if m.group(3) else default_year
        return _components(year, month, int(m.group(2)))

    def _ordinal(self, text: str, default_year: int, today: date) -> Optional[DateComponents]:
        m = ORDINAL_RE.search(text)
        if not m:
            return None
        return _components(default_year, today.month, int(m.group(1)))
